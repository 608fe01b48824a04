from __future__ import annotations

import re

from locator_healing.core.locator import Locator, LocatorKind

TEST_ID_ATTRIBUTE = "data-test-id"

_ID_PREDICATE = re.compile(r"""@id\s*=\s*(['"])(.*?)\1""")
_TEXT_PREDICATE = re.compile(r"""text\(\)\s*=\s*(['"])(.*?)\1""")
_DESCRIPTION_TEMPLATES = (
    "//*[contains(text(), {literal})]",
    "//*[contains(@aria-label, {literal})]",
    "//*[contains(@placeholder, {literal})]",
)


def generate_alternatives(original: Locator, description: str | None = None) -> list[Locator]:
    """Derives candidate locators for a locator that no longer resolves.

    Structural candidates for the original locator kind come first, followed
    by candidates that match the free-text description. The result is
    deterministic and may be empty.
    """

    candidates: list[Locator] = []
    if original.kind is LocatorKind.ID:
        candidates.extend(_from_id(original.value))
    elif original.kind is LocatorKind.XPATH:
        candidates.extend(_from_xpath(original.value))
    elif original.kind is LocatorKind.CSS:
        candidates.extend(_from_css(original.value))

    if description and description.strip():
        literal = xpath_literal(description)
        for template in _DESCRIPTION_TEMPLATES:
            candidates.append(Locator.xpath(template.format(literal=literal)))
    return candidates


def xpath_literal(text: str) -> str:
    """Quotes ``text`` as an XPath 1.0 string literal."""

    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = []
    for index, chunk in enumerate(text.split("'")):
        if index:
            parts.append('"\'"')
        if chunk:
            parts.append(f"'{chunk}'")
    return f"concat({', '.join(parts)})"


def _from_id(value: str) -> list[Locator]:
    if not value:
        return []
    return [
        Locator.name(value),
        Locator.class_name(value),
        Locator.attribute_contains(TEST_ID_ATTRIBUTE, value),
    ]


def _from_xpath(expression: str) -> list[Locator]:
    candidates: list[Locator] = []
    id_match = _ID_PREDICATE.search(expression)
    if id_match and id_match.group(2):
        candidates.append(Locator.id(id_match.group(2)))
    text_match = _TEXT_PREDICATE.search(expression)
    if text_match and text_match.group(2):
        text = text_match.group(2)
        candidates.append(Locator.link_text(text))
        candidates.append(Locator.partial_link_text(text))
    return candidates


def _from_css(selector: str) -> list[Locator]:
    stripped = selector.strip()
    if len(stripped) < 2:
        return []
    if stripped.startswith("#"):
        return [Locator.id(stripped[1:])]
    if stripped.startswith("."):
        return [Locator.class_name(stripped[1:])]
    return []
