from __future__ import annotations

from locator_healing.core.exceptions import SelectorValidationError
from locator_healing.core.locator import Locator


def infer_locator(selector: str) -> Locator:
    stripped = selector.strip()
    if stripped.startswith("/") or stripped.startswith("("):
        return Locator.xpath(stripped)
    return Locator.css(stripped)


def parse_selector_response(response: str) -> Locator:
    selector = response.strip()
    if not selector:
        raise SelectorValidationError("LLM returned an empty selector")
    if "\n" in selector or "\r" in selector:
        raise SelectorValidationError("LLM returned a multiline selector")
    if "```" in selector:
        raise SelectorValidationError("LLM returned markdown instead of a selector")
    return infer_locator(selector)
