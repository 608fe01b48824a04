from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from selenium.webdriver.common.by import By

from locator_healing.core.exceptions import LocatorParseError


class LocatorKind(str, Enum):
    ID = "id"
    NAME = "name"
    CLASS_NAME = "class_name"
    CSS = "css"
    XPATH = "xpath"
    LINK_TEXT = "link_text"
    PARTIAL_LINK_TEXT = "partial_link_text"
    ATTRIBUTE_CONTAINS = "attribute_contains"


_SELENIUM_BY = {
    LocatorKind.ID: By.ID,
    LocatorKind.NAME: By.NAME,
    LocatorKind.CLASS_NAME: By.CLASS_NAME,
    LocatorKind.CSS: By.CSS_SELECTOR,
    LocatorKind.XPATH: By.XPATH,
    LocatorKind.LINK_TEXT: By.LINK_TEXT,
    LocatorKind.PARTIAL_LINK_TEXT: By.PARTIAL_LINK_TEXT,
    LocatorKind.ATTRIBUTE_CONTAINS: By.CSS_SELECTOR,
}


@dataclass(frozen=True, slots=True)
class Locator:
    """Immutable element-selection expression.

    ``attribute`` is only set for ``ATTRIBUTE_CONTAINS`` locators. Equality
    and hashing are structural, so locators can be used directly as keys.
    """

    kind: LocatorKind
    value: str
    attribute: str | None = None

    def __post_init__(self) -> None:
        if self.kind is LocatorKind.ATTRIBUTE_CONTAINS and not self.attribute:
            raise ValueError("attribute_contains locators need an attribute name")
        if self.kind is not LocatorKind.ATTRIBUTE_CONTAINS and self.attribute is not None:
            raise ValueError(f"{self.kind.value} locators do not take an attribute")

    @classmethod
    def id(cls, value: str) -> Locator:
        return cls(LocatorKind.ID, value)

    @classmethod
    def name(cls, value: str) -> Locator:
        return cls(LocatorKind.NAME, value)

    @classmethod
    def class_name(cls, value: str) -> Locator:
        return cls(LocatorKind.CLASS_NAME, value)

    @classmethod
    def css(cls, value: str) -> Locator:
        return cls(LocatorKind.CSS, value)

    @classmethod
    def xpath(cls, value: str) -> Locator:
        return cls(LocatorKind.XPATH, value)

    @classmethod
    def link_text(cls, value: str) -> Locator:
        return cls(LocatorKind.LINK_TEXT, value)

    @classmethod
    def partial_link_text(cls, value: str) -> Locator:
        return cls(LocatorKind.PARTIAL_LINK_TEXT, value)

    @classmethod
    def attribute_contains(cls, attribute: str, value: str) -> Locator:
        return cls(LocatorKind.ATTRIBUTE_CONTAINS, value, attribute)

    @property
    def key(self) -> str:
        """Canonical string form, used as the history key."""

        if self.kind is LocatorKind.ATTRIBUTE_CONTAINS:
            return f"attribute contains: {self.to_selenium()[1]}"
        return f"{self.kind.value.replace('_', ' ')}: {self.value}"

    def to_selenium(self) -> tuple[str, str]:
        by = _SELENIUM_BY[self.kind]
        if self.kind is LocatorKind.ATTRIBUTE_CONTAINS:
            escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
            return by, f'[{self.attribute}*="{escaped}"]'
        return by, self.value

    def short_form(self) -> str:
        if self.kind is LocatorKind.ATTRIBUTE_CONTAINS:
            return f"{self.kind.value}={self.attribute}:{self.value}"
        return f"{self.kind.value}={self.value}"

    @classmethod
    def parse(cls, text: str) -> Locator:
        """Parses ``kind=value`` strings such as ``id=login`` or ``xpath=//a``."""

        kind_name, separator, value = text.partition("=")
        if not separator:
            raise LocatorParseError(f"Locator must look like 'kind=value': {text!r}")
        try:
            kind = LocatorKind(kind_name.strip().lower())
        except ValueError as exc:
            raise LocatorParseError(f"Unknown locator kind: {kind_name.strip()!r}") from exc
        if not value:
            raise LocatorParseError(f"Locator value is empty: {text!r}")
        if kind is LocatorKind.ATTRIBUTE_CONTAINS:
            attribute, colon, contained = value.partition(":")
            if not colon or not attribute or not contained:
                raise LocatorParseError(
                    f"attribute_contains locators look like 'attribute_contains=attr:value': {text!r}"
                )
            return cls.attribute_contains(attribute, contained)
        return cls(kind, value)

    def __str__(self) -> str:
        return self.key
