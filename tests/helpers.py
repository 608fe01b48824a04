from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from selenium.common.exceptions import InvalidSelectorException, NoSuchElementException

from locator_healing.core.locator import Locator
from locator_healing.core.strategies import SemanticFinder, VisualFinder
from locator_healing.reporting.reporter import HealingReporter


@dataclass(eq=False)
class FakeElement:
    label: str
    clicks: int = 0
    typed: list[str] = field(default_factory=list)

    def click(self) -> None:
        self.clicks += 1

    def clear(self) -> None:
        self.typed.clear()

    def send_keys(self, value: str) -> None:
        self.typed.append(value)


class FakeDriver:
    """Resolves locators from a dict keyed by ``Locator.to_selenium()``."""

    def __init__(self, elements: dict[Locator, FakeElement] | None = None, invalid: set[Locator] | None = None):
        self.elements = {locator.to_selenium(): element for locator, element in (elements or {}).items()}
        self.invalid = {locator.to_selenium() for locator in (invalid or set())}
        self.lookups: list[tuple[str, str]] = []
        self.page_source = "<html><body></body></html>"
        self.screenshots: list[str] = []

    def add(self, locator: Locator, element: FakeElement) -> None:
        self.elements[locator.to_selenium()] = element

    def find_element(self, by: str, value: str):
        self.lookups.append((by, value))
        if (by, value) in self.invalid:
            raise InvalidSelectorException(f"invalid selector: {value}")
        try:
            return self.elements[(by, value)]
        except KeyError:
            raise NoSuchElementException(f"no such element: {by}={value}") from None

    def find_elements(self, by: str, value: str):
        try:
            return [self.find_element(by, value)]
        except NoSuchElementException:
            return []

    def save_screenshot(self, path: str) -> bool:
        self.screenshots.append(path)
        return True


class CountingHistory:
    """Wraps a history and counts calls to it."""

    def __init__(self, history) -> None:
        self.history = history
        self.calls = Counter()

    def lookup(self, original):
        self.calls["lookup"] += 1
        return self.history.lookup(original)

    def remember(self, original, successful):
        self.calls["remember"] += 1
        self.history.remember(original, successful)


class CountingGenerator:
    def __init__(self, generator) -> None:
        self.generator = generator
        self.calls = 0

    def __call__(self, original, description):
        self.calls += 1
        return self.generator(original, description)


class StubSemanticFinder(SemanticFinder):
    def __init__(self, element=None, error: Exception | None = None) -> None:
        self.element = element
        self.error = error
        self.calls: list[str] = []

    def find_element(self, driver, description: str):
        self.calls.append(description)
        if self.error is not None:
            raise self.error
        if self.element is None:
            raise NoSuchElementException(f"nothing matches {description!r}")
        return self.element


class StubVisualFinder(VisualFinder):
    def __init__(self, element=None, error: Exception | None = None) -> None:
        self.element = element
        self.error = error
        self.calls: list[str | None] = []

    def find_element(self, driver, description: str | None):
        self.calls.append(description)
        if self.error is not None:
            raise self.error
        if self.element is None:
            raise NoSuchElementException("no visual match")
        return self.element


class RecordingReporter(HealingReporter):
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def log_info(self, message: str) -> None:
        self.events.append(("info", message))

    def log_warning(self, message: str) -> None:
        self.events.append(("warning", message))

    def log_success(self, message: str) -> None:
        self.events.append(("success", message))


class BrokenReporter(HealingReporter):
    def log_info(self, message: str) -> None:
        raise RuntimeError("sink is down")

    def log_warning(self, message: str) -> None:
        raise RuntimeError("sink is down")

    def log_success(self, message: str) -> None:
        raise RuntimeError("sink is down")
