from __future__ import annotations

from selenium.common.exceptions import (
    ElementNotInteractableException,
    StaleElementReferenceException,
)


class SafeActions:
    """High-level browser actions routed through the healing finder."""

    def __init__(self, finder) -> None:
        self.finder = finder

    def click(self, element_key: str) -> None:
        element = self.finder.find_element(element_key)
        try:
            element.click()
        except (ElementNotInteractableException, StaleElementReferenceException):
            self.finder.find_element(element_key).click()

    def type(self, element_key: str, value: str, clear_first: bool = True) -> None:
        element = self.finder.find_element(element_key)
        try:
            self._fill(element, value, clear_first)
        except (ElementNotInteractableException, StaleElementReferenceException):
            self._fill(self.finder.find_element(element_key), value, clear_first)

    @staticmethod
    def _fill(element, value: str, clear_first: bool) -> None:
        if clear_first:
            element.clear()
        element.send_keys(value)
