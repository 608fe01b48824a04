from __future__ import annotations

from selenium.common.exceptions import NoSuchElementException

from locator_healing.config.schema import TestSuiteConfig
from locator_healing.core.exceptions import ElementNotHealedError
from locator_healing.core.locator import Locator


class HealingFinder:
    """Centralized element lookup with automatic healing."""

    def __init__(self, driver, healer, suite_config: TestSuiteConfig | None = None) -> None:
        self.driver = driver
        self.healer = healer
        self.suite_config = suite_config

    def find(self, locator: Locator, description: str | None = None):
        try:
            return self.driver.find_element(*locator.to_selenium())
        except NoSuchElementException:
            outcome = self.healer.heal(self.driver, locator, description)
        if not outcome.resolved:
            raise ElementNotHealedError(locator, description)
        return outcome.element

    def find_element(self, element_key: str):
        if self.suite_config is None:
            raise KeyError(f"No suite configuration to look up element key: {element_key}")
        definition = self.suite_config.get_element(element_key)
        return self.find(definition.to_locator(), definition.description)
