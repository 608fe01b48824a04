from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator
from urllib.parse import quote

import pytest
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver import ChromeOptions

from locator_healing.core.finder import HealingFinder
from locator_healing.core.healer import LocatorHealer
from locator_healing.core.locator import Locator
from locator_healing.core.metadata import HealingStrategy

LOGIN_PAGE = """
<html><body>
  <form>
    <input placeholder="Email address" name="email">
    <button class="login-btn" type="submit">Log in</button>
    <a href="#help">Need help?</a>
  </form>
</body></html>
"""


@contextmanager
def managed_driver() -> Iterator[object]:
    options = ChromeOptions()
    options.add_argument("--headless=new")
    try:
        driver = webdriver.Chrome(options=options)
    except WebDriverException as exc:
        pytest.skip(f"WebDriver could not start for chrome: {exc}")
    driver.implicitly_wait(0)
    try:
        driver.get("data:text/html;charset=utf-8," + quote(LOGIN_PAGE))
        yield driver
    finally:
        driver.quit()


@pytest.mark.integration
def test_renamed_button_heals_in_browser(history):
    with managed_driver() as driver:
        healer = LocatorHealer(history)
        outcome = healer.heal(driver, Locator.id("login-btn"))

        assert outcome.strategy is HealingStrategy.ALTERNATIVE
        assert outcome.locator == Locator.class_name("login-btn")
        assert outcome.element.text == "Log in"


@pytest.mark.integration
def test_description_heals_in_browser(history):
    with managed_driver() as driver:
        finder = HealingFinder(driver, LocatorHealer(history))
        assert finder.find(Locator.css("#email"), "Email address").get_attribute("name") == "email"
        assert finder.find(Locator.xpath("//a[@id='help' and text()='Need help?']")).text == "Need help?"
