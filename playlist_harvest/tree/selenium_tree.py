"""
Selenium-backed rendered tree for live browser pages.
"""

from __future__ import annotations

from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from playlist_harvest.tree.base import RenderedElement, RenderedTree

SCROLL_ELEMENT_SCRIPT = (
    "arguments[0].scrollTop = arguments[0].scrollHeight - arguments[0].clientHeight;"
)
SCROLL_VIEWPORT_SCRIPT = "window.scrollTo(0, document.documentElement.scrollHeight);"
CLOSEST_SCRIPT = "return arguments[0].closest(arguments[1]);"
VISIBLE_SCRIPT = "return arguments[0].offsetParent !== null;"
CLICK_SCRIPT = "arguments[0].click();"


class SeleniumElement(RenderedElement):
    def __init__(self, element: WebElement, driver: WebDriver) -> None:
        self.element = element
        self._driver = driver

    def select(self, selector: str) -> list[RenderedElement]:
        return [
            SeleniumElement(found, self._driver)
            for found in self.element.find_elements(By.CSS_SELECTOR, selector)
        ]

    def closest(self, selector: str) -> RenderedElement | None:
        found = self._driver.execute_script(CLOSEST_SCRIPT, self.element, selector)
        return SeleniumElement(found, self._driver) if found is not None else None

    def attribute(self, name: str) -> str | None:
        # get_attribute prefers the DOM property, so href comes back resolved.
        return self.element.get_attribute(name)

    @property
    def text_content(self) -> str:
        return self.element.get_attribute("textContent") or ""

    @property
    def inner_text(self) -> str | None:
        return self.element.get_attribute("innerText")

    def is_visible(self) -> bool:
        return bool(self._driver.execute_script(VISIBLE_SCRIPT, self.element))

    def click(self) -> None:
        self._driver.execute_script(CLICK_SCRIPT, self.element)

    def scroll_to_bottom(self) -> None:
        self._driver.execute_script(SCROLL_ELEMENT_SCRIPT, self.element)


class SeleniumRenderedTree(RenderedTree):
    """
    Rendered tree over the page currently loaded in a WebDriver session.
    """

    def __init__(self, driver: WebDriver) -> None:
        self._driver = driver

    def select(self, selector: str) -> list[RenderedElement]:
        return [
            SeleniumElement(found, self._driver)
            for found in self._driver.find_elements(By.CSS_SELECTOR, selector)
        ]

    @property
    def location(self) -> str:
        return self._driver.current_url

    @property
    def title(self) -> str:
        return self._driver.title or ""

    def scroll_to_bottom(self) -> None:
        self._driver.execute_script(SCROLL_VIEWPORT_SCRIPT)
