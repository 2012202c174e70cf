# tests/helpers.py

import os
from typing import Callable, List, Optional

from src.buckler import Settings


def fixture_path(filename: str) -> str:
    path = os.path.join(os.path.dirname(__file__), "fixtures", filename)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Fixture not found: {filename}")
    return path


def read_fixture(filename: str) -> str:
    with open(fixture_path(filename), "r", encoding="utf-8") as f:
        return f.read()


def make_settings(**overrides) -> Settings:
    """Settings with a dummy cookie and every settle delay disabled."""
    values = dict(
        cookie="buckler_id=abc123; buckler_r_id=x=y",
        navigation_timeout_ms=1000,
        tab_settle_ms=0,
        modal_settle_ms=0,
        pick_settle_ms=0,
        confirm_settle_ms=0,
        search_settle_ms=0,
    )
    values.update(overrides)
    return Settings(**values)


class FakeElement:
    """Stand-in for a DOM element as seen through Playwright."""

    def __init__(
        self,
        tag: str,
        text: str = "",
        classes: str = "",
        visible: bool = True,
        on_click: Optional[Callable] = None,
        attrs: Optional[dict] = None,
    ):
        self.tag = tag
        self.text = text
        self.classes = classes
        self.visible = visible
        self.on_click = on_click
        self.attrs = attrs or {}
        self.clicks = 0
        self.value = ""

    def matches(self, selector: str) -> bool:
        if selector.startswith('[class*="'):
            token = selector[len('[class*="'):-2]
            return token in self.classes
        if selector.startswith("input"):
            return self.tag == "input" and self.attrs.get("type") == "text"
        tags = {part.strip() for part in selector.split(",")}
        return self.tag in tags


class FakeLocator:
    def __init__(self, page: "FakePage", elements: List[FakeElement]):
        self.page = page
        self.elements = elements

    def count(self) -> int:
        return len(self.elements)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.page, [self.elements[index]])

    @property
    def first(self) -> "FakeLocator":
        return self.nth(0)

    def click(self, timeout=None) -> None:
        element = self.elements[0]
        element.clicks += 1
        self.page.clicked.append(element.text)
        self.page.click_timeouts.append(timeout)
        if element.on_click:
            element.on_click(self.page)

    def get_attribute(self, name: str):
        return self.elements[0].attrs.get(name)

    def fill(self, value: str) -> None:
        self.elements[0].value = value
        self.page.filled.append(value)


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self.page = page

    def press(self, key: str) -> None:
        self.page.keys.append(key)
        if key == "Enter" and self.page.on_enter:
            self.page.on_enter(self.page)


class FakePage:
    """Minimal sync Playwright page: a flat element list plus an HTML snapshot."""

    def __init__(self, html: str = "", elements: Optional[List[FakeElement]] = None, goto_error=None):
        self.html = html
        self.elements = elements or []
        self.goto_error = goto_error
        self.visited: List[str] = []
        self.waits: List[int] = []
        self.clicked: List[str] = []
        self.click_timeouts: List[Optional[int]] = []
        self.filled: List[str] = []
        self.keys: List[str] = []
        self.on_enter: Optional[Callable] = None
        self.keyboard = FakeKeyboard(self)

    def goto(self, url: str, wait_until=None, timeout=None) -> None:
        self.visited.append(url)
        if self.goto_error is not None:
            raise self.goto_error

    def content(self) -> str:
        return self.html

    def wait_for_timeout(self, ms: int) -> None:
        self.waits.append(ms)

    def eval_on_selector_all(self, selector: str, script: str):
        return [e.text if e.visible else None for e in self.elements if e.matches(selector)]

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, [e for e in self.elements if e.matches(selector)])


class FakeSessionFactory:
    """Hands out one FakePage and counts opened/released sessions."""

    def __init__(self, page: FakePage):
        self.page = page
        self.opened = 0
        self.closed = 0

    def __call__(self, settings):
        return self

    def __enter__(self):
        self.opened += 1
        return self.page

    def __exit__(self, exc_type, exc, tb):
        self.closed += 1
        return False
