# src/buckler/navigator.py
"""
Tab switching on the Buckler play page.

The page re-renders panels client-side with no completion event to wait
on, so every interaction is followed by a fixed settle delay. A slow
render can still be missed; the delays are tunable through Settings.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError

from .locators import ViewKind

logger = logging.getLogger(__name__)

# textContent of each element, or None when the element is not rendered.
VISIBLE_TEXTS_JS = "els => els.map(el => el.offsetParent !== null ? (el.textContent || '') : null)"
CLICK_TIMEOUT_MS = 5000


def settle(page, delay_ms: int) -> None:
    """Fixed wait after an interaction; the only synchronization available."""
    if delay_ms > 0:
        page.wait_for_timeout(delay_ms)


def visible_texts(page, selector: str) -> List[Optional[str]]:
    """Text of every element matching `selector`, in document order."""
    return page.eval_on_selector_all(selector, VISIBLE_TEXTS_JS)


def click_first_visible(page, selector: str, predicate: Callable[[str], bool]) -> bool:
    """Click the first visible element whose text satisfies `predicate`."""
    for index, text in enumerate(visible_texts(page, selector)):
        if text is None or not predicate(text):
            continue
        try:
            page.locator(selector).nth(index).click(timeout=CLICK_TIMEOUT_MS)
        except PlaywrightError as exc:
            logger.warning("Click on %s #%d failed: %s", selector, index, exc)
            return False
        return True
    return False


class NavState(Enum):
    LOADED = "loaded"
    SWITCHING = "switching"


class ViewNavigator:
    """Switches the play page between character panels."""

    TAB_LABELS: Dict[ViewKind, str] = {
        ViewKind.WIN_RATE: "キャラクター別勝率",
        ViewKind.LEAGUE_POINT: "キャラクター別リーグポイント",
        ViewKind.MASTER_RATE: "キャラクター別マスターレート",
        ViewKind.MATCHUP: "キャラクター別対戦数",
    }
    TAB_SELECTOR = "li, div, span, a, p"

    def __init__(self, page, settle_ms: int = 3000, initial_view: ViewKind = ViewKind.WIN_RATE):
        self.page = page
        self.settle_ms = settle_ms
        self.state = NavState.LOADED
        self.view = initial_view

    def switch_to(self, kind: ViewKind) -> bool:
        """
        Click the tab for `kind` and wait for the panel to render.

        Returns False and keeps the current view when the tab label is not
        on screen. Nothing is retried.
        """
        label = self.TAB_LABELS[kind]
        if not click_first_visible(self.page, self.TAB_SELECTOR, lambda text: text.strip() == label):
            logger.warning("Tab '%s' not found; staying on %s", label, self.view.value)
            return False

        self.state = NavState.SWITCHING
        settle(self.page, self.settle_ms)
        self.view = kind
        self.state = NavState.LOADED
        logger.info("Switched to %s view", kind.value)
        return True
