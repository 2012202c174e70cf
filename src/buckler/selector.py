# src/buckler/selector.py
"""
Character selection on the matchup panel.

Opens the character modal, picks the requested character by fuzzy name
key and presses the confirm button. Abbreviations in the modal differ from
the panels ("J.P." vs "JP"), hence the key matching.
"""

import logging

from playwright.sync_api import Error as PlaywrightError

from .names import matches, normalize
from .navigator import CLICK_TIMEOUT_MS, click_first_visible, settle

logger = logging.getLogger(__name__)


class TargetSelector:
    OPENER_SELECTOR = '[class*="winning_rate_select_character"]'
    CANDIDATE_SELECTOR = "li, span, div"
    CONFIRM_SELECTOR = "button, div, a, span"
    CONFIRM_LABEL = "変更する"

    def __init__(
        self,
        modal_settle_ms: int = 1000,
        pick_settle_ms: int = 500,
        confirm_settle_ms: int = 5000,
    ):
        self.modal_settle_ms = modal_settle_ms
        self.pick_settle_ms = pick_settle_ms
        self.confirm_settle_ms = confirm_settle_ms

    def select(self, page, target_name: str) -> bool:
        """
        Switch the matchup panel to `target_name`.

        Returns:
            True when both the character pick and the confirm click went
            through. On False the panel may still show the default
            character; callers extract whatever is on screen.
        """
        if not self._open_modal(page):
            logger.warning("Character selector not found")
            return False
        settle(page, self.modal_settle_ms)

        target_key = normalize(target_name)
        picked = click_first_visible(
            page,
            self.CANDIDATE_SELECTOR,
            lambda text: matches(normalize(text), target_key),
        )
        if not picked:
            logger.warning("Character '%s' not found in selector modal", target_name)
            return False
        settle(page, self.pick_settle_ms)

        confirmed = click_first_visible(
            page,
            self.CONFIRM_SELECTOR,
            lambda text: text.strip() == self.CONFIRM_LABEL,
        )
        if not confirmed:
            logger.warning("Confirm button '%s' not found", self.CONFIRM_LABEL)
            return False
        settle(page, self.confirm_settle_ms)

        logger.info("Selected character '%s'", target_name)
        return True

    def _open_modal(self, page) -> bool:
        opener = page.locator(self.OPENER_SELECTOR)
        if opener.count() == 0:
            return False
        try:
            opener.first.click(timeout=CLICK_TIMEOUT_MS)
        except PlaywrightError as exc:
            logger.warning("Could not open character selector: %s", exc)
            return False
        return True
