# src/buckler/pipeline.py
"""
End-to-end acquisitions against Buckler's Boot Camp.

Each public method opens its own browser session, runs a fixed sequence of
navigation, tab switches and extractions, and closes the session on every
exit path. Missing panels and missed clicks degrade the result instead of
failing the request; only configuration, input, navigation timeouts and
unexpected errors abort.
"""

import logging
import re
import time
from typing import Callable, List, Optional, Tuple

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from . import merger
from .cache import ResultCache
from .config import Settings
from .errors import (
    BucklerError,
    ClientInputError,
    NavigationTimeoutError,
    SearchUnavailableError,
    UnexpectedScrapeError,
)
from .extractor import ViewExtractor
from .locators import ViewKind
from .navigator import ViewNavigator, settle
from .records import MatchupRecord, MergedCharacterStat, PlayerSearchResult
from .selector import TargetSelector
from .session import BucklerSession

logger = logging.getLogger(__name__)

USER_CODE_RE = re.compile(r"\d+")


def default_session_factory(settings: Settings) -> BucklerSession:
    return BucklerSession(settings.require_cookie(), settings.cookie_domain, headless=settings.headless)


def _require(value: Optional[str], param: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ClientInputError(f"Missing required parameter '{param}'")
    return value


def _require_user_code(user_code: Optional[str]) -> str:
    user_code = _require(user_code, "userCode")
    if not USER_CODE_RE.fullmatch(user_code):
        raise ClientInputError(f"userCode must be numeric, got '{user_code}'")
    return user_code


class BucklerScraper:
    """Browser-driven scraper for one player's Buckler profile."""

    SEARCH_INPUT_SELECTOR = 'input[type="text"]'
    SEARCH_PLACEHOLDER_HINTS = ("ID", "Fighter", "検索")

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_factory: Optional[Callable] = None,
        extractor: Optional[ViewExtractor] = None,
        cache: Optional[ResultCache] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.session_factory = session_factory or default_session_factory
        self.extractor = extractor or ViewExtractor()
        self.cache = cache if cache is not None else ResultCache(self.settings.cache_ttl_seconds)
        self.selector = TargetSelector(
            modal_settle_ms=self.settings.modal_settle_ms,
            pick_settle_ms=self.settings.pick_settle_ms,
            confirm_settle_ms=self.settings.confirm_settle_ms,
        )

    # --- Main entry points ---

    def fetch_character_stats(self, user_code: str) -> List[MergedCharacterStat]:
        """Win rate, league points and master rate for every played character."""
        user_code = _require_user_code(user_code)
        logger.info("Fetching character stats for %s", user_code)
        return self._run(f"Character stats for {user_code}", lambda page: self._character_stats(page, user_code))

    def load_character_stats(self, user_code: str) -> Tuple[List[MergedCharacterStat], str]:
        """Like fetch_character_stats, served from cache when enabled. Returns (rows, source)."""
        user_code = _require_user_code(user_code)
        rows, hit = self.cache.get_or_populate(user_code, lambda: self.fetch_character_stats(user_code))
        return (rows, "cache" if hit else "live")

    def fetch_matchup_breakdown(self, user_code: str, character: str) -> List[MatchupRecord]:
        """Per-opponent battle count and win rate for one of the player's characters."""
        user_code = _require_user_code(user_code)
        character = _require(character, "character")
        logger.info("Fetching matchups for %s - %s", user_code, character)
        return self._run(
            f"Matchups for {user_code}/{character}",
            lambda page: self._matchup_breakdown(page, user_code, character),
        )

    def search_players_by_name(self, name: str) -> List[PlayerSearchResult]:
        """Fighter search by display name; an empty list means no hits."""
        name = _require(name, "name")
        logger.info("Searching players named '%s'", name)
        return self._run(f"Player search for '{name}'", lambda page: self._search_players(page, name))

    # --- Sequences ---

    def _character_stats(self, page, user_code: str) -> List[MergedCharacterStat]:
        self._navigate(page, self.settings.profile_url(user_code))
        navigator = ViewNavigator(page, settle_ms=self.settings.tab_settle_ms)

        logger.info("[1/3] Reading win rates")
        win_rate = self.extractor.extract(page.content(), ViewKind.WIN_RATE)

        logger.info("[2/3] Reading league points")
        if not navigator.switch_to(ViewKind.LEAGUE_POINT):
            logger.warning("League point tab unavailable; reading current view")
        league_point = self.extractor.extract(page.content(), ViewKind.LEAGUE_POINT)

        logger.info("[3/3] Reading master rates")
        master_rate = []
        if navigator.switch_to(ViewKind.MASTER_RATE):
            master_rate = self.extractor.extract(page.content(), ViewKind.MASTER_RATE)
        else:
            logger.warning("Master rate tab unavailable; master rates left empty")

        rows = merger.join(win_rate, league_point, master_rate)
        logger.info(
            "Merged %d characters (win=%d lp=%d mr=%d)",
            len(rows), len(win_rate), len(league_point), len(master_rate),
        )
        return rows

    def _matchup_breakdown(self, page, user_code: str, character: str) -> List[MatchupRecord]:
        self._navigate(page, self.settings.profile_url(user_code))
        navigator = ViewNavigator(page, settle_ms=self.settings.tab_settle_ms)

        if not navigator.switch_to(ViewKind.MATCHUP):
            logger.warning("Matchup tab not found; extracting current view")
        if not self.selector.select(page, character):
            logger.warning("Could not switch to '%s'; matchups may be for the default character", character)

        matchups = self.extractor.extract_matchups(page.content())
        logger.info("Extracted %d matchups", len(matchups))
        return matchups

    def _search_players(self, page, name: str) -> List[PlayerSearchResult]:
        self._navigate(page, self.settings.fighters_url())

        search_input = self._find_search_input(page)
        if search_input is None:
            raise SearchUnavailableError("Search box not found on fighters page")

        # fill() sets the value and fires the input event the page listens for.
        search_input.fill(name)
        page.keyboard.press("Enter")
        settle(page, self.settings.search_settle_ms)

        players = self.extractor.extract_search_results(page.content())
        logger.info("Search for '%s' returned %d players", name, len(players))
        return players

    # --- Internal helpers ---

    def _run(self, description: str, body: Callable):
        self.settings.require_cookie()
        started = time.monotonic()
        try:
            with self.session_factory(self.settings) as page:
                return body(page)
        except BucklerError:
            raise
        except Exception as exc:
            logger.exception("%s failed", description)
            raise UnexpectedScrapeError(f"{description} failed: {exc}") from exc
        finally:
            logger.debug("%s finished in %.1fs", description, time.monotonic() - started)

    def _navigate(self, page, url: str) -> None:
        try:
            page.goto(url, wait_until="networkidle", timeout=self.settings.navigation_timeout_ms)
        except PlaywrightTimeoutError as exc:
            logger.error("Navigation to %s timed out after %dms", url, self.settings.navigation_timeout_ms)
            raise NavigationTimeoutError(f"Timed out loading {url}") from exc

    def _find_search_input(self, page):
        inputs = page.locator(self.SEARCH_INPUT_SELECTOR)
        for index in range(inputs.count()):
            candidate = inputs.nth(index)
            placeholder = candidate.get_attribute("placeholder") or ""
            if any(hint in placeholder for hint in self.SEARCH_PLACEHOLDER_HINTS):
                return candidate
        return None
