# src/buckler/extractor.py
"""
Heuristic extraction of per-character rows from rendered Buckler views.

Works on `page.content()` snapshots with BeautifulSoup, the same way the
table parsers work on tracker pages: locate a container, walk its rows,
read each field from its dedicated element and fall back to free-text
patterns when the element is missing or holds something unexpected.
"""

import logging
import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag

from .locators import BucklerLocator, FieldLocator, ViewKind
from .names import normalize
from .records import MatchupRecord, PlayerSearchResult, RawRecord

logger = logging.getLogger(__name__)

SITE_ORIGIN = "https://www.streetfighter.com"
AGGREGATE_ROW_KEY = "ALL"

PERCENT_RE = re.compile(r"\d+(?:\.\d+)?%")
COUNT_RE = re.compile(r"\d+戦")
BAR_WIDTH_RE = re.compile(r"width:\s*(\d+(?:\.\d+)?)%")
LP_TEXT_RE = re.compile(r"(\d[\d,]*)\s*LP")
MR_TEXT_RE = re.compile(r"(\d[\d,]*)\s*MR")
DIGITS_RE = re.compile(r"\d")
PROFILE_HREF_RE = re.compile(r"/profile/(\d+)/?$")

# Shown when a field cannot be resolved at all.
DEFAULT_METRICS: Dict[ViewKind, str] = {
    ViewKind.WIN_RATE: "-",
    ViewKind.LEAGUE_POINT: "0",
    ViewKind.MASTER_RATE: "---",
    ViewKind.MATCHUP: "0戦",
}
DEFAULT_MATCHUP_RATE = "---"
SEARCH_INFO_MAX_LEN = 80
SEARCH_RESULT_ANCHORS = "li a[href]"


def absolute_icon_url(src: Optional[str], origin: str = SITE_ORIGIN) -> str:
    """Rewrite root-relative image paths against the site origin."""
    src = (src or "").strip()
    if not src:
        return ""
    if src.startswith("//"):
        return f"https:{src}"
    if src.startswith("/"):
        return f"{origin}{src}"
    return src


def _text(tag: Optional[Tag]) -> str:
    if tag is None:
        return ""
    return tag.get_text(" ", strip=True)


class ViewExtractor:
    """Pulls RawRecord rows out of one rendered view."""

    def __init__(self, locator: Optional[FieldLocator] = None, site_origin: str = SITE_ORIGIN):
        self.locator = locator or BucklerLocator()
        self.site_origin = site_origin

    def extract(self, html: str, kind: ViewKind) -> List[RawRecord]:
        """
        Extract all character rows of `kind` from a page snapshot.

        Args:
            html: Page HTML after the view has settled
            kind: Which panel to read

        Returns:
            Records in page order. Empty when the panel is not on the page;
            a missing panel means "no data", never an error.
        """
        soup = BeautifulSoup(html or "", "html.parser")
        container = self.locator.container(soup, kind)
        if container is None:
            logger.info("No %s container on page", kind.value)
            return []

        records: List[RawRecord] = []
        for item in self.locator.items(container):
            record = self._parse_item(item, kind)
            if record is not None:
                records.append(record)
        logger.debug("Extracted %d %s rows", len(records), kind.value)
        return records

    def extract_matchups(self, html: str) -> List[MatchupRecord]:
        """Matchup breakdown rows for the currently selected character."""
        return [
            MatchupRecord(
                opponent_name=record.raw_name,
                match_count=record.primary_metric,
                win_rate_percent=record.aux_metric or DEFAULT_MATCHUP_RATE,
                icon_ref=record.icon_ref or "",
            )
            for record in self.extract(html, ViewKind.MATCHUP)
        ]

    def extract_search_results(self, html: str) -> List[PlayerSearchResult]:
        """Collect profile links from the fighters search result list."""
        soup = BeautifulSoup(html or "", "html.parser")
        results: List[PlayerSearchResult] = []
        seen = set()

        # Header and nav links to the signed-in user's own profile sit outside
        # the result list.
        for anchor in soup.select(SEARCH_RESULT_ANCHORS):
            match = PROFILE_HREF_RE.search(anchor.get("href", ""))
            if not match:
                continue
            user_code = match.group(1)
            if user_code in seen:
                continue
            seen.add(user_code)

            item = anchor.find_parent("li")
            name = _text(item.select_one('[class*="name"]')) or _text(anchor) or user_code
            full_text = _text(item)
            info = full_text.replace(name, "", 1) if full_text.startswith(name) else full_text
            info = re.sub(r"\s+", " ", info).strip()[:SEARCH_INFO_MAX_LEN]

            results.append(PlayerSearchResult(name=name, user_code=user_code, info=info))
        return results

    # --- Row parsing ---

    def _parse_item(self, item: Tag, kind: ViewKind) -> Optional[RawRecord]:
        name = _text(self.locator.name_field(item, kind))
        if not name or normalize(name) == AGGREGATE_ROW_KEY:
            return None

        full_text = item.get_text(" ", strip=True)
        metric_text = _text(self.locator.metric_field(item, kind))

        aux_metric = None
        if kind == ViewKind.WIN_RATE:
            primary = self._percentage(item, kind, metric_text, full_text)
        elif kind == ViewKind.MATCHUP:
            primary = self._battle_count(metric_text, full_text)
            aux_metric = self._percentage(item, kind, "", full_text) or DEFAULT_MATCHUP_RATE
        elif kind == ViewKind.LEAGUE_POINT:
            primary = self._points(metric_text, full_text, LP_TEXT_RE)
        else:
            primary = self._points(metric_text, full_text, MR_TEXT_RE)

        icon = self.locator.icon_field(item)
        return RawRecord(
            raw_name=name,
            primary_metric=primary or DEFAULT_METRICS[kind],
            aux_metric=aux_metric,
            icon_ref=absolute_icon_url(icon.get("src") if icon is not None else "", self.site_origin),
        )

    def _percentage(self, item: Tag, kind: ViewKind, metric_text: str, full_text: str) -> str:
        if PERCENT_RE.search(metric_text):
            return metric_text
        match = PERCENT_RE.search(full_text)
        if match:
            return match.group(0)
        # Rows without a printed rate still draw a bar sized to it.
        bar = self.locator.bar_field(item, kind)
        if bar is not None:
            width = BAR_WIDTH_RE.search(bar.get("style", ""))
            if width:
                return f"{width.group(1)}%"
        return ""

    @staticmethod
    def _battle_count(metric_text: str, full_text: str) -> str:
        if "戦" in metric_text:
            return metric_text
        match = COUNT_RE.search(full_text)
        return match.group(0) if match else ""

    @staticmethod
    def _points(metric_text: str, full_text: str, text_pattern: re.Pattern) -> str:
        if DIGITS_RE.search(metric_text):
            return metric_text
        match = text_pattern.search(full_text)
        return match.group(1) if match else ""
