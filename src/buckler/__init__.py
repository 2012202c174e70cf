# src/buckler/__init__.py
"""
Street Fighter 6 Buckler's Boot Camp scraper.

Playwright drives an authenticated profile session; BeautifulSoup reads the
rendered panels; per-character rows from three panels are merged by name.
"""

from .cache import ResultCache
from .config import Settings
from .errors import (
    BucklerError,
    ClientInputError,
    ConfigurationError,
    NavigationTimeoutError,
    SearchUnavailableError,
    UnexpectedScrapeError,
)
from .extractor import ViewExtractor, absolute_icon_url
from .locators import BucklerLocator, FieldLocator, ViewKind
from .merger import join
from .names import matches, normalize, same_key
from .navigator import NavState, ViewNavigator
from .pipeline import BucklerScraper
from .rankings import character_icon_path, rank_matchups
from .records import MatchupRecord, MergedCharacterStat, PlayerSearchResult, RawRecord
from .selector import TargetSelector
from .session import BucklerSession, parse_cookie_string

__all__ = [
    'BucklerScraper',
    'BucklerSession',
    'parse_cookie_string',
    'Settings',
    'ResultCache',
    'ViewExtractor',
    'absolute_icon_url',
    'FieldLocator',
    'BucklerLocator',
    'ViewKind',
    'ViewNavigator',
    'NavState',
    'TargetSelector',
    'join',
    'normalize',
    'matches',
    'same_key',
    'rank_matchups',
    'character_icon_path',
    'RawRecord',
    'MergedCharacterStat',
    'MatchupRecord',
    'PlayerSearchResult',
    'BucklerError',
    'ClientInputError',
    'ConfigurationError',
    'NavigationTimeoutError',
    'SearchUnavailableError',
    'UnexpectedScrapeError',
]
