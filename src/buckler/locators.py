# src/buckler/locators.py
"""
Field locators for the Buckler profile markup.

The site ships hashed CSS-module class names such as
`winning_rate_name__a1b2c`, so fields are found by partial class match.
Extraction only talks to the FieldLocator interface; a markup change needs
a new locator, not a new extractor.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag


class ViewKind(Enum):
    WIN_RATE = "win_rate"
    LEAGUE_POINT = "league_point"
    MASTER_RATE = "master_rate"
    MATCHUP = "matchup"


class FieldLocator(ABC):
    """Finds view fields by semantic role."""

    @abstractmethod
    def container(self, soup: BeautifulSoup, kind: ViewKind) -> Optional[Tag]:
        ...

    @abstractmethod
    def items(self, container: Tag) -> List[Tag]:
        ...

    @abstractmethod
    def name_field(self, item: Tag, kind: ViewKind) -> Optional[Tag]:
        ...

    @abstractmethod
    def metric_field(self, item: Tag, kind: ViewKind) -> Optional[Tag]:
        ...

    @abstractmethod
    def bar_field(self, item: Tag, kind: ViewKind) -> Optional[Tag]:
        ...

    @abstractmethod
    def icon_field(self, item: Tag) -> Optional[Tag]:
        ...


class BucklerLocator(FieldLocator):
    """Locator for the current Buckler's Boot Camp play page."""

    CONTAINER_TOKENS: Dict[ViewKind, str] = {
        ViewKind.WIN_RATE: "winning_rate",
        ViewKind.LEAGUE_POINT: "league_point",
        ViewKind.MASTER_RATE: "master_rate",
        ViewKind.MATCHUP: "winning_rate",
    }
    # The master rate panel reuses the league point name class.
    NAME_TOKENS: Dict[ViewKind, str] = {
        ViewKind.WIN_RATE: "winning_rate_name",
        ViewKind.LEAGUE_POINT: "league_point_name",
        ViewKind.MASTER_RATE: "league_point_name",
        ViewKind.MATCHUP: "winning_rate_name",
    }
    METRIC_TOKENS: Dict[ViewKind, str] = {
        ViewKind.WIN_RATE: "winning_rate_rate",
        ViewKind.LEAGUE_POINT: "league_point_lp",
        ViewKind.MASTER_RATE: "league_point_mr",
        ViewKind.MATCHUP: "winning_rate_rate",
    }
    BAR_TOKEN = "winning_rate_graf"

    def container(self, soup: BeautifulSoup, kind: ViewKind) -> Optional[Tag]:
        return soup.select_one(f'article[class*="{self.CONTAINER_TOKENS[kind]}"]')

    def items(self, container: Tag) -> List[Tag]:
        return container.select("li")

    def name_field(self, item: Tag, kind: ViewKind) -> Optional[Tag]:
        return item.select_one(f'[class*="{self.NAME_TOKENS[kind]}"]')

    def metric_field(self, item: Tag, kind: ViewKind) -> Optional[Tag]:
        return item.select_one(f'[class*="{self.METRIC_TOKENS[kind]}"]')

    def bar_field(self, item: Tag, kind: ViewKind) -> Optional[Tag]:
        return item.select_one(f'[class*="{self.BAR_TOKEN}"]')

    def icon_field(self, item: Tag) -> Optional[Tag]:
        return item.select_one("img[src]")
