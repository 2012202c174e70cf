# src/buckler/records.py
"""Record types produced by extraction and merging."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .rankings import character_icon_path


@dataclass
class RawRecord:
    """One row pulled out of a single view."""

    raw_name: str
    primary_metric: str
    aux_metric: Optional[str] = None
    icon_ref: Optional[str] = None


@dataclass
class MergedCharacterStat:
    name: str
    win_rate: str
    league_points: str
    master_rate: str
    icon_ref: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "winRate": self.win_rate,
            "leaguePoints": self.league_points,
            "masterRate": self.master_rate,
            "iconRef": self.icon_ref,
            "iconPath": character_icon_path(self.name),
        }


@dataclass
class MatchupRecord:
    opponent_name: str
    match_count: str
    win_rate_percent: str
    icon_ref: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "opponentName": self.opponent_name,
            "matchCount": self.match_count,
            "winRatePercent": self.win_rate_percent,
            "iconRef": self.icon_ref,
            "iconPath": character_icon_path(self.opponent_name),
        }


@dataclass
class PlayerSearchResult:
    name: str
    user_code: str
    info: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "userCode": self.user_code, "info": self.info}
