# src/buckler/merger.py
"""Joins the three character panels into one row per character."""

from typing import List, Optional, Sequence

from .names import same_key
from .records import MergedCharacterStat, RawRecord

NO_LEAGUE_POINTS = "---"
NO_MASTER_RATE = ""


def _first_match(name: str, records: Sequence[RawRecord]) -> Optional[RawRecord]:
    for record in records:
        if same_key(record.raw_name, name):
            return record
    return None


def join(
    win_rate: Sequence[RawRecord],
    league_point: Sequence[RawRecord],
    master_rate: Sequence[RawRecord],
) -> List[MergedCharacterStat]:
    """
    Merge panels on exact name key.

    Win-rate rows decide which characters appear and in what order. League
    points and master rate only fill fields; unmatched fields fall back to
    NO_LEAGUE_POINTS / NO_MASTER_RATE. The league point icon is preferred
    over the win-rate one.
    """
    merged: List[MergedCharacterStat] = []
    for win_item in win_rate:
        lp_match = _first_match(win_item.raw_name, league_point)
        mr_match = _first_match(win_item.raw_name, master_rate)

        icon = (lp_match.icon_ref if lp_match else "") or win_item.icon_ref or ""
        merged.append(MergedCharacterStat(
            name=win_item.raw_name,
            win_rate=win_item.primary_metric,
            league_points=lp_match.primary_metric if lp_match else NO_LEAGUE_POINTS,
            master_rate=mr_match.primary_metric if mr_match else NO_MASTER_RATE,
            icon_ref=icon,
        ))
    return merged
