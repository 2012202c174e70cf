# src/buckler/rankings.py
"""
Matchup rankings and icon asset naming shared with the front-end.
"""

import re
from typing import List, Sequence, Tuple

CHARACTER_ICON_DIR = "/characters"


def character_icon_path(name: str) -> str:
    """Local icon path: lower-cased name, whitespace removed, .png."""
    if not name:
        return ""
    file_name = re.sub(r"\s+", "", name).lower()
    return f"{CHARACTER_ICON_DIR}/{file_name}.png"


def parse_count(count_str: str) -> int:
    """Parse a battle count like '12戦' -> 12."""
    clean = re.sub(r"[^0-9]", "", count_str or "")
    if clean == "":
        return 0
    return int(clean)


def parse_rate(rate_str: str) -> float:
    """Parse '55.2%' -> 55.2; anything unparsable is 0.0."""
    match = re.search(r"\d+(?:\.\d+)?", rate_str or "")
    if not match:
        return 0.0
    return float(match.group(0))


def rank_matchups(matchups: Sequence, limit: int = 3) -> Tuple[List, List]:
    """
    Split matchups into best and worst by win rate.

    Opponents never played (zero count) are excluded from both lists.
    Sorting is stable so ties keep page order.

    Returns:
        (best, worst): best sorted by descending rate, worst by ascending
        rate, each holding at most `limit` entries.
    """
    played = [m for m in matchups if parse_count(m.match_count) > 0]
    if not played:
        return ([], [])

    best = sorted(played, key=lambda m: parse_rate(m.win_rate_percent), reverse=True)[:limit]
    worst = sorted(played, key=lambda m: parse_rate(m.win_rate_percent))[:limit]
    return (best, worst)
