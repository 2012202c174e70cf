# src/buckler/names.py
"""
Character name keys.

Names drift between views and the selection modal ("J.P." vs "JP",
"GOUKI" vs "GOUKI CLASSIC"), so every comparison goes through a key that
keeps only latin letters and digits, upper-cased.
"""

import re
from typing import Optional

_NON_KEY_CHARS = re.compile(r"[^A-Za-z0-9]")

# Keys this short are substrings of unrelated labels ("RANKED" holds "ED",
# "JA-JP" holds "JP"), so they only ever match exactly.
SHORT_KEY_MAX_LEN = 2
MAX_EXTRA_CHARS = 10


def normalize(text: Optional[str]) -> str:
    """Project a display name onto its comparison key: 'J.P.' -> 'JP'."""
    return _NON_KEY_CHARS.sub("", text or "").upper()


def matches(candidate_key: str, target_key: str) -> bool:
    """
    Fuzzy match used when picking an on-screen element for a character.

    Short targets need exact equality. Longer targets may appear inside the
    candidate with a bounded suffix/prefix, e.g. 'GOUKICLASSIC' for 'GOUKI'.
    """
    if not candidate_key or not target_key:
        return False
    if len(target_key) <= SHORT_KEY_MAX_LEN:
        return candidate_key == target_key
    return target_key in candidate_key and len(candidate_key) < len(target_key) + MAX_EXTRA_CHARS


def same_key(left: Optional[str], right: Optional[str]) -> bool:
    """Exact key equality; views render canonical names so this is enough for joins."""
    left_key = normalize(left)
    return bool(left_key) and left_key == normalize(right)
