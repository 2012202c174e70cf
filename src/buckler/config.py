# src/buckler/config.py
"""
Runtime settings for the Buckler scraper.

Values come from the environment (a local .env is honoured). The session
cookie is the only required value; everything else has a working default.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

BASE_URL = "https://www.streetfighter.com/6/buckler/ja-jp"
COOKIE_DOMAIN = ".streetfighter.com"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'")


@dataclass
class Settings:
    cookie: Optional[str] = None
    headless: bool = True
    base_url: str = BASE_URL
    cookie_domain: str = COOKIE_DOMAIN
    navigation_timeout_ms: int = 60000
    tab_settle_ms: int = 3000
    modal_settle_ms: int = 1000
    pick_settle_ms: int = 500
    confirm_settle_ms: int = 5000
    search_settle_ms: int = 4000
    cache_ttl_seconds: int = 0

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        load_dotenv(dotenv_path)
        return cls(
            cookie=os.environ.get("SF6_COOKIE"),
            headless=_env_bool("BUCKLER_HEADLESS", True),
            navigation_timeout_ms=_env_int("BUCKLER_NAV_TIMEOUT_MS", 60000),
            tab_settle_ms=_env_int("BUCKLER_TAB_SETTLE_MS", 3000),
            search_settle_ms=_env_int("BUCKLER_SEARCH_SETTLE_MS", 4000),
            cache_ttl_seconds=_env_int("BUCKLER_CACHE_TTL", 0),
        )

    def require_cookie(self) -> str:
        """The credential string, or ConfigurationError before any browser starts."""
        if not self.cookie or not self.cookie.strip():
            raise ConfigurationError("SF6_COOKIE is not configured")
        return self.cookie

    def profile_url(self, user_code: str) -> str:
        return f"{self.base_url}/profile/{user_code}/play"

    def fighters_url(self) -> str:
        return f"{self.base_url}/fighters"
