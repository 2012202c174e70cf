# src/buckler/session.py
"""
Browser session management for Playwright-based scraping.

One session per request: launch, inject the Buckler cookies, hand out a
single page, and tear everything down on exit even when the request fails.
"""

import logging
from typing import Dict, List

from playwright.sync_api import sync_playwright

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
VIEWPORT = {"width": 1280, "height": 800}


def parse_cookie_string(cookie_string: str, domain: str) -> List[Dict[str, str]]:
    """
    Turn 'a=1; b=x=y' into Playwright cookie dicts scoped to `domain`.

    Values keep any '=' after the first one. Pairs without a name are skipped.
    """
    cookies = []
    for pair in (cookie_string or "").split(";"):
        pair = pair.strip()
        if not pair:
            continue
        name, _, value = pair.partition("=")
        name = name.strip()
        if not name:
            continue
        cookies.append({"name": name, "value": value.strip(), "domain": domain, "path": "/"})
    return cookies


class BucklerSession:
    """
    Context manager owning one browser, context and page.

    Usage:
        with BucklerSession(cookie, domain) as page:
            page.goto(...)
    """

    def __init__(self, cookie_string: str, cookie_domain: str, headless: bool = True):
        self.cookie_string = cookie_string
        self.cookie_domain = cookie_domain
        self.headless = headless
        self._playwright = None
        self.browser = None
        self.context = None
        self.page = None

    def __enter__(self):
        try:
            self._launch()
        except Exception:
            self.close()
            raise
        return self.page

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _launch(self) -> None:
        self._playwright = sync_playwright().start()
        self.browser = self._playwright.chromium.launch(
            headless=self.headless,
            args=["--no-sandbox", "--disable-setuid-sandbox"],
        )
        self.context = self.browser.new_context(
            user_agent=USER_AGENT,
            viewport=VIEWPORT,
            locale="ja-JP",
        )
        cookies = parse_cookie_string(self.cookie_string, self.cookie_domain)
        if cookies:
            self.context.add_cookies(cookies)
        logger.debug("Browser session opened with %d cookies", len(cookies))
        self.page = self.context.new_page()

    def close(self) -> None:
        """Release browser resources; safe to call more than once."""
        for resource, action in (
            (self.context, "close"),
            (self.browser, "close"),
            (self._playwright, "stop"),
        ):
            if resource is None:
                continue
            try:
                getattr(resource, action)()
            except Exception as exc:
                logger.debug("Ignoring %s.%s failure during cleanup: %s", type(resource).__name__, action, exc)

        self._playwright = None
        self.browser = None
        self.context = None
        self.page = None
