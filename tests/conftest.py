"""Shared fixtures: an in-memory stand-in for the Playwright browser.

A fake site is a dict mapping URL -> ``(title, html, hrefs)`` where *hrefs*
are returned as-is from the anchor query (relative hrefs are allowed).
A URL missing from the dict, or mapped to an exception, fails to load.
"""

from contextlib import asynccontextmanager
from typing import Dict, List, Optional

import pytest
from playwright.async_api import Error as PlaywrightError


class FakePage:
    def __init__(self, site: Dict, flaky: Optional[Dict[str, int]] = None):
        self.site = site
        self.flaky = dict(flaky or {})
        self.visits: List[str] = []
        self.current = None
        self.document: Optional[str] = None
        self.pdf_options: Optional[dict] = None
        self.pdf_error: Optional[Exception] = None
        self.link_error: Optional[Exception] = None
        self.goto_options: List[dict] = []
        self.content_options: Optional[dict] = None
        self.load_states: List[tuple] = []
        self.waits: List[int] = []
        self.default_timeouts: dict = {}

    # -- crawl side ---------------------------------------------------------

    async def goto(self, url, wait_until=None, timeout=None):
        self.visits.append(url)
        self.goto_options.append({"wait_until": wait_until, "timeout": timeout})
        if self.flaky.get(url, 0) > 0:
            self.flaky[url] -= 1
            raise PlaywrightError(f"net::ERR_CONNECTION_RESET at {url}")
        entry = self.site.get(url)
        if entry is None:
            raise PlaywrightError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        if isinstance(entry, Exception):
            raise entry
        self.current = entry

    async def content(self):
        return self.current[1]

    async def title(self):
        return self.current[0]

    async def eval_on_selector_all(self, selector, expression):
        if self.link_error is not None:
            raise self.link_error
        return list(self.current[2])

    # -- print side ---------------------------------------------------------

    def set_default_navigation_timeout(self, timeout):
        self.default_timeouts["navigation"] = timeout

    def set_default_timeout(self, timeout):
        self.default_timeouts["default"] = timeout

    async def set_content(self, html, wait_until=None, timeout=None):
        self.document = html
        self.content_options = {"wait_until": wait_until, "timeout": timeout}

    async def wait_for_load_state(self, state=None, timeout=None):
        self.load_states.append((state, timeout))

    async def wait_for_timeout(self, timeout):
        self.waits.append(timeout)

    async def pdf(self, **options):
        if self.pdf_error is not None:
            raise self.pdf_error
        self.pdf_options = options
        return b"%PDF-1.4\n% fake\n"


class FakeBrowser:
    def __init__(self, page: FakePage):
        self.page = page

    async def new_page(self, **kwargs):
        return self.page


class FakeLauncher:
    """Drop-in replacement for ``launch_browser`` that counts launches and closes."""

    def __init__(self, page: FakePage, launch_error: Optional[Exception] = None):
        self.page = page
        self.launch_error = launch_error
        self.launches = 0
        self.closes = 0
        self.launch_kwargs: List[dict] = []

    @asynccontextmanager
    async def __call__(self, **kwargs):
        self.launches += 1
        self.launch_kwargs.append(kwargs)
        if self.launch_error is not None:
            raise self.launch_error
        try:
            yield FakeBrowser(self.page)
        finally:
            self.closes += 1


@pytest.fixture()
def make_launcher():
    """Return a factory building a :class:`FakeLauncher` over a fake site."""

    def _make(site=None, flaky=None, launch_error=None) -> FakeLauncher:
        return FakeLauncher(FakePage(site or {}, flaky), launch_error=launch_error)

    return _make


def html_page(body: str, title: str = "") -> str:
    return f"<html><head><title>{title}</title></head><body>{body}</body></html>"


@pytest.fixture()
def two_page_site():
    """A links to B and to an external host C; B links back to A."""
    a = "https://example.com/"
    b = "https://example.com/b"
    return {
        a: ("Page A", html_page("<p>A</p>", "Page A"), ["/b", "https://other.org/c"]),
        b: ("Page B", html_page("<p>B</p>", "Page B"), ["https://example.com/"]),
        "https://other.org/c": ("Page C", html_page("<p>C</p>", "Page C"), []),
    }
