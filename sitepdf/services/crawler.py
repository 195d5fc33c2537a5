"""Site crawler: BFS-crawls every page on the seed URL's host with a real browser."""

import asyncio
import logging
from collections import deque
from typing import Deque, Dict, List, Set
from urllib.parse import urljoin

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from sitepdf.models.crawl_target import CrawlTarget
from sitepdf.models.page import PageRecord
from sitepdf.services.browser import CONTAINER_ARGS, launch_browser
from sitepdf.services.link_filter import hostname_of, is_valid_url, normalise

logger = logging.getLogger(__name__)

# Evaluated in the page: resolved href of every anchor in the rendered DOM
_ANCHOR_HREFS_JS = "anchors => anchors.map(a => a.href)"


async def _pause(ms: int) -> None:
    if ms > 0:
        await asyncio.sleep(ms / 1000)


async def _capture(page: Page, url: str, timeout_ms: int) -> PageRecord:
    """Navigate to *url*, wait for the network to settle and snapshot the page."""
    await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
    html = await page.content()
    title = await page.title()
    return PageRecord(url=url, title=title, html=html)


async def _extract_links(page: Page, url: str, domain: str) -> List[str]:
    """Return crawlable same-host links found in the currently loaded page.

    A failure to evaluate the DOM is logged and yields no links; the page
    itself has already been captured at this point.
    """
    try:
        hrefs = await page.eval_on_selector_all("a", _ANCHOR_HREFS_JS)
    except PlaywrightError as exc:
        logger.warning("Crawler: could not read links from %s – %s", url, exc)
        return []

    links: List[str] = []
    for href in hrefs:
        if not isinstance(href, str) or not href:
            continue
        try:
            link = normalise(urljoin(url, href))
        except ValueError as exc:
            logger.debug("Crawler: ignoring malformed link %r on %s – %s", href, url, exc)
            continue
        if is_valid_url(link, domain) and link not in links:
            links.append(link)
    return links


async def crawl(target: CrawlTarget) -> List[PageRecord]:
    """Crawl pages on the same host as ``target.base_url`` in BFS order.

    Pages are fetched one at a time from a FIFO frontier. After every
    successful fetch the crawler waits ``delay_between_requests``
    milliseconds. The crawl stops when the frontier is empty or
    ``max_pages`` pages have been captured.

    A page that fails to load is logged and skipped. It is re-queued at
    the back of the frontier at most ``max_retries`` times; after that it
    is never fetched again, even when another page links to it.

    Returns:
        A list of :class:`PageRecord`, one per captured page, in fetch order.

    Raises:
        playwright.async_api.Error: if the browser cannot be launched.
    """
    base_url = normalise(str(target.base_url))
    domain = hostname_of(base_url)
    limit = target.max_pages

    frontier: Deque[str] = deque([base_url])
    queued: Set[str] = {base_url}
    visited: Set[str] = set()
    failures: Dict[str, int] = {}
    pages: List[PageRecord] = []

    logger.info("Crawl started: %s (max_pages=%s)", base_url, limit or "unbounded")

    async with launch_browser(args=CONTAINER_ARGS) as browser:
        page = await browser.new_page()

        while frontier and (limit is None or len(visited) < limit):
            url = frontier.popleft()
            queued.discard(url)
            if url in visited:
                continue

            logger.info("Crawling: %s", url)
            try:
                record = await _capture(page, url, target.navigation_timeout_ms)
            except PlaywrightError as exc:
                attempts = failures.get(url, 0) + 1
                failures[url] = attempts
                if attempts <= target.max_retries:
                    logger.warning(
                        "Crawler: error processing %s (attempt %d of %d) – %s",
                        url, attempts, target.max_retries + 1, exc,
                    )
                    frontier.append(url)
                    queued.add(url)
                else:
                    logger.warning("Crawler: skipping %s – %s", url, exc)
                continue

            pages.append(record)
            visited.add(url)
            for link in await _extract_links(page, url, domain):
                if link in visited or link in queued or link in failures:
                    continue
                frontier.append(link)
                queued.add(link)

            await _pause(target.delay_between_requests)

    logger.info("Crawl finished: %d page(s) captured from %s", len(pages), base_url)
    return pages
