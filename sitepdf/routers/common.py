"""Pieces shared by the /crawl and /render routers."""

import logging
from typing import List

from fastapi import HTTPException
from playwright.async_api import Error as PlaywrightError
from slowapi import Limiter
from slowapi.util import get_remote_address

from sitepdf.models.crawl_request import CrawlRequest
from sitepdf.models.crawl_target import CrawlTarget
from sitepdf.models.page import PageRecord
from sitepdf.services.crawler import crawl
from sitepdf.services.url_guard import validate_seed_url

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)


async def crawl_requested_site(body: CrawlRequest) -> List[PageRecord]:
    """Validate the seed URL, crawl it and map failures to HTTP errors.

    Raises:
        HTTPException: 400 for a blocked URL, 502 when the browser fails.
    """
    url = str(body.url)
    try:
        validate_seed_url(url)
    except ValueError as exc:
        logger.warning("Invalid or blocked URL: %s – %s", url, exc)
        raise HTTPException(status_code=400, detail=str(exc))

    target = CrawlTarget(
        base_url=body.url,
        max_pages=body.max_pages,
        delay_between_requests=body.delay_between_requests,
    )
    try:
        return await crawl(target)
    except PlaywrightError as exc:
        logger.error("Browser error crawling %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=f"Browser error: {exc}")
