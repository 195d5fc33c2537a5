"""Scoped access to a headless Chromium instance driven by Playwright."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

from playwright.async_api import Browser, async_playwright

logger = logging.getLogger(__name__)

# --no-sandbox is required when running as root inside a container
# (Docker drops the user namespace needed by Chromium's sandbox).
CONTAINER_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)


@asynccontextmanager
async def launch_browser(
    *,
    args: Sequence[str] = (),
    timeout_ms: Optional[int] = None,
) -> AsyncIterator[Browser]:
    """Launch headless Chromium and close it on exit, even on error.

    Args:
        args: Extra command-line switches passed to Chromium.
        timeout_ms: Maximum time to wait for the browser to start
            (``None`` keeps Playwright's default).

    Raises:
        playwright.async_api.Error: if the browser cannot be started.
    """
    launch_kwargs = {"headless": True, "args": list(args)}
    if timeout_ms is not None:
        launch_kwargs["timeout"] = timeout_ms

    async with async_playwright() as pw:
        browser = await pw.chromium.launch(**launch_kwargs)
        logger.debug("Browser launched (%s)", browser.version)
        try:
            yield browser
        finally:
            await browser.close()
            logger.debug("Browser closed")
