"""PDF assembly: binds captured pages into one HTML document and prints it."""

import html
import logging
from pathlib import Path
from typing import Sequence, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from sitepdf.models.page import PageRecord
from sitepdf.services.browser import CONTAINER_ARGS, launch_browser

logger = logging.getLogger(__name__)

LAUNCH_TIMEOUT_MS = 60_000
LOAD_TIMEOUT_MS = 120_000
SETTLE_MS = 2_000  # lets late layout and web fonts finish before printing
VIEWPORT = {"width": 1200, "height": 800}
PDF_MARGIN = {"top": "20px", "right": "20px", "bottom": "20px", "left": "20px"}

# The combined document pulls resources from every crawled page
PDF_BROWSER_ARGS = CONTAINER_ARGS + (
    "--disable-web-security",
    "--disable-features=IsolateOrigins,site-per-process",
    "--js-flags=--max-old-space-size=4096",
)

_STYLE = """
    body {
      font-family: Arial, sans-serif;
      margin: 20px;
      padding: 20px;
    }
    .page-break {
      page-break-after: always;
      height: 0;
      margin: 0;
      border: none;
    }
    .page-header {
      border-bottom: 1px solid #ccc;
      margin-bottom: 20px;
      padding-bottom: 10px;
    }
    .page-url {
      color: #666;
      font-size: 14px;
    }
"""

_SECTION = """
<div class="page-content">
  <div class="page-header">
    <h1>{title}</h1>
    <div class="page-url">{url}</div>
  </div>
  {body}
</div>
<div class="page-break"></div>
"""


def _section_html(page: PageRecord) -> str:
    """Return the page's stylesheets followed by its ``<body>`` contents, scripts removed.

    Head ``<style>`` blocks and ``<link rel="stylesheet">`` tags are carried
    over so each section keeps its own look; relative stylesheet hrefs are
    resolved against the page URL because the combined document has none.
    """
    soup = BeautifulSoup(page.html, "html.parser")
    for tag in soup.find_all("script"):
        tag.decompose()

    styles = []
    head = soup.find("head")
    if head is not None:
        for tag in head.find_all(["style", "link"]):
            if tag.name == "link":
                if "stylesheet" not in (tag.get("rel") or []):
                    continue
                if tag.get("href"):
                    tag["href"] = urljoin(page.url, tag["href"])
            styles.append(str(tag))

    body = soup.find("body")
    if body is None:
        if head is not None:
            head.decompose()
        content = str(soup)
    else:
        content = body.decode_contents()
    return "\n".join(styles + [content])


def build_document(pages: Sequence[PageRecord]) -> str:
    """Concatenate *pages* into one HTML document, one section per page, in order."""
    sections = "\n".join(
        _SECTION.format(
            title=html.escape(page.title),
            url=html.escape(page.url),
            body=_section_html(page),
        )
        for page in pages
    )
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="UTF-8">\n'
        "<title>Website Archive</title>\n"
        f"<style>{_STYLE}</style>\n"
        "</head>\n<body>\n"
        f"{sections}\n"
        "</body>\n</html>\n"
    )


async def render_pdf(pages: Sequence[PageRecord], output_file: Union[str, Path]) -> Path:
    """Render *pages* into a single A4 PDF at *output_file*.

    The PDF is held in memory until the browser has finished, then written
    to a ``.part`` file and moved into place, so a failed run never leaves
    a truncated PDF (or freshly created directories) behind. An empty
    *pages* sequence yields a PDF with an empty body.

    Raises:
        playwright.async_api.Error: on browser launch, load or export failure.
        OSError: if the output file cannot be written.
    """
    output = Path(output_file)
    document = build_document(pages)

    logger.info("Generating PDF from %d page(s)...", len(pages))
    async with launch_browser(args=PDF_BROWSER_ARGS, timeout_ms=LAUNCH_TIMEOUT_MS) as browser:
        page = await browser.new_page(viewport=VIEWPORT)
        page.set_default_navigation_timeout(LOAD_TIMEOUT_MS)
        page.set_default_timeout(LOAD_TIMEOUT_MS)

        await page.set_content(document, wait_until="load", timeout=LOAD_TIMEOUT_MS)
        await page.wait_for_load_state("networkidle", timeout=LOAD_TIMEOUT_MS)
        await page.wait_for_timeout(SETTLE_MS)

        pdf_bytes = await page.pdf(
            format="A4",
            margin=PDF_MARGIN,
            print_background=True,
        )

    output.parent.mkdir(parents=True, exist_ok=True)
    partial = output.with_name(output.name + ".part")
    try:
        partial.write_bytes(pdf_bytes)
        partial.replace(output)
    finally:
        partial.unlink(missing_ok=True)

    logger.info("PDF generated: %s", output)
    return output
