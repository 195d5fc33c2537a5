import logging
import tempfile
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response
from playwright.async_api import Error as PlaywrightError

from sitepdf.models.crawl_request import CrawlRequest
from sitepdf.routers.common import crawl_requested_site, limiter
from sitepdf.services.assembler import render_pdf
from sitepdf.services.link_filter import hostname_of

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/render",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
    summary="Crawl a website and return it as one PDF",
    description=(
        "Starting from *url*, captures every reachable page on the same host "
        "(up to `max_pages`) with a headless Chromium browser and returns a "
        "single A4 PDF with one section per page.\n\n"
        "**Note:** this endpoint is slow; it waits for every page to go "
        "network-idle and pauses `delay_between_requests` ms between pages."
    ),
)
@limiter.limit("2/minute")
async def render_endpoint(request: Request, body: CrawlRequest) -> Response:
    """Crawl *url* and stream back the combined PDF."""
    url = str(body.url)
    logger.info("Render request received", extra={"url": url, "max_pages": body.max_pages})

    # ── Step 1: crawl ─────────────────────────────────────────────────────────
    pages = await crawl_requested_site(body)

    if not pages:
        raise HTTPException(status_code=502, detail="No pages could be captured from the target URL.")

    # ── Step 2: print ─────────────────────────────────────────────────────────
    with tempfile.TemporaryDirectory(prefix="sitepdf-") as workdir:
        output = Path(workdir) / "site.pdf"
        try:
            await render_pdf(pages, output)
        except PlaywrightError as exc:
            logger.error("PDF export failed for %s: %s", url, exc)
            raise HTTPException(status_code=502, detail=f"PDF export failed: {exc}")
        pdf_bytes = output.read_bytes()

    filename = f"{hostname_of(url) or 'site'}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Pages-Rendered": str(len(pages)),
        },
    )
