import logging

from fastapi import APIRouter, Request

from sitepdf.models.crawl_request import CrawlRequest
from sitepdf.models.crawl_response import CrawledPage, CrawlPreviewResponse
from sitepdf.routers.common import crawl_requested_site, limiter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/crawl",
    response_model=CrawlPreviewResponse,
    summary="List the pages a render would include",
    description=(
        "Crawls every page on the same host as *url* with a headless browser, "
        "up to `max_pages`, and returns the URL and title of each captured page "
        "in the order they would appear in the PDF."
    ),
)
@limiter.limit("5/minute")
async def crawl_endpoint(request: Request, body: CrawlRequest) -> CrawlPreviewResponse:
    url = str(body.url)
    logger.info("Crawl request received", extra={"url": url, "max_pages": body.max_pages})

    records = await crawl_requested_site(body)

    return CrawlPreviewResponse(
        start_url=url,
        pages_crawled=len(records),
        pages=[CrawledPage(url=r.url, title=r.title) for r in records],
    )
