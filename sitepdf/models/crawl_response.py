from typing import List

from pydantic import BaseModel


class CrawledPage(BaseModel):
    url: str
    title: str


class CrawlPreviewResponse(BaseModel):
    start_url: str
    pages_crawled: int
    pages: List[CrawledPage]
