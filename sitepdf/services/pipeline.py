"""End-to-end run: crawl every seed, then bind all captured pages into one PDF."""

import logging
from pathlib import Path
from typing import Iterable, List, NamedTuple, Set

from sitepdf.config import SiteConfig
from sitepdf.models.crawl_target import CrawlTarget
from sitepdf.models.page import PageRecord
from sitepdf.services.assembler import render_pdf
from sitepdf.services.crawler import crawl

logger = logging.getLogger(__name__)


class RunResult(NamedTuple):
    output_file: Path
    pages: int
    seeds: int


async def crawl_all(targets: Iterable[CrawlTarget]) -> List[PageRecord]:
    """Crawl each target in order and merge the results.

    A URL captured by an earlier seed is dropped from later seeds so that
    each page appears once in the combined document.
    """
    merged: List[PageRecord] = []
    seen: Set[str] = set()
    for target in targets:
        for record in await crawl(target):
            if record.url in seen:
                logger.debug("Pipeline: %s already captured by an earlier seed", record.url)
                continue
            seen.add(record.url)
            merged.append(record)
    return merged


async def run(config: SiteConfig) -> RunResult:
    """Crawl all seeds in *config* and write one PDF to ``config.output_file``.

    Raises:
        ValueError: if no page could be captured from any seed; no PDF is written.
    """
    targets = config.targets()
    pages = await crawl_all(targets)
    if not pages:
        raise ValueError("No pages were captured; nothing to render.")
    output = await render_pdf(pages, config.output_file)
    return RunResult(output_file=output, pages=len(pages), seeds=len(targets))
