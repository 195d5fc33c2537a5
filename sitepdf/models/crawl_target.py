from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class CrawlTarget(BaseModel):
    """Immutable settings for one crawl run."""

    model_config = ConfigDict(frozen=True)

    base_url: HttpUrl
    output_file: Path = Path("site.pdf")
    delay_between_requests: int = Field(
        default=1000,
        ge=0,
        description="Pause after each successful fetch, in milliseconds.",
    )
    max_pages: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum number of pages to capture (None = unbounded).",
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        description="How many times a failed URL is re-queued before it is dropped.",
    )
    navigation_timeout_ms: int = Field(
        default=0,
        ge=0,
        description="Per-page navigation timeout in milliseconds (0 = wait forever).",
    )
