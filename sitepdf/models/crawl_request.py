from pydantic import BaseModel, Field, HttpUrl


class CrawlRequest(BaseModel):
    url: HttpUrl
    max_pages: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Maximum number of pages to capture (1–200).",
    )
    delay_between_requests: int = Field(
        default=1000,
        ge=0,
        le=10_000,
        description="Pause after each page fetch in milliseconds (max 10 000).",
    )
