"""Loading and validation of SitePDF run configuration.

A config file lists one or more seed URLs and the single PDF they are
bound into::

    urls:
      - https://docs.example.com/docs/download-transactions
      - https://docs.example.com/docs/settlement-summary-report-1
    output_file: example-docs.pdf
    delay_between_requests: 1000
    max_pages: 100
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from sitepdf.models.crawl_target import CrawlTarget


class SiteConfig(BaseModel):
    """Settings for one run: every seed is crawled and bound into ``output_file``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    urls: List[HttpUrl] = Field(..., min_length=1, description="Seed URLs, crawled in order.")
    output_file: Path = Field(..., description="Where the combined PDF is written.")
    delay_between_requests: int = Field(1000, ge=0, description="Pause after each fetch (ms).")
    max_pages: Optional[int] = Field(None, ge=1, description="Page cap applied to each seed.")
    max_retries: int = Field(0, ge=0, description="Retry budget per failed URL.")
    navigation_timeout_ms: int = Field(0, ge=0, description="Per-page timeout (0 = none).")

    @field_validator("output_file", mode="before")
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    def targets(self) -> List[CrawlTarget]:
        """Return one :class:`CrawlTarget` per seed URL, in config order."""
        return [
            CrawlTarget(
                base_url=url,
                output_file=self.output_file,
                delay_between_requests=self.delay_between_requests,
                max_pages=self.max_pages,
                max_retries=self.max_retries,
                navigation_timeout_ms=self.navigation_timeout_ms,
            )
            for url in self.urls
        ]


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path]) -> SiteConfig:
    """Read a YAML or JSON file and return a validated :class:`SiteConfig`.

    Raises:
        FileNotFoundError: if *path* does not exist.
        ValueError: if the file cannot be parsed or has an unknown suffix.
        TypeError: if the top level is not a mapping.
        pydantic.ValidationError: if the contents do not match the schema.
    """
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return SiteConfig(**data)
