"""Command-line entry point for SitePDF.

Commands:
  crawl URL   Crawl one site and write it to a PDF
  run         Crawl every seed listed in a YAML/JSON config into one PDF

Examples:
  sitepdf crawl https://docs.example.com/docs/ -o docs.pdf --max-pages 100
  sitepdf --log-level DEBUG run --config sites.yaml
"""
import asyncio
import logging
import sys
from pathlib import Path

import click
from playwright.async_api import Error as PlaywrightError

from sitepdf.config import SiteConfig, load_config
from sitepdf.logging_config import configure_logging
from sitepdf.services.pipeline import RunResult, run

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

# Failures that end the run; anything else is a bug and keeps its traceback
FATAL_ERRORS = (PlaywrightError, OSError, ValueError)


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


def _execute(config: SiteConfig) -> RunResult:
    try:
        result = asyncio.run(run(config))
    except FATAL_ERRORS as exc:
        logger.error("Run failed: %s", exc)
        print_error(f"Error: {exc}")
    click.echo(
        f"PDF generated: {result.output_file} "
        f"({result.pages} page(s) from {result.seeds} seed URL(s))"
    )
    return result


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Logging level.",
)
def cli(log_level: str):
    """Crawl a website with a headless browser and bind it into one PDF."""
    configure_logging(log_level)


@cli.command("crawl")
@click.argument("url")
@click.option(
    "--output", "-o", "output_file",
    default="site.pdf", show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the PDF.",
)
@click.option("--max-pages", "-n", type=click.IntRange(min=1), default=None,
              help="Stop after this many pages (default: no limit).")
@click.option("--delay", "delay_ms", type=click.IntRange(min=0), default=1000, show_default=True,
              help="Pause after each page, in milliseconds.")
@click.option("--retries", type=click.IntRange(min=0), default=0, show_default=True,
              help="How many times to retry a page that fails to load.")
@click.option("--timeout", "timeout_ms", type=click.IntRange(min=0), default=0, show_default=True,
              help="Per-page navigation timeout in milliseconds (0 = none).")
def crawl_command(url, output_file, max_pages, delay_ms, retries, timeout_ms):
    """Crawl URL and every same-host page it links to into one PDF."""
    try:
        config = SiteConfig(
            urls=[url],
            output_file=output_file,
            delay_between_requests=delay_ms,
            max_pages=max_pages,
            max_retries=retries,
            navigation_timeout_ms=timeout_ms,
        )
    except ValueError as exc:
        print_error(f"Invalid arguments: {exc}")
    _execute(config)


@cli.command("run")
@click.option(
    "--config", "-c", "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a YAML or JSON config file.",
)
def run_command(config_path: Path):
    """Crawl every seed URL in the config file into one combined PDF."""
    try:
        config = load_config(config_path)
    except (OSError, TypeError, ValueError) as exc:
        print_error(f"Config error: {exc}")
    _execute(config)


def main():
    cli()


if __name__ == "__main__":
    main()
