"""Tests for the sitepdf command-line interface."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner
from playwright.async_api import Error as PlaywrightError

from sitepdf.cli import cli
from sitepdf.services.pipeline import RunResult


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def keep_test_logging():
    """Stop the CLI from pointing log handlers at the runner's short-lived streams."""
    with patch("sitepdf.cli.configure_logging"):
        yield


def _ok(output="site.pdf", pages=3, seeds=1):
    return AsyncMock(return_value=RunResult(output_file=Path(output), pages=pages, seeds=seeds))


class TestCrawlCommand:
    def test_success_exits_zero(self, runner):
        run = _ok("docs.pdf")
        with patch("sitepdf.cli.run", new=run):
            result = runner.invoke(
                cli, ["crawl", "https://example.com/docs/", "-o", "docs.pdf", "--max-pages", "5"]
            )

        assert result.exit_code == 0, result.output
        assert "PDF generated: docs.pdf" in result.output
        config = run.await_args.args[0]
        assert [str(u) for u in config.urls] == ["https://example.com/docs/"]
        assert config.max_pages == 5
        assert config.delay_between_requests == 1000

    def test_options_reach_config(self, runner):
        run = _ok()
        with patch("sitepdf.cli.run", new=run):
            result = runner.invoke(
                cli,
                ["crawl", "https://example.com", "--delay", "0", "--retries", "2", "--timeout", "30000"],
            )

        assert result.exit_code == 0, result.output
        config = run.await_args.args[0]
        assert config.max_pages is None
        assert config.delay_between_requests == 0
        assert config.max_retries == 2
        assert config.navigation_timeout_ms == 30000

    def test_browser_failure_exits_non_zero(self, runner):
        run = AsyncMock(side_effect=PlaywrightError("Executable doesn't exist"))
        with patch("sitepdf.cli.run", new=run):
            result = runner.invoke(cli, ["crawl", "https://example.com"])

        assert result.exit_code == 1
        assert "Executable doesn't exist" in result.output

    def test_empty_crawl_exits_non_zero(self, runner):
        run = AsyncMock(side_effect=ValueError("No pages were captured; nothing to render."))
        with patch("sitepdf.cli.run", new=run):
            result = runner.invoke(cli, ["crawl", "https://example.com"])

        assert result.exit_code == 1

    def test_invalid_url_exits_non_zero(self, runner):
        run = _ok()
        with patch("sitepdf.cli.run", new=run):
            result = runner.invoke(cli, ["crawl", "not-a-url"])

        assert result.exit_code == 1
        assert "Invalid arguments" in result.output
        run.assert_not_awaited()

    def test_zero_max_pages_is_a_usage_error(self, runner):
        result = runner.invoke(cli, ["crawl", "https://example.com", "--max-pages", "0"])
        assert result.exit_code == 2


class TestRunCommand:
    def test_config_file_drives_run(self, runner, tmp_path):
        cfg = tmp_path / "sites.yaml"
        cfg.write_text(
            "urls:\n  - https://example.com/a\n  - https://example.com/b\noutput_file: both.pdf\n"
        )
        run = _ok("both.pdf", pages=7, seeds=2)
        with patch("sitepdf.cli.run", new=run):
            result = runner.invoke(cli, ["run", "--config", str(cfg)])

        assert result.exit_code == 0, result.output
        assert "7 page(s) from 2 seed URL(s)" in result.output
        assert len(run.await_args.args[0].urls) == 2

    def test_bad_config_exits_non_zero(self, runner, tmp_path):
        cfg = tmp_path / "sites.yaml"
        cfg.write_text("output_file: only.pdf\n")
        with patch("sitepdf.cli.run", new=_ok()) as run:
            result = runner.invoke(cli, ["run", "--config", str(cfg)])

        assert result.exit_code == 1
        assert "Config error" in result.output
        run.assert_not_awaited()

    def test_missing_config_is_a_usage_error(self, runner, tmp_path):
        result = runner.invoke(cli, ["run", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 2
