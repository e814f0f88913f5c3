"""CLI entry point for screen comparison."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from playwright.async_api import async_playwright
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from screencompare.comparison import ImageComparison
from screencompare.errors import BaselineMissing, ScreenCompareError
from screencompare.models.config import CompareConfig
from screencompare.models.result import CaptureResult, ComparisonResult
from screencompare.session.playwright_session import PlaywrightSession

console = Console()

DEFAULT_CONFIG = "screen-compare.json"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(path: str) -> CompareConfig:
    try:
        return CompareConfig.load(path)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {path}[/red]")
        console.print("Run 'screen-compare init' to create a default config.")
        sys.exit(1)


async def _run(
    cfg: CompareConfig,
    url: str,
    tag: str,
    selector: Optional[str],
    full_page: bool,
    check: bool,
) -> CaptureResult | ComparisonResult:
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        try:
            page = await browser.new_page(
                viewport={"width": cfg.viewport.width, "height": cfg.viewport.height}
            )
            await page.goto(url, wait_until="networkidle")
            session = PlaywrightSession(page, cfg.capabilities, full_page=full_page)
            comparison = ImageComparison(session, cfg)

            element = None
            if selector:
                element = await page.wait_for_selector(selector, timeout=5000)

            if check:
                if element is not None:
                    return await comparison.check_element_result(element, tag)
                return await comparison.check_screen_result(tag)
            if element is not None:
                return await comparison.save_element(element, tag)
            return await comparison.save_screen(tag)
        finally:
            await browser.close()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Visual regression screenshots: capture, baseline and compare."""
    setup_logging(verbose)


@cli.command()
@click.option("--baseline-folder", default="./baseline", help="Folder holding baseline images")
@click.option("--screenshot-path", default="./.tmp/screenshots", help="Folder for actual and diff images")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
def init(baseline_folder: str, screenshot_path: str, config: str) -> None:
    """Create a default configuration file."""
    config_path = Path(config)
    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    cfg = CompareConfig(baseline_folder=baseline_folder, screenshot_path=screenshot_path)
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now save a first screenshot with:")
    console.print("  [blue]screen-compare save https://example.com home[/blue]")


@cli.command()
@click.argument("url")
@click.argument("tag")
@click.option("--selector", "-s", default=None, help="Capture this element instead of the screen")
@click.option("--full-page", is_flag=True, help="Take full-page screenshots")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
def save(url: str, tag: str, selector: Optional[str], full_page: bool, config: str) -> None:
    """Save the actual image of URL under TAG."""
    cfg = _load_config(config)
    try:
        result = asyncio.run(_run(cfg, url, tag, selector, full_page, check=False))
    except ScreenCompareError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print(f"[green]Saved:[/green] {result.actual_image}")
    for warning in result.geometry_warnings:
        console.print(f"[yellow]{warning}[/yellow]")
    if not result.screenshot_stable:
        console.print("[yellow]Screenshots were not stable, the first one was used[/yellow]")


@cli.command()
@click.argument("url")
@click.argument("tag")
@click.option("--selector", "-s", default=None, help="Compare this element instead of the screen")
@click.option("--full-page", is_flag=True, help="Take full-page screenshots")
@click.option("--fail-above", type=float, default=None, help="Exit with status 1 above this mismatch percentage")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
def check(
    url: str,
    tag: str,
    selector: Optional[str],
    full_page: bool,
    fail_above: Optional[float],
    config: str,
) -> None:
    """Compare URL against the baseline stored for TAG."""
    cfg = _load_config(config)
    try:
        result = asyncio.run(_run(cfg, url, tag, selector, full_page, check=True))
    except BaselineMissing as e:
        console.print(f"[yellow]{e}[/yellow]")
        console.print("Enable 'auto_save_baseline' or run 'screen-compare save' and copy the image.")
        sys.exit(1)
    except ScreenCompareError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    table = Table(title="Comparison")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Tag", result.tag)
    table.add_row("Mismatch", f"{result.mismatch_percentage:.2f}%")
    table.add_row("Baseline saved", "yes" if result.baseline_saved else "no")
    table.add_row("Diff image", result.diff_image or "-")
    console.print(table)

    if fail_above is not None and result.mismatch_percentage > fail_above:
        sys.exit(1)


if __name__ == "__main__":
    cli()
