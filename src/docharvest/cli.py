"""Command-line interface for inspecting documents with docharvest."""

from __future__ import annotations

import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional, Tuple

import click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from docharvest import __version__
from docharvest.config.config import Config
from docharvest.extractor.manager import PageExtractor
from docharvest.observability.logging import configure_logging
from docharvest.services.exceptions import (
    PageContextRequiredError,
    ResolutionError,
    ScrapeTimeoutError,
    UnsupportedServiceError,
)
from docharvest.services.registry import create_default_registry
from docharvest.services.scraping import SoupPageContext

console = Console()
logger = structlog.get_logger(__name__)


def _load_config(config_path: Optional[Path], log_level: Optional[str]) -> Config:
    config = Config.from_yaml(config_path) if config_path else Config()
    if log_level:
        config.monitoring.log_level = log_level
    return config


def _read_html(path: str) -> str:
    return Path(path).read_text(encoding="utf-8", errors="replace")


def _emit_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """docharvest - discover tables and text in HTML, resolve cloud document downloads."""
    ctx.ensure_object(dict)
    loaded = _load_config(Path(config) if config else None, log_level.upper() if log_level else None)
    configure_logging(loaded.monitoring)
    ctx.obj["config"] = loaded


@cli.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table")
@click.pass_context
def discover(ctx: click.Context, html_file: str, as_json: bool) -> None:
    """List the data tables and main content found in HTML_FILE."""
    extractor = PageExtractor(ctx.obj["config"])
    result = extractor.discover(_read_html(html_file))

    if as_json:
        _emit_json(result.to_dict())
        return

    console.print(Panel(escape(result.page_title) or "(untitled)", title="Page"))
    table = Table(title=f"Tables ({len(result.tables)})")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Rows", justify="right")
    table.add_column("Columns", justify="right")
    for info in result.tables:
        table.add_row(str(info.index), escape(info.name), str(info.row_count), str(info.column_count))
    console.print(table)

    if result.has_main_content:
        console.print(Panel(escape(result.content_preview), title="Main content"))
    else:
        console.print("[yellow]No main content detected[/yellow]")


@cli.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--index", "-i", "indices", type=int, multiple=True, help="Table index to extract (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of tables")
@click.pass_context
def tables(ctx: click.Context, html_file: str, indices: Tuple[int, ...], as_json: bool) -> None:
    """Extract full table grids from HTML_FILE."""
    extractor = PageExtractor(ctx.obj["config"])
    discovery = extractor.discover(_read_html(html_file))
    extracted = extractor.extract_tables(discovery, indices or None)

    if as_json:
        _emit_json([asdict(t) for t in extracted])
        return

    if not extracted:
        console.print("[yellow]No tables extracted[/yellow]")
        return

    for data in extracted:
        grid = Table(title=escape(data.name), show_header=data.has_header)
        rows = data.data
        header = rows[0] if data.has_header else [str(i + 1) for i in range(data.column_count)]
        for name in header:
            grid.add_column(escape(name))
        for row in rows[1:] if data.has_header else rows:
            grid.add_row(*(escape(cell) for cell in row))
        console.print(grid)


@cli.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of plain text")
@click.pass_context
def text(ctx: click.Context, html_file: str, as_json: bool) -> None:
    """Extract the main article text from HTML_FILE."""
    extractor = PageExtractor(ctx.obj["config"])
    content = extractor.extract_text(_read_html(html_file))

    if as_json:
        _emit_json(asdict(content))
        return

    if not content.paragraphs:
        console.print("[yellow]No main content found[/yellow]")
        return
    click.echo(content.text)


@cli.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON")
def detect(url: str, as_json: bool) -> None:
    """Identify the cloud service and file behind URL."""
    structlog.contextvars.bind_contextvars(document_url=url)
    detection = create_default_registry().detect(url)
    if detection is None:
        if as_json:
            _emit_json(None)
        else:
            console.print("[yellow]No supported service matches this URL[/yellow]")
        sys.exit(1)

    info = asdict(detection.info)
    if as_json:
        _emit_json(info)
        return

    table = Table(title=escape(detection.handler.name))
    table.add_column("Field")
    table.add_column("Value")
    for key, value in info.items():
        table.add_row(key, escape(str(getattr(value, "value", value))))
    console.print(table)


@cli.command()
@click.argument("url")
@click.option(
    "--html",
    "html_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Saved page snapshot used for DOM scraping",
)
@click.pass_context
def resolve(ctx: click.Context, url: str, html_file: Optional[str]) -> None:
    """Resolve a downloadable URL for the cloud document at URL."""
    structlog.contextvars.bind_contextvars(document_url=url)
    config: Config = ctx.obj["config"]
    registry = create_default_registry(config.resolver)
    page = SoupPageContext(_read_html(html_file), base_url=url, parser=config.discovery.parser) if html_file else None

    try:
        download_url = asyncio.run(registry.resolve(url, page))
    except UnsupportedServiceError as e:
        console.print(f"[yellow]{escape(str(e))}[/yellow]")
        sys.exit(1)
    except PageContextRequiredError as e:
        console.print(f"[red]{escape(str(e))}[/red] (pass --html with a saved copy of the page)")
        sys.exit(2)
    except ScrapeTimeoutError as e:
        console.print(f"[red]Timed out: {escape(str(e))}[/red]")
        sys.exit(3)
    except ResolutionError as e:
        logger.error("Resolution failed", url=url, error=str(e), error_type=type(e).__name__)
        console.print(f"[red]Resolution failed: {escape(str(e))}[/red]")
        sys.exit(2)

    click.echo(download_url)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
