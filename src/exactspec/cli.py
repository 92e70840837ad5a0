"""Command line interface for exactspec."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from exactspec import __version__
from exactspec.core.errors import ExactSpecError
from exactspec.core.models import ScrapeConfig, ScrapeReport, SpecInfo
from exactspec.discovery.index import endpoint_name_from_url
from exactspec.engine.fetcher import HttpDocumentFetcher
from exactspec.engine.pipeline import SpecificationPipeline
from exactspec.storage.filesystem import SpecificationWriter

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]exactspec[/bold] version {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_config(
    names: Optional[list[str]],
    max_endpoints: int,
    concurrency: int,
    delay: float,
    strict: bool,
) -> ScrapeConfig:
    return ScrapeConfig(
        include_names=names or [],
        max_endpoints=max_endpoints,
        concurrency=concurrency,
        request_delay=delay,
        fail_fast=strict,
    )


def _fetcher_for(config: ScrapeConfig) -> HttpDocumentFetcher:
    return HttpDocumentFetcher(
        timeout=config.timeout,
        max_retries=config.max_retries,
        retry_delay=config.request_delay,
    )


async def _run_generate(
    config: ScrapeConfig,
    output: Path,
    fmt: Optional[str],
    report_path: Optional[Path],
) -> ScrapeReport:
    """Run the pipeline and write its outputs."""
    async with _fetcher_for(config) as fetcher:
        pipeline = SpecificationPipeline(fetcher, config)
        document, report = await pipeline.run(SpecInfo(version=__version__))

    writer = SpecificationWriter()
    writer.save(document, output, fmt)
    if report_path is not None:
        writer.save_report(report, report_path)
    return report


def _print_summary(report: ScrapeReport, output: Path) -> None:
    console.print()
    console.print(
        Panel(
            f"[bold green]Endpoints:[/bold green] {len(report.endpoints)}\n"
            f"[bold red]Failed pages:[/bold red] {len(report.failed)}\n"
            f"[bold yellow]Skipped properties:[/bold yellow] {len(report.failed_properties)}\n"
            f"[bold cyan]Output:[/bold cyan] {output}",
            title="[bold green]Specification generated[/bold green]",
            border_style="green",
        )
    )

    if report.failed:
        console.print()
        console.print("[yellow]Failed pages:[/yellow]")
        for result in report.failed[:5]:
            console.print(f"  [dim]-[/dim] {result.url}: {result.error}")
        if len(report.failed) > 5:
            console.print(f"  [dim]... and {len(report.failed) - 5} more[/dim]")


async def _list_urls(config: ScrapeConfig) -> list[str]:
    async with _fetcher_for(config) as fetcher:
        return await SpecificationPipeline(fetcher, config).discover()


app = typer.Typer(
    name="exactspec",
    help="Generate a Swagger specification from the Exact Online REST API documentation.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "-V",
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Generate a Swagger specification from the Exact Online REST API documentation."""


@app.command()
def generate(
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Output file (.yaml, .yml or .json)"),
    ] = Path("exact-online.yaml"),
    names: Annotated[
        Optional[list[str]],
        typer.Option("-n", "--name", help="Only process these endpoints"),
    ] = None,
    max_endpoints: Annotated[
        int,
        typer.Option("-m", "--max-endpoints", help="Maximum endpoints to process (0 = unlimited)"),
    ] = 0,
    concurrency: Annotated[
        int,
        typer.Option("-c", "--concurrency", help="Pages fetched in parallel"),
    ] = 4,
    delay: Annotated[
        float,
        typer.Option("-d", "--delay", help="Delay between requests in seconds"),
    ] = 0.5,
    fmt: Annotated[
        Optional[str],
        typer.Option("--format", help="yaml or json [default: from output suffix]"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Abort on the first page that fails"),
    ] = False,
    report: Annotated[
        Optional[Path],
        typer.Option("--report", help="Write a JSON run report to this file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Verbose output"),
    ] = False,
) -> None:
    """Scrape the documentation and write the specification.

    \b
    Examples:
        exactspec generate
        exactspec generate -o spec.json -n AccountancyAccountOwners
        exactspec generate -m 20 -v --report report.json
    """
    _setup_logging(verbose)

    if fmt is not None and fmt not in SpecificationWriter.FORMATS:
        console.print(f"[red]Error: unknown format {fmt}[/red]")
        raise typer.Exit(2)

    config = _build_config(names, max_endpoints, concurrency, delay, strict)

    try:
        scrape_report = asyncio.run(_run_generate(config, output, fmt, report))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(1)
    except ExactSpecError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _print_summary(scrape_report, output)


@app.command()
def endpoints(
    names: Annotated[
        Optional[list[str]],
        typer.Option("-n", "--name", help="Only list these endpoints"),
    ] = None,
    max_endpoints: Annotated[
        int,
        typer.Option("-m", "--max-endpoints", help="Maximum endpoints to list (0 = unlimited)"),
    ] = 0,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Verbose output"),
    ] = False,
) -> None:
    """List the endpoint detail pages linked from the documentation."""
    _setup_logging(verbose)
    config = _build_config(names, max_endpoints, 1, 0.0, False)

    try:
        urls = asyncio.run(_list_urls(config))
    except ExactSpecError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(
        title="[bold]Endpoints[/bold]",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Name", style="cyan")
    table.add_column("URL", style="green")
    for url in urls:
        table.add_row(endpoint_name_from_url(url) or "?", url)

    console.print()
    console.print(table)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
