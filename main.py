#!/usr/bin/env python3
"""CLI + API entry point for the Content Vault extraction pipeline.

CLI Usage::

    python main.py --url https://example.com/post
    python main.py --url https://example.com/post --file saved_page.html --json

API Usage::

    python main.py serve
    python main.py serve --port 9000
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from contentvault.config import FetchConfig
from contentvault.errors import ExtractionError, RetrievalError
from contentvault.logger import setup_logging
from contentvault.models import ExtractionResult
from contentvault.service import ExtractionService

cli = typer.Typer(
    name="content-vault",
    help="📚 Content Vault — extract the original article text, images and tags from a web page.",
    add_completion=False,
)
console = Console()


@cli.callback(invoke_without_command=True)
def extract(
    ctx: typer.Context,
    url: str = typer.Option(None, "--url", "-u", help="Page URL to extract (source URL with --file)."),
    file: Path = typer.Option(None, "--file", "-f", help="Read HTML from this file instead of fetching."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    no_dynamic: bool = typer.Option(False, "--no-dynamic", help="Disable headless browser fallback."),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs as JSON lines."),
) -> None:
    """📰 Extract the main content of a page."""
    if ctx.invoked_subcommand is not None:
        return

    if url is None:
        rprint("[bold cyan]Content Vault[/bold cyan]")
        rprint("Use [bold]--url[/bold] to extract a page, or [bold]serve[/bold] to start the API.\n")
        rprint("Examples:")
        rprint("  python main.py --url https://example.com/post")
        rprint("  python main.py --url https://example.com/post --file page.html")
        rprint("  python main.py serve")
        raise typer.Exit()

    setup_logging(level=log_level, json_output=json_logs)
    service = ExtractionService(fetch_config=FetchConfig(dynamic_fallback=not no_dynamic))

    try:
        if file is not None:
            html = file.read_text(encoding="utf-8", errors="replace")
            result = service.extract_html(html, url)
        else:
            result = service.extract_url(url)
    except ValueError as exc:
        rprint(f"[bold red]Invalid input:[/bold red] {exc}")
        raise typer.Exit(code=2)
    except OSError as exc:
        rprint(f"[bold red]Cannot read file:[/bold red] {exc}")
        raise typer.Exit(code=2)
    except ExtractionError as exc:
        rprint(Panel(exc.diagnostic, title="[bold red]Extraction failed[/bold red]", border_style="red"))
        raise typer.Exit(code=1)
    except RetrievalError as exc:
        rprint(f"[bold red]Retrieval failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_result(result)


@cli.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="API server host."),
    port: int = typer.Option(8000, "--port", "-p", help="API server port."),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development."),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level."),
) -> None:
    """🚀 Start the FastAPI server."""
    import uvicorn

    rprint(Panel.fit(
        f"[bold cyan]Content Vault — API Server[/bold cyan]\n"
        f"[dim]Host:[/dim] {host}:{port}\n"
        f"[dim]Docs:[/dim] http://localhost:{port}/docs",
        border_style="green",
    ))

    uvicorn.run(
        "contentvault.api:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level.lower(),
    )


def _print_result(result: ExtractionResult) -> None:
    """Pretty-print an extraction result."""
    meta = result.metadata
    rprint(Panel.fit(
        f"[bold cyan]{result.title}[/bold cyan]\n"
        f"[dim]URL:[/dim] {meta.source_url}\n"
        f"[dim]Type:[/dim] {result.content_type.value}  •  [dim]Domain:[/dim] {meta.domain}",
        border_style="blue",
    ))

    table = Table(title="📊 Extraction", border_style="bright_blue")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="bold white")
    table.add_row("Words", str(result.word_count))
    table.add_row("Reading Time", f"{result.reading_time} min")
    table.add_row("Characters", str(meta.content_length))
    table.add_row("Images", str(len(result.images)) if result.has_real_images else "none")
    table.add_row("Tags", ", ".join(result.tags) or "-")
    console.print(table)

    rprint(f"\n[bold]Summary[/bold]\n{result.summary}\n")
    rprint(f"[dim]{meta.extraction_note}[/dim]")


if __name__ == "__main__":
    cli()
