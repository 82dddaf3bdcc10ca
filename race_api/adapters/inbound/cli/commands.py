"""CLI interface for the race data API."""

import asyncio
import json

import typer
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ....config.settings import get_settings
from ...common.exception_handler import format_exception_json
from ...outbound.mongo_adapter import MongoDocumentStore

app = typer.Typer(
    name="race-api",
    help="Read-only HTTP API over MongoDB-hosted F1 race data",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)

APP_FACTORY = "race_api.adapters.inbound.api.main:create_app"


def handle_cli_error(exc: Exception) -> None:
    """Display an error with its code and location.

    In debug mode, shows full JSON error details.
    """
    settings = get_settings()
    error_data = format_exception_json(exc, include_trace=settings.debug)

    if settings.debug:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error = error_data["error"]
    code = escape(f"[{error.get('code', 'UNKNOWN')}]")
    console.print(f"\n[red]Error {code}:[/] {escape(error['message'])}")
    console.print(f"[dim]Type: {error['type']}[/]")
    if cause := error_data.get("cause"):
        console.print(f"[dim]Cause: {cause['type']}: {escape(cause['message'])}[/]")
    console.print("[dim]Set DEBUG=true for full details[/]")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


async def _collection_counts(store: MongoDocumentStore, collections: dict[str, str]) -> dict:
    await store.connect()
    try:
        return {
            entity: (name, await store.count_documents(name))
            for entity, name in collections.items()
        }
    finally:
        await store.close()


@app.command()
def check() -> None:
    """Connect to MongoDB and report document counts per collection."""
    settings = get_settings()
    store = MongoDocumentStore(
        settings.mongo_uri,
        settings.database,
        connect_timeout_ms=settings.connect_timeout_ms,
    )

    try:
        with console.status("[bold green]Connecting to MongoDB...[/]"):
            counts = asyncio.run(_collection_counts(store, settings.collections))
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    table = Table(title=f"Database '{settings.database}'")
    table.add_column("Entity", style="cyan")
    table.add_column("Collection")
    table.add_column("Documents", justify="right", style="green")
    for entity, (name, count) in counts.items():
        table.add_row(entity, name, str(count))
    console.print(table)


@app.command()
def routes() -> None:
    """List the HTTP routes served by the API."""
    from ..api.main import create_app

    api = create_app()
    console.print("[bold]Routes[/]")
    for route in api.routes:
        methods = getattr(route, "methods", None)
        if not methods or route.path.startswith(("/docs", "/redoc", "/openapi")):
            continue
        verbs = ", ".join(sorted(methods - {"HEAD"}))
        console.print(f"{verbs:<8} {route.path}", highlight=False, markup=False, soft_wrap=True)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
