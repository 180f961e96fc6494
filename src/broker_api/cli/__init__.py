"""Main CLI application module."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.broker_api.core.exceptions import ConfigurationError, DatabaseError
from src.broker_api.runtime.context import get_config

console = Console()

app = typer.Typer(
    help="Broker Retailer API - server and database utilities",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command(name="serve")
def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    Start the API server with uvicorn.

    The process exits without serving if the database is unreachable.
    """
    import uvicorn

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            "[bold green]Starting Broker Retailer API[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{bind_host}:{bind_port}")

    uvicorn.run(
        "src.broker_api.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=log_level,
        access_log=False,
    )


@app.command(name="check-db")
def check_db() -> None:
    """Connect with the configured DATABASE_URL and run a health check."""
    from src.broker_api.core.services import PooledDatabase

    try:
        database = PooledDatabase(get_config())
    except ConfigurationError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from e

    try:
        database.health_check()
        status = database.get_pool_status()
    except DatabaseError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from e
    finally:
        database.close()

    console.print("[green]✅ Database is reachable[/green]")
    table = Table(title="Connection pool")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for name, value in status.items():
        table.add_row(name, str(value))
    console.print(table)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
