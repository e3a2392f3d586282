"""
Generic server CLI.

Command-line interface for serving the API and preparing the database.
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="generic-server",
    help="Generic CRUD server CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, help="Port (defaults to settings.port)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn

    from crud_shared.config.settings import settings

    uvicorn.run(
        "generic_server.main:app",
        host=host,
        port=port or settings.port,
        reload=reload,
    )


@app.command()
def routes():
    """List the registered entity endpoint groups."""
    from generic_server.main import app as api

    table = Table(title="Registered entities")
    table.add_column("Entity", style="cyan")
    table.add_column("DTO", style="magenta")
    table.add_column("Prefix", style="green")

    for controller in getattr(api.state, "crud_controllers", []):
        table.add_row(controller.entity_name, controller.dto.__name__, controller.prefix)

    console.print(table)


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create tables for every registered entity."""
    from crud_shared.infrastructure.db import dispose_engine
    from generic_server.core.lifespan import create_tables

    async def _init():
        try:
            await create_tables()
        finally:
            await dispose_engine()

    console.print("[blue]Creating tables...[/blue]")
    try:
        asyncio.run(_init())
        console.print("[green]✓ Tables created[/green]")
    except Exception as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    from generic_server import __version__

    console.print(f"generic-server [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
