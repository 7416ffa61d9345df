"""Database schema commands."""

import typer
from rich.console import Console
from rich.prompt import Confirm
from sqlalchemy.exc import SQLAlchemyError

from src.storefront.core.services import DbManageService, DbSessionService

console = Console()

db_app = typer.Typer(help="Manage the storefront database schema")

DATABASE_URL_OPTION = typer.Option(
    None, "--database-url", help="Database URL (default from config)"
)


@db_app.command("init")
def init_db(database_url: str | None = DATABASE_URL_OPTION) -> None:
    """Create all tables that do not exist yet."""
    try:
        DbManageService(DbSessionService(database_url)).create_all()
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print("[green]✅ Database tables created[/green]")


@db_app.command("drop")
def drop_db(
    database_url: str | None = DATABASE_URL_OPTION,
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Drop all storefront tables."""
    if not force and not Confirm.ask("Drop all storefront tables?"):
        console.print("[yellow]Cancelled[/yellow]")
        return
    try:
        DbManageService(DbSessionService(database_url)).drop_all()
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Failed to drop tables: {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print("[green]✅ Database tables dropped[/green]")
