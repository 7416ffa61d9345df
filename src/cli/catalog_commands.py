"""Catalog seeding and inspection commands."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from src.storefront.core.errors import StoreFaultError
from src.storefront.core.services import (
    CatalogQueryService,
    DbManageService,
    DbSessionService,
)
from src.storefront.core.services.catalog import generate_seed_products, load_seed_file
from src.storefront.runtime.context import get_config

from .db_commands import DATABASE_URL_OPTION

console = Console()

catalog_app = typer.Typer(help="Seed and inspect the product catalog")


@catalog_app.command("seed")
def seed(
    count: int | None = typer.Option(
        None, "--count", "-n", min=0, help="Number of products to generate"
    ),
    file: Path | None = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="JSON file of products"
    ),
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Replace the whole catalog in one transaction."""
    if count is not None and file is not None:
        console.print("[red]❌ Use either --count or --file, not both[/red]")
        raise typer.Exit(code=1)

    if file is not None:
        try:
            products = load_seed_file(file)
        except ValueError as e:
            console.print(f"[red]❌ {e}[/red]")
            raise typer.Exit(code=1) from e
    else:
        products = generate_seed_products(
            get_config().catalog.seed_count if count is None else count
        )

    db_service = DbSessionService(database_url)
    DbManageService(db_service).create_all()
    try:
        with db_service.session_scope() as session:
            inserted = CatalogQueryService(session).reseed(products)
    except StoreFaultError as e:
        console.print("[red]❌ Reseed failed; the previous catalog was kept[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Catalog seeded with {inserted} products[/green]")


@catalog_app.command("stats")
def stats(database_url: str | None = DATABASE_URL_OPTION) -> None:
    """Show product counts per category."""
    db_service = DbSessionService(database_url)
    DbManageService(db_service).create_all()
    try:
        with db_service.session_scope() as session:
            counts = CatalogQueryService(session).category_counts()
    except StoreFaultError as e:
        console.print("[red]❌ Failed to read the catalog[/red]")
        raise typer.Exit(code=1) from e

    if not counts:
        console.print("[yellow]The catalog is empty[/yellow]")
        return

    table = Table(title="Products per category")
    table.add_column("Category", style="cyan")
    table.add_column("Products", style="green", justify="right")
    for category, total in counts:
        table.add_row(category, str(total))

    console.print(table)
    console.print(f"\n[green]{sum(total for _, total in counts)} products in total[/green]")
