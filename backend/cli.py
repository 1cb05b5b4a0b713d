"""
Cafe orders CLI.

Command-line interface for database setup, seeding and diagnostics.

    cafe-orders init-db
    cafe-orders seed --cafe-id 1
"""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="cafe-orders",
    help="Cafe ordering management CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================


@app.command()
def init_db():
    """Create all database tables."""
    from cafe_api.models import Base
    from shared.infrastructure.db import engine

    console.print("[blue]Creating tables...[/blue]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Tables created/verified[/green]")


@app.command()
def seed(
    cafe_id: int = typer.Option(..., "--cafe-id", help="Cafe to seed"),
):
    """Create eight tables and a starter menu for a cafe."""
    from cafe_api.seed import seed_basic
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import NotFoundError

    try:
        with get_db_context() as db:
            result = seed_basic(db, cafe_id)
    except NotFoundError as e:
        console.print(f"[red]✗ {e.detail}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Seed for cafe {result.cafe_id}")
    table.add_column("Entity", style="cyan")
    table.add_column("Created", style="green")
    table.add_row("Tables", str(result.tables_created))
    table.add_row("Menu items", str(result.menu_items_created))
    console.print(table)


@app.command()
def create_super_admin(
    name: str = typer.Option(..., prompt=True),
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
):
    """Create the first platform administrator."""
    from cafe_api.services.domain import AuthService
    from shared.config.constants import Limits
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import ConflictError

    if len(password) < Limits.MIN_PASSWORD_LENGTH:
        console.print(f"[red]✗ Password must have at least {Limits.MIN_PASSWORD_LENGTH} characters[/red]")
        raise typer.Exit(1)

    try:
        with get_db_context() as db:
            user = AuthService(db).register_super_admin(name, email, password)
            user_id = user.id
    except ConflictError as e:
        console.print(f"[red]✗ {e.detail}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Super admin created (id={user_id})[/green]")


@app.command()
def list_cafes():
    """Show cafes with their status."""
    from cafe_api.services.domain import CafeService
    from shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        cafes = CafeService(db).list_all(include_deleted=True, limit=200)

    table = Table(title="Cafes")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Status", style="green")
    table.add_column("Billing")
    for cafe in cafes:
        table.add_row(str(cafe.id), cafe.name, cafe.status, cafe.payment_status)
    console.print(table)


# =============================================================================
# Redis Commands
# =============================================================================


@app.command()
def check_redis():
    """Ping the Redis server used for order notifications."""

    async def _check() -> bool:
        from shared.infrastructure.events import check_redis_health, close_redis_pool

        try:
            return await check_redis_health()
        finally:
            await close_redis_pool()

    if asyncio.run(_check()):
        console.print("[green]✓ Redis reachable[/green]")
    else:
        console.print("[red]✗ Redis unreachable[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
