"""
CRUD starter CLI.

Command-line interface for common maintenance operations.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from starter_shared.config.constants import SortDefaults
from starter_shared.config.logging import cli_logger as logger

app = typer.Typer(
    name="crud-starter",
    help="CRUD starter management CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================


@app.command()
def init_db():
    """Create missing database tables."""
    from starter_api.models import Base
    from starter_shared.infrastructure.db import engine

    console.print(f"[blue]Creating tables on: {engine.url.render_as_string(hide_password=True)}[/blue]")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Tables created/verified[/green]")


# =============================================================================
# User Commands
# =============================================================================


@app.command()
def create_user(
    username: str = typer.Argument(..., help="Unique username"),
    email: str = typer.Argument(..., help="Unique email address"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Clear-text password"
    ),
    firstname: Optional[str] = typer.Option(None, help="First name"),
    lastname: Optional[str] = typer.Option(None, help="Last name"),
):
    """Create a user account."""
    from starter_api.controllers import UserController
    from starter_api.schemas import UserDto
    from starter_api.services.domain import UserService
    from starter_shared.infrastructure.db import get_db_context

    dto = UserDto(
        username=username,
        email=email,
        password=password,
        firstname=firstname,
        lastname=lastname,
    )
    with get_db_context() as db:
        outcome = UserController(UserService(db)).add(dto)

    if outcome.status_code != 201:
        console.print(f"[red]✗ User '{username}' or email '{email}' already exists[/red]")
        raise typer.Exit(1)

    logger.info("User created from CLI", user_id=str(outcome.body.id))
    console.print(f"[green]✓ Created user {outcome.body.id}[/green]")


@app.command()
def list_users(
    sort: str = typer.Option(SortDefaults.DEFAULT_SORT_QUERY, help="Sort query, e.g. 'username,ASC'"),
):
    """List user accounts."""
    from starter_api.controllers import UserController
    from starter_api.services.domain import UserService
    from starter_shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        users = UserController(UserService(db)).list_all(sort).body

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="dim")
    table.add_column("Username", style="cyan")
    table.add_column("Email")
    table.add_column("Enabled")
    table.add_column("Verified")
    table.add_column("Created", style="dim")

    for user in users:
        table.add_row(
            str(user.id),
            user.username,
            user.email,
            "✓" if user.enabled else "✗",
            "✓" if user.verified else "✗",
            user.created_at.isoformat() if user.created_at else "",
        )

    console.print(table)


@app.command()
def delete_users(
    ids: str = typer.Argument(..., help="Comma-separated user ids"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete user accounts by id."""
    from starter_api.controllers import UserController
    from starter_api.services.domain import UserService
    from starter_shared.infrastructure.db import get_db_context

    if not yes:
        typer.confirm(f"Delete users {ids}?", abort=True)

    with get_db_context() as db:
        outcome = UserController(UserService(db)).delete_all(ids)

    if outcome.status_code != 204:
        console.print("[yellow]Some users could not be deleted (unknown ids)[/yellow]")
        raise typer.Exit(1)
    console.print("[green]✓ Users deleted[/green]")


if __name__ == "__main__":
    app()
