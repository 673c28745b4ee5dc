"""Warden CLI application using Typer.

This module provides command-line utilities for the Warden backend:
secret generation, role management, session housekeeping and running
the API server.
"""

import asyncio
import secrets
from datetime import timedelta
from typing import Awaitable, Callable, TypeVar

import typer
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncSession

from warden.application.commands import UpdateUserRoleCommand
from warden.application.services import SessionService
from warden.domain.shared.exceptions import DomainException
from warden.domain.user import UserNotFoundError, UserRole
from warden.infrastructure.persistence.sqlalchemy.repositories import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from warden.presentation.api.dependencies import (
    create_tables,
    get_engine,
    get_session_maker,
)
from warden_auth import JWTService
from warden_config.settings import get_settings

T = TypeVar("T")

app = typer.Typer(
    name="warden",
    help="Warden - accounts, authentication and sessions CLI",
    no_args_is_help=True,
)
console = Console()


# Create subcommand groups
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
users_app = typer.Typer(
    name="users",
    help="User administration",
    no_args_is_help=True,
)
sessions_app = typer.Typer(
    name="sessions",
    help="Session housekeeping",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(users_app)
app.add_typer(sessions_app)


def _run_in_session(work: Callable[[AsyncSession], Awaitable[T]]) -> T:
    """Run ``work`` inside a committed database session."""

    async def _main() -> T:
        await create_tables()
        try:
            async with get_session_maker()() as session:
                result = await work(session)
                await session.commit()
                return result
        finally:
            await get_engine().dispose()

    return asyncio.run(_main())


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Warden configuration.

    Generates two required secrets:
    - JWT_SECRET_KEY: Secret for signing session tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Warden Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes keeps HS256 well above its minimum key length
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]⚠  Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


def _change_role(identifier: str, role: UserRole) -> None:
    async def _work(session: AsyncSession) -> str:
        user_repo = UserRepositorySQLAlchemy(session)
        user = await user_repo.find_by_identifier(identifier)
        if user is None:
            raise UserNotFoundError(identifier)
        updated = await UpdateUserRoleCommand(user_repo).execute(user.id, role)
        return updated.username

    try:
        username = _run_in_session(_work)
    except DomainException as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]{username}[/green] is now [bold]{role.value}[/bold]")


@users_app.command("promote")
def promote_user(
    identifier: str = typer.Argument(..., help="Email address or username"),
) -> None:
    """Grant the ADMIN role to a user."""
    _change_role(identifier, UserRole.ADMIN)


@users_app.command("demote")
def demote_user(
    identifier: str = typer.Argument(..., help="Email address or username"),
) -> None:
    """Reset a user to the USER role."""
    _change_role(identifier, UserRole.USER)


@sessions_app.command("purge")
def purge_sessions() -> None:
    """Delete every expired session."""
    settings = get_settings()

    async def _work(session: AsyncSession) -> int:
        service = SessionService(
            session_repository=SessionRepositorySQLAlchemy(session),
            jwt_service=JWTService(settings.jwt_secret_key.get_secret_value()),
            session_lifetime=timedelta(days=settings.session_expire_days),
        )
        return await service.purge_expired()

    count = _run_in_session(_work)
    console.print(f"Removed [bold]{count}[/bold] expired session(s)")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "warden.presentation.api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
