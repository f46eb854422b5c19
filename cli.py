#!/usr/bin/env python3
"""
Notes Application CLI.

Primary entry point for all application operations.
Use --service to select what to run.

Usage:
    python cli.py --help
    python cli.py --service server --verbose
    python cli.py --service config
    python cli.py --service init-db
    python cli.py --service create-user --email ada@example.com --name "Ada" --role admin
    python cli.py --service token --email ada@example.com
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click
import structlog

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from rolenotes.backend.core.config import validate_project_root
from rolenotes.backend.core.logging import get_logger, log_with_source, setup_logging


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["server", "config", "init-db", "create-user", "token"]),
    default="config",
    help="Service or command to run.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option("--host", default=None, help="Server host.")
@click.option("--port", default=None, type=int, help="Server port.")
@click.option("--reload", is_flag=True, help="Enable auto-reload (server only).")
@click.option("--email", default=None, help="User email (create-user, token).")
@click.option("--name", default=None, help="Display name (create-user).")
@click.option(
    "--role",
    type=click.Choice(["member", "admin"]),
    default="member",
    help="User role (create-user).",
)
def main(
    service: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    email: str | None,
    name: str | None,
    role: str,
) -> None:
    """
    Notes Application CLI.

    \b
    Examples:
        python cli.py --service server --verbose
        python cli.py --service server --port 8099 --reload
        python cli.py --service config
        python cli.py --service init-db
        python cli.py --service create-user --email m1@example.com --name "Member One"
        python cli.py --service token --email m1@example.com
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)
    logger.debug("CLI invoked", extra={"service": service, "log_level": log_level})

    if service == "server":
        run_server(logger, host, port, reload)
    elif service == "config":
        show_config(logger)
    elif service == "init-db":
        asyncio.run(init_db(logger))
    elif service == "create-user":
        if not email or not name:
            raise click.UsageError("create-user requires --email and --name")
        asyncio.run(create_user(logger, email, name, role))
    elif service == "token":
        if not email:
            raise click.UsageError("token requires --email")
        asyncio.run(issue_token(logger, email))


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI development server."""
    from rolenotes.backend.core.config import get_app_config

    try:
        server_config = get_app_config().application.server
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration.", extra={"error": str(e)})
        click.echo(
            click.style("Error: Could not load config/settings/application.yaml.", fg="red"),
            err=True,
        )
        sys.exit(1)

    server_host = host or server_config.host
    server_port = port or server_config.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "rolenotes.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def show_config(logger) -> None:
    """Print the loaded YAML configuration (secrets are never shown)."""
    from rolenotes.backend.core.config import get_app_config, get_server_base_url

    app_config = get_app_config()
    sections = {
        "application": app_config.application,
        "database": app_config.database,
        "logging": app_config.logging,
        "security": app_config.security,
    }

    click.echo(click.style(f"Server: {get_server_base_url()}", bold=True))
    for section, values in sections.items():
        click.echo(click.style(f"\n[{section}]", fg="cyan"))
        for key, value in values.model_dump().items():
            click.echo(f"  {key}: {value}")

    logger.debug("Configuration displayed")


async def init_db(logger) -> None:
    """Create missing tables in the configured database."""
    from rolenotes.backend.core.database import dispose_engine, init_models

    try:
        await init_models()
    finally:
        await dispose_engine()

    click.echo(click.style("Database tables created.", fg="green"))


async def create_user(logger, email: str, name: str, role: str) -> None:
    """Register a user in the identity table."""
    from rolenotes.backend.core.database import dispose_engine, get_session_factory
    from rolenotes.backend.repositories.user import UserRepository

    try:
        async with get_session_factory()() as session:
            repo = UserRepository(session)
            if await repo.get_by_email(email) is not None:
                click.echo(f"User {email} already exists, skipping.")
                return

            user = await repo.create(email=email, name=name, role=role)
            await session.commit()
    finally:
        await dispose_engine()

    log_with_source(logger, "cli", "info", "User created", user_id=user.id, role=role)
    click.echo(click.style(f"Created user {email} ({role}) with id {user.id}", fg="green"))


async def issue_token(logger, email: str) -> None:
    """Print a bearer token for an existing user."""
    from rolenotes.backend.core.database import dispose_engine, get_session_factory
    from rolenotes.backend.core.security import create_access_token
    from rolenotes.backend.repositories.user import UserRepository

    try:
        async with get_session_factory()() as session:
            user = await UserRepository(session).get_by_email(email)
    finally:
        await dispose_engine()

    if user is None:
        click.echo(click.style(f"Error: no user with email {email}", fg="red"), err=True)
        sys.exit(1)

    token = create_access_token({"sub": user.id})
    logger.info("Token issued", extra={"user_id": user.id})
    click.echo(token)


if __name__ == "__main__":
    main()
