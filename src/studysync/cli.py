"""Command-line interface for StudySync.

This module provides the CLI commands for running and managing
the StudySync application.
"""

from typing import NoReturn

import click

from studysync import __version__
from studysync.core.config import get_settings
from studysync.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="StudySync")
def cli() -> None:
    """StudySync - study group task tracking backend.

    Settings are read from STUDYSYNC_* environment variables and .env.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Enable auto-reload (defaults to on in development)",
)
def serve(host: str | None, port: int | None, reload: bool | None) -> None:
    """Start the StudySync server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    if reload is None:
        reload = settings.is_development

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting StudySync server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "studysync.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
@click.option(
    "--force",
    is_flag=True,
    help="Drop existing tables before creating them (deletes all data)",
)
@click.option(
    "--yes",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool, yes: bool) -> None:
    """Create all database tables."""
    import asyncio

    from studysync.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if not yes:
        prompt = (
            "This will DROP and recreate all database tables. Continue?"
            if force
            else "This will create all database tables. Continue?"
        )
        click.confirm(prompt, abort=True, default=False)

    async def initialize():
        db = get_db_manager()
        try:
            if force:
                from studysync.infrastructure.persistence import models  # noqa: F401

                await db.drop_tables()
            await init_database(create_tables=True)
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
def info() -> None:
    """Display StudySync configuration. Secrets are never printed."""
    from sqlalchemy.engine import make_url

    settings = get_settings()
    database_url = make_url(settings.database_url).render_as_string(hide_password=True)
    secret = "built-in default (change it!)" if settings.uses_default_secret else "set"

    click.echo(f"""
StudySync v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}

Database:
  URL:          {database_url}
  Echo:         {settings.db_echo}

Security:
  Secret Key:   {secret}
  Token Expire: {settings.access_token_expire_minutes} minutes
  CORS Origins: {', '.join(settings.cors_origins)}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `studysync` command is run
    or when using `python -m studysync`.
    """
    cli()


if __name__ == "__main__":
    main()
