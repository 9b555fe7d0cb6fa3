"""CLI interface for the PR reviewer service.

This module provides a command-line interface for creating a configuration
file, preparing the database, running the API server and checking status.
"""
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import uvicorn

from . import __version__
from .core.config.settings import ReviewerServiceConfig, init_config


def configure_logging(config: ReviewerServiceConfig) -> None:
    """Configure root logging from the service configuration."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
def cli():
    """PR Reviewer - reviewer assignment service for pull requests."""
    pass


@cli.command()
@click.option(
    "--config-path",
    "-c",
    type=click.Path(dir_okay=False),
    default="prreviewer.yaml",
    help="Path to configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Force overwrite existing config")
def init(config_path: str, force: bool):
    """Create a configuration file with default settings."""
    config_file = Path(config_path)

    if config_file.exists() and not force:
        click.echo(f"Configuration file already exists: {config_path}")
        click.echo("Use --force to overwrite")
        return

    try:
        config = ReviewerServiceConfig.create_default_config(config_file)

        click.echo(f"Created configuration file: {config_path}")
        click.echo("\nDefault configuration:")
        click.echo(f"  API Server: {config.api_host}:{config.api_port}")
        click.echo(f"  Database: {config.get_database_url()}")
        click.echo(f"  Reviewers per PR: {config.max_reviewers}")
        click.echo(f"\nEdit {config_path} to customize settings.")

    except Exception as e:
        click.echo(f"Error creating configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
def initdb(config: Optional[str]):
    """Create the database tables."""
    try:
        app_config = init_config(config) if config else init_config()
        from .core.storage.database import init_db

        async def create():
            db = init_db(app_config.get_database_url(), echo=app_config.db_echo)
            try:
                await db.create_tables()
            finally:
                await db.close()

        asyncio.run(create())
        click.echo(f"Database ready: {app_config.get_database_url()}")

    except Exception as e:
        click.echo(f"Error creating tables: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
@click.option("--host", help="Override API host")
@click.option("--port", type=int, help="Override API port")
def start(config: Optional[str], host: Optional[str], port: Optional[int]):
    """Start the API server."""
    try:
        app_config = init_config(config) if config else init_config()

        # Override with CLI options
        if host:
            app_config.api_host = host
        if port:
            app_config.api_port = port

        configure_logging(app_config)

        click.echo("Starting PR reviewer service...")
        click.echo(f"   API: http://{app_config.api_host}:{app_config.api_port}")
        click.echo("\nPress Ctrl+C to stop\n")

        from .api.app import create_app

        uvicorn.run(
            create_app(app_config),
            host=app_config.api_host,
            port=app_config.api_port,
            log_level=app_config.log_level.lower(),
        )

    except KeyboardInterrupt:
        click.echo("\n\nStopping PR reviewer service...")
    except Exception as e:
        click.echo(f"Error starting server: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
def status(config: Optional[str]):
    """Show configuration and database counts."""
    try:
        app_config = init_config(config) if config else init_config()

        click.echo("PR Reviewer Status")
        click.echo("=" * 50)
        click.echo(f"Configuration: {config or 'default'}")
        click.echo(f"Database URL: {app_config.get_database_url()}")
        click.echo(f"API Server: {app_config.api_host}:{app_config.api_port}")
        click.echo(f"Reviewers per PR: {app_config.max_reviewers}")
        click.echo(f"Log Level: {app_config.log_level}")

        from .core.storage.database import init_db
        from .core.storage.repositories import StatsRepository

        async def get_counts():
            db = init_db(app_config.get_database_url())
            try:
                await db.create_tables()
                async with db.session() as session:
                    return await StatsRepository(session).table_counts()
            finally:
                await db.close()

        counts = asyncio.run(get_counts())
        click.echo("\nDatabase connection successful")
        click.echo(
            f"Teams: {counts['teams']}, users: {counts['users']}, "
            f"pull requests: {counts['pull_requests']}, assignments: {counts['assignments']}"
        )

    except Exception as e:
        click.echo(f"Error checking status: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
