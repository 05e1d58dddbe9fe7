#!/usr/bin/env python3
"""
Main CLI entry point for Roster backend server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from roster import __version__
from roster.config import settings
from roster.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="roster")
def cli() -> None:
    """Roster CLI - run the API server and prepare the database."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, show_default=True, help="Host to bind to")
@click.option(
    "--port", default=settings.api_port, type=int, show_default=True, help="Port to bind to"
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the Roster API server."""

    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    logger.info(
        "Starting Roster API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Settings are read at import time, so pass them through the environment
    # for reload/worker subprocesses
    if log_level == "debug":
        os.environ["ROSTER_DEBUG"] = "true"
        os.environ["ROSTER_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("ROSTER_DEBUG", "false")
        os.environ.setdefault("ROSTER_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "roster.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),
                log_level=log_level,
                access_log=True,
            )
        else:
            from roster.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
def init_db() -> None:
    """Create the unique indexes on the accounts and employees collections."""
    from roster.database.connection import (
        check_database_connection,
        ensure_indexes,
        init_database,
        reset_database,
    )

    configure_logging()

    async def do_init():
        db = init_database()
        try:
            success, error = await check_database_connection()
            if not success:
                click.echo(f"✗ {error}", err=True)
                sys.exit(1)
            await ensure_indexes(db)
            click.echo("✓ Indexes created")
        finally:
            reset_database()

    asyncio.run(do_init())


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
