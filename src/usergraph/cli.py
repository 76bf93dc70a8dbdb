#!/usr/bin/env python3
"""
Main CLI entry point for the usergraph server.
"""

import asyncio
import os
import socket
import sys
from collections.abc import Iterable

import click
import uvicorn

from usergraph import __version__
from usergraph.config import ServerConfig, get_settings
from usergraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


def bound_addresses(servers: Iterable[asyncio.Server]) -> list[ServerConfig]:
    """List the TCP addresses the given asyncio servers are listening on."""
    addresses = []
    for server in servers:
        for sock in server.sockets:
            if sock.family not in (socket.AF_INET, socket.AF_INET6):
                continue
            host, port = sock.getsockname()[:2]
            addresses.append(ServerConfig(host=host, port=port))
    return addresses


class ReportingServer(uvicorn.Server):
    """uvicorn server that logs the resolved listening address once bound.

    A failed bind never reaches the log line: uvicorn reports the OS error and
    exits the process with status 1.
    """

    def __init__(self, config: uvicorn.Config, graphiql: bool = True):
        super().__init__(config)
        self.graphiql = graphiql

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if self.should_exit:
            return

        for address in bound_addresses(self.servers):
            logger.info(
                "Server running",
                address=address.url,
                graphiql=f"{address.url}/graphiql" if self.graphiql else None,
            )
            if self.graphiql:
                logger.info(
                    "Server running (friendly URL)",
                    url=f"http://localhost:{address.port}/graphiql",
                )


@click.group()
@click.version_option(version=__version__, prog_name="usergraph")
def cli() -> None:
    """usergraph CLI - run the GraphQL server and inspect its schema."""
    pass


@cli.command()
@click.option(
    "--host",
    default=None,
    help="Host to bind to (default: 127.0.0.1, or 0.0.0.0 when PORT is set)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind to (default: $PORT, else 8080)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: from USERGRAPH_LOG_LEVEL, else info)",
)
def serve(
    host: str | None,
    port: int | None,
    reload: bool,
    log_level: str | None,
) -> None:
    """Start the GraphQL API server."""

    # The app module reads settings on import; export CLI choices first
    if log_level == "debug":
        os.environ["USERGRAPH_DEBUG"] = "true"
    if log_level:
        os.environ["USERGRAPH_LOG_LEVEL"] = log_level
    get_settings.cache_clear()
    settings = get_settings()

    configure_logging(debug=settings.debug, level=settings.log_level)

    server_config = settings.server_config()
    host = host or server_config.host
    port = port or server_config.port
    uvicorn_log_level = settings.log_level.lower()

    logger.info(
        "Starting usergraph API server",
        host=host,
        port=port,
        public=server_config.public,
        reload=reload,
        log_level=uvicorn_log_level,
    )

    try:
        if reload:
            uvicorn.run(
                "usergraph.api.app:app",
                host=host,
                port=port,
                reload=True,
                log_level=uvicorn_log_level,
                access_log=True,
            )
        else:
            from usergraph.api.app import create_app

            config = uvicorn.Config(
                create_app(settings),
                host=host,
                port=port,
                log_level=uvicorn_log_level,
                access_log=True,
            )
            ReportingServer(config, graphiql=settings.graphiql).run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
def schema() -> None:
    """Print the GraphQL schema in SDL form."""
    from usergraph.graphql.schema import print_schema

    click.echo(print_schema())


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
