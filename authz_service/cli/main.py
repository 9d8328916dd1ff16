"""Main CLI entry point for authz-service management commands."""

import click

from authz_service import __version__
from authz_service.cli.commands import database, resolve, server
from authz_service.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="authz-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Authorization service CLI.

    \b
    Commands:
      db        Permission database management
      check     Evaluate one request offline
      patterns  Show the candidate patterns for a resource
      serve     Run the API server

    \b
    Quick Start:
      authz-service db seed
      authz-service check user456 GET /wallets/wallet-123
      authz-service serve
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(resolve.check)
cli.add_command(resolve.patterns)
cli.add_command(server.serve)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
