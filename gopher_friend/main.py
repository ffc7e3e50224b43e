"""
Command-line entry point for gopher-friend.

This module only parses arguments and presents results: it decides what goes
to stdout or stderr and which exit status the process ends with. A gopher
that does not exist is reported but is not treated as a failure; network and
filesystem errors exit with status 255.
"""
import sys

import click

from .config import EXIT_FAILURE, PROG_NAME, VERSION
from .logging_config import configure_logging, get_logger
from .services.completion import SHELLS, complete_var_for, completion_script
from .services.gopher_client import GopherError, GopherNotFoundError, gopher_client

logger = get_logger(__name__)


@click.group(help="Gopher CLI application written in Python.")
@click.version_option(version=VERSION, prog_name=PROG_NAME)
@click.option("-v", "--verbose", is_flag=True, help="Log progress at INFO level.")
def cli(verbose: bool):
    configure_logging(level="INFO" if verbose else None)


@cli.command()
@click.argument("gopher")
def get(gopher: str):
    """This command will get the desired Gopher"""
    try:
        saved = gopher_client.get_gopher(gopher)
    except GopherNotFoundError as e:
        click.echo(e.message, err=True)
        return
    except GopherError as e:
        logger.error("gopher_fetch_failed", gopher=gopher, error=e.message)
        click.echo(e.message, err=True)
        sys.exit(EXIT_FAILURE)

    click.echo(saved.message)


@cli.command()
@click.argument("shell", type=click.Choice(SHELLS))
@click.pass_context
def completion(ctx: click.Context, shell: str):
    """Generate completion script"""
    click.echo(completion_script(ctx.find_root().command, shell, PROG_NAME), nl=False)


def main():
    """Runs the CLI under a fixed program name so completion always matches."""
    cli(prog_name=PROG_NAME, complete_var=complete_var_for(PROG_NAME))


if __name__ == "__main__":
    main()
