"""tagcheck CLI - tagcheck command."""

import click

from tagcheck import __version__
from tagcheck.cli.check import check_command
from tagcheck.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="tagcheck")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """tagcheck - find fields sharing a serialization tag in compiled classes."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(check_command, name="check")


if __name__ == "__main__":
    cli()
