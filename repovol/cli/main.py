"""repovol CLI"""

import click

from repovol import __version__
from repovol.cli.workspace import create, provision, show_capabilities, snapshot, sync

from .debug import add_debug_option


@click.group()
@click.version_option(__version__, prog_name="repovol")
@click.pass_context
def cli(ctx):
    """
    Isolated repository workspaces on copy-on-write volumes.
    """
    ctx.ensure_object(dict)


cli.add_command(add_debug_option(show_capabilities))
cli.add_command(add_debug_option(create))
cli.add_command(add_debug_option(snapshot))
cli.add_command(add_debug_option(sync))
cli.add_command(add_debug_option(provision))

add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})
