"""CLI entry point for linktoarchive."""

import rich_click as click

from .. import __version__

# Import command modules without shadowing module names with command objects
from . import annotate as _annotate_mod
from . import classify as _classify_mod
from . import config_cmd as _config_mod
from . import web as _web_mod
from ._console import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output")
def cli(verbose: bool):
    """Archive links for external links on wiki pages."""
    setup_logging(verbose)


# Register commands
cli.add_command(_classify_mod.classify)
cli.add_command(_annotate_mod.annotate)
cli.add_command(_annotate_mod.decorate)
cli.add_command(_config_mod.config)
cli.add_command(_web_mod.web)


if __name__ == "__main__":
    cli()
