"""Main CLI entry point for MiniGit."""

import logging

import click
from colorama import init

from minigit import __version__
from minigit.cli.output import BANNER
from minigit.cli.commands import (init_cmd, add_cmd, commit_cmd, config_cmd, status_cmd,
                                  log_cmd, branch_cmd, checkout_cmd, diff_cmd, merge_cmd)
from minigit.core.config import Config

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


class MiniGitGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=MiniGitGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log internal operations to stderr')
@click.option('--no-color', is_flag=True, help='Disable coloured output')
def cli(verbose, no_color):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    if no_color or not Config().color:
        init(autoreset=True, strip=True)


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(config_cmd)
cli.add_command(status_cmd)
cli.add_command(log_cmd)
cli.add_command(branch_cmd)
cli.add_command(checkout_cmd)
cli.add_command(diff_cmd)
cli.add_command(merge_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
