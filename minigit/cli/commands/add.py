"""Add command - stage files for commit."""

import click
from pathlib import Path
from minigit.cli.context import handle_errors, open_repository
from minigit.cli.output import success, info, short_hash


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
@handle_errors
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Stage files for the next commit. Adding a file that is already staged
    replaces its staged content. Directories are added recursively,
    skipping hidden entries. If any path is missing nothing is staged.

    Examples:
        minigit add file.txt
        minigit add a.txt b.txt
        minigit add src
    """
    repo = open_repository()

    # Paths on the command line are relative to where the user is
    resolved = [Path.cwd() / p for p in paths]
    staged = repo.add(resolved)

    if not staged:
        click.echo(info("No files to add"))
        return

    click.echo(success(f"Added {len(staged)} file(s) to staging area"))
    for filename, blob_hash in staged.items():
        click.echo(info(f"  {filename} ({short_hash(blob_hash)})"))
