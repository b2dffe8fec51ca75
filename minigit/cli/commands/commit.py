"""Commit command - create a commit from staged changes."""

import click
from minigit.cli.context import handle_errors, open_repository
from minigit.cli.output import success, info, short_hash


@click.command('commit')
@click.option('-m', '--message', default='', help='Commit message')
@handle_errors
def commit_cmd(message):
    """
    Record changes to the repository.

    Creates a commit on the current branch whose snapshot is exactly the
    staging area, then empties the staging area.

    Examples:
        minigit commit -m "Initial commit"
    """
    repo = open_repository()

    commit_hash = repo.commit(message)
    commit = repo.get_commit(commit_hash)

    click.echo(success(f"Created commit {short_hash(commit_hash)} on {commit.branch}"))
    click.echo(info(f"Message: {commit.message}"))
    if commit.parent:
        click.echo(info(f"Parent: {short_hash(commit.parent)}"))
    else:
        click.echo(info("(root commit)"))
    click.echo(info(f"Files: {len(commit.snapshot)}"))
