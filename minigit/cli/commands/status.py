"""Status command - show staging area and working tree status."""

import click
from colorama import Fore, Style
from minigit.cli.context import handle_errors, open_repository
from minigit.cli.output import info, short_hash
from minigit.operations.diff import ChangeType


@click.command('status')
@handle_errors
def status_cmd():
    """
    Show the working tree status.

    Displays:
    - The current branch and its head commit
    - Files staged for the next commit, compared with the head snapshot
    - Tracked files whose working copy differs from what was staged or committed

    Examples:
        minigit status
    """
    repo = open_repository()

    branch = repo.current_branch
    head = repo.refs.resolve_head(branch)

    click.echo(f"On branch {Fore.GREEN}{branch}{Style.RESET_ALL}")
    if head:
        click.echo(f"Head commit {short_hash(head)}")
    else:
        click.echo("No commits yet")
    click.echo()

    staged = repo.read_index().materialize()
    changes = {change.path: change for change in repo.diff.diff_index_to_head()}

    if staged:
        click.echo("Changes to be committed:")
        for path in staged:
            change = changes.get(path)
            if change is None:
                label = "unchanged:"
            elif change.change is ChangeType.ADDED:
                label = "new file:"
            else:
                label = "modified:"
            click.echo(f"  {Fore.GREEN}{label:<12}{path}{Style.RESET_ALL}")
        click.echo()

    unstaged = repo.diff.diff_working_tree()
    if unstaged:
        click.echo("Changes not staged for commit:")
        for change in unstaged:
            label = "deleted:" if change.change is ChangeType.REMOVED else "modified:"
            click.echo(f"  {Fore.RED}{label:<12}{change.path}{Style.RESET_ALL}")
        click.echo(info("Use 'minigit add <file>' to stage changes"))
        click.echo()

    if not staged and not unstaged:
        click.echo("Nothing to commit")
