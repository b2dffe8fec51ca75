"""Diff command - show filename-level changes between commits."""

import click
from colorama import Fore, Style
from minigit.cli.context import handle_errors, open_repository
from minigit.cli.output import info, short_hash
from minigit.operations.diff import ChangeType

CHANGE_COLORS = {
    ChangeType.ADDED: Fore.GREEN,
    ChangeType.MODIFIED: Fore.YELLOW,
    ChangeType.REMOVED: Fore.RED,
}


def format_change(change):
    """Render one FileChange as a single line."""
    color = CHANGE_COLORS[change.change]
    if change.change is ChangeType.MODIFIED:
        detail = f"{short_hash(change.old_hash)} -> {short_hash(change.new_hash)}"
    elif change.change is ChangeType.ADDED:
        detail = short_hash(change.new_hash)
    else:
        detail = short_hash(change.old_hash)
    return f"{color}{change.change.value}  {change.path}{Style.RESET_ALL}  ({detail})"


@click.command('diff')
@click.argument('commit_a')
@click.argument('commit_b')
@click.option('--stat', is_flag=True, help='Only print the number of changes of each kind')
@handle_errors
def diff_cmd(commit_a, commit_b, stat):
    """
    Show changes between two commits.

    Lists every file added (A), modified (M) or removed (D) going from
    COMMIT_A to COMMIT_B, sorted by filename. Commits can be given as full
    hashes, unique hash prefixes or branch names.

    Examples:
        minigit diff 1a2b3c4d 5e6f7a8b
        minigit diff main feature
    """
    repo = open_repository()

    old_hash = repo.resolve_commit(commit_a)
    new_hash = repo.resolve_commit(commit_b)
    changes = repo.diff.diff_commits(old_hash, new_hash)

    if not changes:
        click.echo(info(f"No differences between {short_hash(old_hash)} and {short_hash(new_hash)}"))
        return

    if stat:
        for change_type in ChangeType:
            count = sum(1 for c in changes if c.change is change_type)
            click.echo(f"{change_type.label}: {count}")
        return

    for change in changes:
        click.echo(format_change(change))
