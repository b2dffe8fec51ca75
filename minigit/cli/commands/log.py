"""Log command - show commit history."""

import click
from colorama import Fore, Style
from minigit.cli.context import handle_errors, open_repository
from minigit.cli.output import info, format_timestamp, short_hash
from minigit.operations.log import LogWalker


def format_commit(commit, oneline=False):
    """Render one commit as log output lines."""
    if oneline:
        summary = commit.message.split('\n')[0]
        return [f"{Fore.YELLOW}{short_hash(commit.hash)}{Style.RESET_ALL} {summary}"]

    lines = [f"{Fore.YELLOW}commit {commit.hash}{Style.RESET_ALL}"]
    if commit.is_merge:
        lines.append("Merge: " + ' '.join(short_hash(p) for p in commit.parents))
    lines.append(f"Branch: {commit.branch}")
    lines.append(f"Date:   {format_timestamp(commit.timestamp)}")
    lines.append("")
    for message_line in commit.message.split('\n'):
        lines.append(f"    {message_line}")
    lines.append("")
    return lines


@click.command('log')
@click.argument('branch', required=False)
@click.option('-n', '--max-count', type=int, help='Limit the number of commits shown')
@click.option('--oneline', is_flag=True, help='Show each commit on a single line')
@handle_errors
def log_cmd(branch, max_count, oneline):
    """
    Show commit history.

    Lists the commits reachable from a branch head (the current branch by
    default), newest first, down to the root commit.

    Examples:
        minigit log
        minigit log feature
        minigit log -n 5 --oneline
    """
    repo = open_repository()
    walker = LogWalker(repo, branch)

    if not walker.has_commits:
        click.echo(info(f"No commits yet on branch {walker.branch}"))
        return

    for commit in walker.take(max_count):
        for line in format_commit(commit, oneline=oneline):
            click.echo(line)
