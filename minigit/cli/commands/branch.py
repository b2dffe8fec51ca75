"""Branch command - list or create branches."""

import click
from colorama import Fore, Style
from minigit.cli.context import handle_errors, open_repository
from minigit.cli.output import success, short_hash


def get_commit_summary(repo, commit_hash):
    """First line of a commit message, shortened for listings."""
    if not commit_hash:
        return "(no commits)"
    message = repo.get_commit(commit_hash).message.split('\n')[0]
    if len(message) > 50:
        message = message[:47] + "..."
    return message


@click.command('branch')
@click.option('-v', '--verbose', is_flag=True, help='Show commit hash and message')
@click.argument('branch_name', required=False)
@handle_errors
def branch_cmd(verbose, branch_name):
    """
    List or create branches.

    With no arguments, lists all branches; the current branch is marked
    with *. With a name, creates a new branch at the current branch's head.

    Examples:
        minigit branch                 # List branches
        minigit branch -v              # List branches with commit info
        minigit branch feature         # Create 'feature' branch
    """
    repo = open_repository()

    if branch_name:
        head = repo.create_branch(branch_name)
        click.echo(success(f"Created branch '{branch_name}' at {short_hash(head)}"))
        return

    current_branch = repo.current_branch

    for name, commit_hash in repo.refs.list_branches():
        if name == current_branch:
            prefix = f"{Fore.GREEN}* {Style.RESET_ALL}"
            name_color = Fore.GREEN
        else:
            prefix = "  "
            name_color = ""

        if verbose:
            summary = get_commit_summary(repo, commit_hash)
            click.echo(f"{prefix}{name_color}{name:<20}{Style.RESET_ALL} {short_hash(commit_hash)} {summary}")
        else:
            click.echo(f"{prefix}{name_color}{name}{Style.RESET_ALL}")
