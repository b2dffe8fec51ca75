"""Checkout command - switch the active branch."""

import click
from minigit.cli.context import handle_errors, open_repository
from minigit.cli.output import success, info


@click.command('checkout')
@click.argument('branch_name')
@handle_errors
def checkout_cmd(branch_name):
    """
    Switch to another branch.

    Only HEAD moves: the working directory and the staging area are left
    as they are, and the next commit lands on the new branch.

    Examples:
        minigit checkout feature
        minigit checkout main
    """
    repo = open_repository()

    if repo.current_branch == branch_name:
        click.echo(info(f"Already on '{branch_name}'"))
        return

    repo.checkout(branch_name)
    click.echo(success(f"Switched to branch '{branch_name}'"))
