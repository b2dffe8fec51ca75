"""Initialize a new MiniGit repository."""

import click
from pathlib import Path
from minigit.core.repository import Repository
from minigit.cli.context import handle_errors
from minigit.cli.output import success, info, warning


@click.command('init')
@click.argument('path', default='.')
@click.option('-b', '--initial-branch', help='Name of the first branch (default: init.defaultbranch or main)')
@handle_errors
def init_cmd(path, initial_branch):
    """
    Initialize a new MiniGit repository.

    Creates a .minigit directory with the object store, commit store,
    branch table, HEAD and staging area. Running it again on an existing
    repository changes nothing.

    Examples:
        minigit init                    # Initialize in current directory
        minigit init my-project         # Initialize in my-project directory
        minigit init -b trunk           # Start on a branch called trunk
    """
    repo_path = Path(path).resolve()

    if not repo_path.exists():
        repo_path.mkdir(parents=True)
        click.echo(info(f"Created directory {repo_path}"))

    repo = Repository(str(repo_path))
    if not repo.init(default_branch=initial_branch):
        click.echo(warning(f"MiniGit repository already initialized in {repo.minigit_dir}"))
        return

    click.echo(success(f"Initialized empty MiniGit repository in {repo.minigit_dir}"))
    click.echo(info(f"On branch {repo.current_branch}"))
    click.echo(info("You can now start tracking files with:"))
    click.echo(info("  minigit add <file>"))
    click.echo(info("  minigit commit -m 'message'"))
