"""Merge command - join another branch into the current one."""

import click
from minigit.core.errors import EXIT_MERGE_CONFLICT
from minigit.cli.context import exit_with, handle_errors, open_repository
from minigit.cli.output import success, info, warning, short_hash


@click.command('merge')
@click.argument('branch')
@handle_errors
def merge_cmd(branch):
    """
    Merge a branch into the current branch.

    The two head snapshots are combined file by file and committed on the
    current branch with both heads as parents. A file that differs on the
    two branches keeps the current branch's content and is reported as a
    conflict; the merge still completes.

    Examples:
        minigit merge feature
    """
    repo = open_repository()

    result = repo.merge.merge(branch)

    if result.already_merged:
        click.echo(info(f"'{branch}' was already part of '{result.target_branch}'"))

    for path in result.overwritten_staged:
        click.echo(warning(f"Staged changes to {path} were replaced by the merged content"))

    for conflict in result.conflicts:
        click.echo(warning(
            f"CONFLICT in {conflict.path}: kept {short_hash(conflict.ours_hash)} "
            f"from '{result.target_branch}' over {short_hash(conflict.theirs_hash)} from '{branch}'"
        ))

    click.echo(success(f"{result.message} ({short_hash(result.commit_hash)})"))
    click.echo(info("Parents: " + ', '.join(short_hash(p) for p in result.parents)))
    click.echo(info(f"Files: {len(result.snapshot)}"))

    if result.has_conflicts:
        click.echo(warning(f"Merge completed with {len(result.conflicts)} conflict(s)"))
        exit_with(EXIT_MERGE_CONFLICT)
