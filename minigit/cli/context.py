"""Shared plumbing for CLI commands: repository lookup and exit codes."""

import functools
import logging

import click

from minigit.core.errors import (
    EXIT_FAILURE,
    EXIT_FILE_NOT_FOUND,
    EXIT_INVALID_ARGUMENT,
    CorruptionError,
    MiniGitError,
)
from minigit.core.repository import Repository
from minigit.cli.output import error, info

logger = logging.getLogger(__name__)


def open_repository() -> Repository:
    """Repository containing the current directory (RepoNotInitialized if none)."""
    return Repository.open()


def exit_with(code: int) -> None:
    click.get_current_context().exit(code)


def handle_errors(func):
    """
    Report MiniGit errors and exit with the code that belongs to them.

    User errors print the message; corruption errors are flagged as such so
    they are not mistaken for a bad request.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CorruptionError as e:
            click.echo(error(f"Repository corruption: {e}"))
            click.echo(info("The repository's stored data is inconsistent; it was not modified"))
            exit_with(e.exit_code)
        except MiniGitError as e:
            click.echo(error(str(e)))
            exit_with(e.exit_code)
        except FileNotFoundError as e:
            click.echo(error(str(e)))
            exit_with(EXIT_FILE_NOT_FOUND)
        except ValueError as e:
            click.echo(error(str(e)))
            exit_with(EXIT_INVALID_ARGUMENT)
        except OSError as e:
            logger.debug("Unexpected I/O failure", exc_info=True)
            click.echo(error(f"I/O error: {e}"))
            exit_with(EXIT_FAILURE)

    return wrapper
