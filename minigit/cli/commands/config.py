"""Config command - manage repository configuration."""

import click
from minigit.core.config import Config, split_key
from minigit.core.errors import EXIT_INVALID_ARGUMENT
from minigit.core.repository import Repository
from minigit.cli.context import exit_with, handle_errors, open_repository
from minigit.cli.output import success, error, info


def load_config(is_global):
    """Config bound to the current repository, or global-only."""
    if is_global:
        return Config()
    return Config(open_repository().config_file)


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
@handle_errors
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        minigit config set core.locktimeout 30
        minigit config set --global init.defaultbranch trunk
    """
    section, option = split_key(key)
    load_config(is_global).set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Get global config only')
@handle_errors
def config_get(key, is_global):
    """
    Get a config value.

    Environment variables (MINIGIT_<SECTION>_<KEY>) override both files.

    Examples:
        minigit config get core.locktimeout
    """
    if is_global:
        config = Config()
    else:
        repo = Repository.find_repository()
        config = Config(repo.config_file if repo else None)

    section, option = split_key(key)
    value = config.get(section, option)
    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        exit_with(EXIT_INVALID_ARGUMENT)
    click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset in global config')
@handle_errors
def config_unset(key, is_global):
    """Remove a config value."""
    section, option = split_key(key)
    if load_config(is_global).unset(section, option, global_config=is_global):
        click.echo(success(f"Removed {key}"))
    else:
        click.echo(error(f"Config key not found: {key}"))
        exit_with(EXIT_INVALID_ARGUMENT)


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
@handle_errors
def config_list(is_global):
    """
    List all config values.

    Examples:
        minigit config list
        minigit config list --global
    """
    repo = None if is_global else Repository.find_repository()
    config = Config(repo.config_file if repo else None)
    values = config.list_all(global_only=is_global)

    if not values:
        click.echo(info("No configuration set"))
        return

    for section in sorted(values):
        for key, value in values[section].items():
            click.echo(f"{section}.{key}={value}")
