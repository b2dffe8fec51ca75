"""Layered configuration for MiniGit.

Settings live in two INI files, the repository's ``.minigit/config`` and
the user's ``~/.minigitconfig``. A lookup checks the environment first
(``MINIGIT_<SECTION>_<KEY>``), then the repository file, then the global one.
"""

import configparser
import io
import os
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from .fileutil import atomic_write

DEFAULT_BRANCH = 'main'
DEFAULT_LOCK_TIMEOUT = 10.0
FALSE_VALUES = ('false', 'no', 'off', '0', 'never')


def split_key(key: str) -> Tuple[str, str]:
    """Split ``section.option`` into its parts; bare options go to ``core``."""
    if '.' not in key:
        return 'core', key
    section, option = key.split('.', 1)
    return section, option


def env_var(section: str, key: str) -> str:
    return f"MINIGIT_{section.upper()}_{key.upper()}"


def _load(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path.exists():
        parser.read(path)
    return parser


def _save(parser: configparser.ConfigParser, path: Path) -> None:
    buffer = io.StringIO()
    parser.write(buffer)
    atomic_write(path, buffer.getvalue())


class Config:
    """
    Repository and global MiniGit settings.

    Each file is parsed on first use and cached for the life of the object;
    ``set`` and ``unset`` write through to disk immediately.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.minigitconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Args:
            repo_config_path: Repository config file, or None outside a repository
        """
        self.repo_config_path = Path(repo_config_path) if repo_config_path else None
        self._parsers: Dict[bool, configparser.ConfigParser] = {}

    def _path(self, global_config: bool) -> Path:
        if global_config:
            return self.GLOBAL_CONFIG_PATH
        if self.repo_config_path is None:
            raise ValueError("No repository config path available")
        return self.repo_config_path

    def _parser(self, global_config: bool) -> configparser.ConfigParser:
        if global_config not in self._parsers:
            self._parsers[global_config] = _load(self._path(global_config))
        return self._parsers[global_config]

    def _layers(self) -> Iterator[configparser.ConfigParser]:
        """File-backed parsers in lookup order."""
        if self.repo_config_path is not None:
            yield self._parser(False)
        yield self._parser(True)

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Look up a value.

        Args:
            section: Config section (e.g., 'core', 'init')
            key: Option name (e.g., 'locktimeout')
            fallback: Returned when no layer defines the option

        Returns:
            The first value found: environment, repository file, global file
        """
        value = os.environ.get(env_var(section, key))
        if value is not None:
            return value

        for parser in self._layers():
            if parser.has_option(section, key):
                return parser.get(section, key)

        return fallback

    def get_float(self, section: str, key: str, fallback: float) -> float:
        value = self.get(section, key)
        if value is None:
            return fallback
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"Config {section}.{key} must be a number, got {value!r}") from None

    def get_bool(self, section: str, key: str, fallback: bool) -> bool:
        value = self.get(section, key)
        if value is None:
            return fallback
        return value.strip().lower() not in FALSE_VALUES

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Store a value in the repository file, or the global one.

        Raises:
            ValueError: If the repository file is targeted outside a repository
        """
        path = self._path(global_config)
        parser = self._parser(global_config)

        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, key, value)
        _save(parser, path)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a value, dropping its section once empty.

        Returns:
            True if the option existed
        """
        if not global_config and self.repo_config_path is None:
            return False

        parser = self._parser(global_config)
        if not parser.has_option(section, key):
            return False

        parser.remove_option(section, key)
        if not parser.options(section):
            parser.remove_section(section)
        _save(parser, self._path(global_config))
        return True

    def list_all(self, global_only: bool = False, repo_only: bool = False) -> Dict[str, Dict[str, str]]:
        """
        Collect every value from the files, grouped by section.

        Global options are suffixed with `` (global)``.
        """
        layers = []
        if not repo_only:
            layers.append((self._parser(True), ' (global)'))
        if not global_only and self.repo_config_path is not None:
            layers.append((self._parser(False), ''))

        result: Dict[str, Dict[str, str]] = {}
        for parser, suffix in layers:
            for section in parser.sections():
                values = result.setdefault(section, {})
                for key, value in parser.items(section):
                    values[key + suffix] = value
        return result

    @property
    def default_branch(self) -> str:
        return self.get('init', 'defaultbranch', DEFAULT_BRANCH)

    @property
    def lock_timeout(self) -> float:
        return self.get_float('core', 'locktimeout', DEFAULT_LOCK_TIMEOUT)

    @property
    def color(self) -> bool:
        return self.get_bool('color', 'ui', True)


def get_config(repo=None) -> Config:
    """Config bound to ``repo``'s config file, or global-only when None."""
    if repo:
        return Config(repo.config_file)
    return Config()
