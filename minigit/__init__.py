"""MiniGit - a minimal local version control engine."""

__version__ = '0.1.0'

from minigit.core.repository import Repository
from minigit.core.objects import MiniGitObject, Blob, Commit

__all__ = [
    'Repository',
    'MiniGitObject',
    'Blob',
    'Commit',
]
