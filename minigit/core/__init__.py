"""Core functionality for MiniGit.

This module contains the core data structures:
- MiniGit objects (Blob, Commit)
- Content store and commit graph
- Repository management
- Index/staging area
- Branch table and HEAD
- Configuration management
- Hashing utilities and error types

For operations like diff, merge and log, see minigit.operations
"""

from minigit.core.objects import MiniGitObject, Blob, Commit
from minigit.core.store import ObjectStore
from minigit.core.graph import CommitGraph
from minigit.core.repository import Repository
from minigit.core.hash import hash_object, hash_file, NULL_HASH
from minigit.core.index import Index
from minigit.core.refs import RefManager
from minigit.core.config import Config, get_config
from minigit.core.lock import RepositoryLock, Journal

__all__ = [
    'MiniGitObject',
    'Blob',
    'Commit',
    'ObjectStore',
    'CommitGraph',
    'Repository',
    'Index',
    'RefManager',
    'Config',
    'get_config',
    'RepositoryLock',
    'Journal',
    'hash_object',
    'hash_file',
    'NULL_HASH',
]
