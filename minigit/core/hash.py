"""Hash utilities for MiniGit."""

import hashlib
import re

# Marker persisted in place of a commit hash when a branch has no commits yet
NULL_HASH = 'null'

_HASH_RE = re.compile(r'^[0-9a-f]{40}$')


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.

    The digest is stable across processes and platforms, which is what
    makes deduplication and commit identity hold between invocations.

    Args:
        data: Bytes to hash

    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath: str) -> str:
    """
    Compute SHA-1 hash of a file's content.

    Args:
        filepath: Path to file

    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return hash_object(f.read())


def is_valid_hash(value: str) -> bool:
    """Check that value looks like a full object hash."""
    return bool(_HASH_RE.match(value or ''))
