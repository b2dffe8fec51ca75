"""Commit graph storage and traversal helpers."""

import logging
from collections import deque
from pathlib import Path
from typing import Dict, List, Optional, Set

from .errors import CommitNotFound, CorruptObject
from .fileutil import atomic_write
from .hash import is_valid_hash
from .objects import Commit

logger = logging.getLogger(__name__)


class CommitGraph:
    """
    Immutable commit records linked by parent hashes.

    Each commit is stored as ``<commits_dir>/<hash>`` where the hash is the
    SHA-1 of the stored text. Records are written once and never modified.
    """

    def __init__(self, commits_dir: Path):
        self.commits_dir = Path(commits_dir)

    def commit_path(self, commit_hash: str) -> Path:
        return self.commits_dir / commit_hash

    def create_commit(
        self,
        message: str,
        parents: List[str],
        branch: str,
        snapshot: Dict[str, str],
        timestamp: Optional[int] = None,
    ) -> str:
        """
        Build, persist and return the hash of a new commit record.

        Args:
            message: Commit message
            parents: Ordered parent hashes; empty for a root commit
            branch: Branch active at creation time
            snapshot: Mapping of filename to blob hash
            timestamp: Unix timestamp (defaults to now)

        Returns:
            str: Hash of the commit
        """
        commit = Commit.create(message, parents, branch, snapshot, timestamp)
        return self.write_commit(commit)

    def write_commit(self, commit: Commit) -> str:
        commit_hash = commit.hash
        path = self.commit_path(commit_hash)

        if not path.exists():
            atomic_write(path, commit.serialize())
            logger.debug("Wrote commit %s on %s (%d files)", commit_hash, commit.branch, len(commit.snapshot))

        return commit_hash

    def get_commit(self, commit_hash: str) -> Commit:
        """
        Read a commit record.

        Raises:
            CommitNotFound: If no commit is stored under the hash
            CorruptObject: If the stored record cannot be parsed
        """
        if not is_valid_hash(commit_hash):
            raise CommitNotFound(commit_hash)

        path = self.commit_path(commit_hash)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise CommitNotFound(commit_hash) from None

        try:
            return Commit.from_bytes(data, commit_hash)
        except (ValueError, UnicodeDecodeError) as e:
            raise CorruptObject(path, str(e)) from e

    def exists(self, commit_hash: str) -> bool:
        return is_valid_hash(commit_hash) and self.commit_path(commit_hash).exists()

    def all_hashes(self) -> List[str]:
        """All stored commit hashes, sorted."""
        if not self.commits_dir.exists():
            return []
        return sorted(p.name for p in self.commits_dir.iterdir() if is_valid_hash(p.name))

    def ancestors(self, commit_hash: str) -> Set[str]:
        """
        Get all ancestors of a commit, following every parent.

        Args:
            commit_hash: Starting commit hash

        Returns:
            Set of ancestor commit hashes (including the commit itself)

        Raises:
            CommitNotFound: If any commit on the way is missing
        """
        seen = set()
        to_visit = deque([commit_hash])

        while to_visit:
            current = to_visit.popleft()
            if current in seen:
                continue
            seen.add(current)
            for parent in self.get_commit(current).parents:
                if parent not in seen:
                    to_visit.append(parent)

        return seen

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """Check whether ``ancestor`` is reachable from ``descendant``."""
        return ancestor in self.ancestors(descendant)

    def __repr__(self) -> str:
        return f"CommitGraph({self.commits_dir})"
