"""Diff engine for comparing commit snapshots."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from minigit.core.hash import hash_file


class ChangeType(Enum):
    """How a filename differs between two snapshots."""

    ADDED = 'A'
    MODIFIED = 'M'
    REMOVED = 'D'

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class FileChange:
    """A single filename-level difference."""

    path: str
    change: ChangeType
    old_hash: Optional[str] = None
    new_hash: Optional[str] = None

    def __repr__(self) -> str:
        return f"FileChange({self.change.value} {self.path})"


def diff_snapshots(old: Dict[str, str], new: Dict[str, str]) -> List[FileChange]:
    """
    Classify the differences between two snapshots.

    - filename only in ``old``: REMOVED
    - filename in both with different hashes: MODIFIED
    - filename only in ``new``: ADDED

    Filenames with equal hashes are left out. The result is sorted by
    filename whatever order the snapshots iterate in.
    """
    changes = []

    for path in sorted(set(old) | set(new)):
        old_hash = old.get(path)
        new_hash = new.get(path)

        if old_hash == new_hash:
            continue

        if new_hash is None:
            changes.append(FileChange(path, ChangeType.REMOVED, old_hash=old_hash))
        elif old_hash is None:
            changes.append(FileChange(path, ChangeType.ADDED, new_hash=new_hash))
        else:
            changes.append(FileChange(path, ChangeType.MODIFIED, old_hash, new_hash))

    return changes


class DiffEngine:
    """
    Engine for computing filename-level diffs between commits.

    Content is compared by hash only; there is no line-level diff.
    """

    def __init__(self, repo):
        """
        Initialize diff engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def diff_commits(self, old_commit_hash: str, new_commit_hash: str) -> List[FileChange]:
        """
        Compute diff between two commits.

        Args:
            old_commit_hash: Commit A
            new_commit_hash: Commit B

        Returns:
            List of FileChange objects, sorted by filename

        Raises:
            CommitNotFound: If either commit does not exist
        """
        old_commit = self.repo.commits.get_commit(old_commit_hash)
        new_commit = self.repo.commits.get_commit(new_commit_hash)
        return diff_snapshots(old_commit.snapshot, new_commit.snapshot)

    def head_snapshot(self, branch: Optional[str] = None) -> Dict[str, str]:
        commit = self.repo.head_commit(branch)
        return dict(commit.snapshot) if commit else {}

    def diff_index_to_head(self) -> List[FileChange]:
        """
        Compare the staging area with the active branch's head snapshot.

        Only staged filenames are considered, since a commit is made of the
        staged entries alone: each is ADDED if the head does not track it
        and MODIFIED if its hash differs.
        """
        staged = self.repo.read_index().materialize()
        head_files = self.head_snapshot()
        relevant = {path: head_files[path] for path in staged if path in head_files}
        return diff_snapshots(relevant, staged)

    def diff_working_tree(self) -> List[FileChange]:
        """
        Compare tracked working files with what is staged or committed.

        A file tracked by the staging area (or, failing that, the head
        snapshot) is MODIFIED when its content hash differs and REMOVED when
        it no longer exists. Untracked files are not reported.
        """
        tracked = self.head_snapshot()
        tracked.update(self.repo.read_index().materialize())

        working = {}
        for path in tracked:
            file_path = Path(self.repo.work_tree) / path
            if file_path.is_file():
                working[path] = hash_file(str(file_path))

        return [c for c in diff_snapshots(tracked, working) if c.change is not ChangeType.ADDED]
