"""Merge operations for MiniGit."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from minigit.core.errors import BranchNotFound

logger = logging.getLogger(__name__)


@dataclass
class MergeConflict:
    """
    A filename whose content differs between the two merged snapshots.

    Conflicts are informational: the current branch's content is kept.
    """
    path: str
    ours_hash: str
    theirs_hash: str

    def __repr__(self) -> str:
        return f"MergeConflict({self.path})"


@dataclass
class MergeResult:
    """Result of a merge operation."""
    commit_hash: str
    source_branch: str
    target_branch: str
    snapshot: Dict[str, str]
    conflicts: List[MergeConflict] = field(default_factory=list)
    parents: List[str] = field(default_factory=list)
    already_merged: bool = False
    overwritten_staged: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return merge_message(self.source_branch, self.target_branch)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def __repr__(self) -> str:
        return f"MergeResult({self.commit_hash[:7]}, conflicts={len(self.conflicts)})"


def merge_message(source_branch: str, target_branch: str) -> str:
    """Message recorded on merge commits."""
    return f"Merged branch {source_branch} into {target_branch}"


def reconcile(ours: Dict[str, str], theirs: Dict[str, str]) -> Tuple[Dict[str, str], List[MergeConflict]]:
    """
    Combine two snapshots into one.

    Starts from ``theirs`` (the branch being merged in). Every filename of
    ``ours`` (the current branch) is added when missing; when present with a
    different hash a conflict is recorded and ``ours`` wins.

    Returns:
        Tuple of (merged snapshot sorted by filename, conflicts sorted by filename)
    """
    merged = dict(theirs)
    conflicts = []

    for path in sorted(ours):
        ours_hash = ours[path]
        theirs_hash = merged.get(path)

        if theirs_hash is not None and theirs_hash != ours_hash:
            conflicts.append(MergeConflict(path, ours_hash, theirs_hash))

        merged[path] = ours_hash

    return dict(sorted(merged.items())), conflicts


class MergeEngine:
    """
    Handles merge operations for MiniGit.

    A merge reconciles the current branch's head snapshot with another
    branch's head snapshot at filename level, stages the result and commits
    it on the current branch. The merge commit records both heads as
    parents (current first). There is no content-level three-way merge:
    a filename changed on both sides keeps the current branch's content and
    is reported as a conflict.
    """

    def __init__(self, repo):
        """
        Initialize merge engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def merge(self, target_branch: str, timestamp: Optional[int] = None) -> MergeResult:
        """
        Merge ``target_branch`` into the active branch.

        The merged snapshot is staged on top of the current index. Staged
        files the merge does not touch are committed with it; a staged file
        whose content differs from the merged one is replaced by the merged
        content and listed in ``MergeResult.overwritten_staged``.

        Args:
            target_branch: Branch whose head is merged in
            timestamp: Commit timestamp (defaults to now)

        Returns:
            MergeResult describing the new commit and any conflicts

        Raises:
            BranchNotFound: If the target does not exist or has no commits
        """
        with self.repo.transaction():
            refs = self.repo.refs
            current_branch = refs.get_current_branch()

            target_head = refs.resolve_head(target_branch)
            if target_head is None:
                raise BranchNotFound(target_branch, "has no commits to merge")

            current_head = refs.resolve_head(current_branch)

            theirs = self.repo.commits.get_commit(target_head).snapshot
            ours = self.repo.commits.get_commit(current_head).snapshot if current_head else {}

            merged, conflicts = reconcile(ours, theirs)
            for conflict in conflicts:
                logger.warning(
                    "Merge conflict in %s: keeping %s over %s",
                    conflict.path, conflict.ours_hash[:7], conflict.theirs_hash[:7],
                )

            already_merged = bool(current_head) and self.repo.commits.is_ancestor(target_head, current_head)

            index = self.repo.read_index()
            overwritten = [p for p, h in merged.items() if index.get(p) not in (None, h)]
            for path in overwritten:
                logger.warning("Merge replaces staged content of %s", path)
            for path, blob_hash in merged.items():
                index.stage(path, blob_hash)
            self.repo.write_index(index)

            message = merge_message(target_branch, current_branch)
            commit_hash = self.repo.commit_staged(message, extra_parents=[target_head], timestamp=timestamp)
            commit = self.repo.commits.get_commit(commit_hash)

        logger.debug("Merged %s into %s as %s", target_branch, current_branch, commit_hash)
        return MergeResult(
            commit_hash=commit_hash,
            source_branch=target_branch,
            target_branch=current_branch,
            snapshot=dict(commit.snapshot),
            conflicts=conflicts,
            parents=list(commit.parents),
            already_merged=already_merged,
            overwritten_staged=overwritten,
        )
