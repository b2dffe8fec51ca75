"""Commit history traversal."""

import heapq
import itertools
from collections import defaultdict
from typing import Dict, Iterator, Optional, Set, Tuple

from minigit.core.errors import CommitNotFound
from minigit.core.objects import Commit


def _load_reachable(repo, start_hash: str) -> Tuple[Dict[str, Commit], Set[str], Dict[str, int]]:
    """
    Read every commit reachable from ``start_hash``.

    Returns:
        Tuple of (commits by hash, hashes whose record is missing,
        number of reachable children of each hash)
    """
    commits = {}
    missing = set()
    children = defaultdict(int)
    seen = {start_hash}
    stack = [start_hash]

    while stack:
        commit_hash = stack.pop()
        try:
            commit = repo.commits.get_commit(commit_hash)
        except CommitNotFound:
            missing.add(commit_hash)
            continue

        commits[commit_hash] = commit
        for parent_hash in commit.parents:
            children[parent_hash] += 1
            if parent_hash not in seen:
                seen.add(parent_hash)
                stack.append(parent_hash)

    return commits, missing, children


def iter_history(repo, start_hash: Optional[str], max_count: Optional[int] = None) -> Iterator[Commit]:
    """
    Walk the commit graph from ``start_hash`` towards the root.

    Commits are produced newest first, each exactly once, and never before
    any of their reachable children, so the walk always ends at a root
    commit. Among the commits whose children have all been produced, the
    one with the most recent timestamp comes next, ties going to the commit
    discovered first. While history is linear this is a plain
    parent-by-parent walk.

    Args:
        repo: Repository instance
        start_hash: Head commit, or None for a branch without commits
        max_count: Stop after this many commits

    Raises:
        CommitNotFound: When the walk reaches a commit whose record is
            missing; the commits before it have been produced
    """
    if start_hash is None:
        return

    commits, missing, children = _load_reachable(repo, start_hash)
    counter = itertools.count()

    def entry(commit_hash):
        # A missing record has no timestamp; it sorts after every real commit
        timestamp = commits[commit_hash].timestamp if commit_hash in commits else float('-inf')
        return (-timestamp, next(counter), commit_hash)

    ready = [entry(start_hash)]
    produced = 0

    while ready:
        _, _, commit_hash = heapq.heappop(ready)
        if commit_hash in missing:
            raise CommitNotFound(commit_hash)

        commit = commits[commit_hash]
        yield commit
        produced += 1
        if max_count is not None and produced >= max_count:
            return

        for parent_hash in commit.parents:
            children[parent_hash] -= 1
            if children[parent_hash] == 0:
                heapq.heappush(ready, entry(parent_hash))


def iter_log(repo, branch: Optional[str] = None, max_count: Optional[int] = None) -> Iterator[Commit]:
    """
    History of a branch, newest first.

    A branch without commits yields nothing; ``LogWalker.has_commits``
    tells that case apart from an exhausted walk.

    Raises:
        BranchNotFound: If the branch does not exist
    """
    head = repo.refs.resolve_head(branch)
    return iter_history(repo, head, max_count=max_count)


class LogWalker:
    """Convenience wrapper pairing a branch with its history."""

    def __init__(self, repo, branch: Optional[str] = None):
        self.repo = repo
        self.branch = branch or repo.refs.get_current_branch()
        self.head = repo.refs.resolve_head(self.branch)

    @property
    def has_commits(self) -> bool:
        return self.head is not None

    def __iter__(self) -> Iterator[Commit]:
        return iter_history(self.repo, self.head)

    def take(self, max_count: Optional[int] = None) -> Iterator[Commit]:
        return iter_history(self.repo, self.head, max_count=max_count)
