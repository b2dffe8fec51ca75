"""Branch table and HEAD management for MiniGit."""

import logging
import re
from typing import Dict, List, Optional, Tuple

from .errors import BranchAlreadyExists, BranchNotFound, CommitNotFound, CorruptObject, InvalidBranchName
from .fileutil import format_records, parse_records
from .hash import NULL_HASH, is_valid_hash

logger = logging.getLogger(__name__)

_BRANCH_NAME_RE = re.compile(r'^[^\s:]+$')


def validate_branch_name(name: str) -> str:
    """
    Check a branch name can be stored in the branch table.

    Raises:
        InvalidBranchName: If the name is empty or contains whitespace or ':'
    """
    if not name or not _BRANCH_NAME_RE.match(name) or name == NULL_HASH:
        raise InvalidBranchName(name)
    return name


class RefManager:
    """
    Manages the branch table (``branches.txt``) and HEAD.

    The branch table holds one ``name:head`` record per branch, where head
    is a commit hash or ``null`` for a branch without commits. HEAD holds the
    name of the active branch. Reads and writes go through the repository so
    that writes made inside a transaction are visible to later reads of the
    same transaction.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.branches_file = repo.branches_file
        self.head_file = repo.head_file

    def read_branches(self) -> Dict[str, Optional[str]]:
        """
        Load the branch table.

        Returns:
            Dict of branch name to head hash (None for no commits), in file order
        """
        text = self.repo.read_state(self.branches_file)
        if text is None:
            raise CorruptObject(self.branches_file, "branch table is missing")

        try:
            records = parse_records(text)
        except ValueError as e:
            raise CorruptObject(self.branches_file, str(e)) from e

        return {name: (None if head == NULL_HASH else head) for name, head in records}

    def write_branches(self, branches: Dict[str, Optional[str]]) -> None:
        records = [(name, head or NULL_HASH) for name, head in branches.items()]
        self.repo.write_state(self.branches_file, format_records(records))

    def list_branches(self) -> List[Tuple[str, Optional[str]]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash_or_None) tuples sorted by name
        """
        return sorted(self.read_branches().items(), key=lambda x: x[0])

    def branch_exists(self, name: str) -> bool:
        return name in self.read_branches()

    def get_current_branch(self) -> str:
        """
        Get the active branch name.

        Raises:
            CorruptObject: If HEAD is missing or names no branch
        """
        text = self.repo.read_state(self.head_file)
        name = (text or '').strip()
        if not name:
            raise CorruptObject(self.head_file, "HEAD is empty")
        if name not in self.read_branches():
            raise CorruptObject(self.head_file, f"HEAD names unknown branch '{name}'")
        return name

    def resolve_head(self, branch: Optional[str] = None) -> Optional[str]:
        """
        Resolve a branch to its head commit.

        Args:
            branch: Branch name (defaults to the active branch)

        Returns:
            Commit hash, or None if the branch has never committed

        Raises:
            BranchNotFound: If the branch does not exist
        """
        if branch is None:
            branch = self.get_current_branch()

        branches = self.read_branches()
        if branch not in branches:
            raise BranchNotFound(branch)

        head = branches[branch]
        if head is not None and not is_valid_hash(head):
            raise CorruptObject(self.branches_file, f"invalid head {head!r} for branch '{branch}'")
        return head

    def set_head(self, branch: str, commit_hash: str) -> None:
        """
        Point a branch at a commit, leaving every other branch unchanged.

        Raises:
            BranchNotFound: If the branch does not exist
            CommitNotFound: If the commit is not in the commit graph
        """
        branches = self.read_branches()
        if branch not in branches:
            raise BranchNotFound(branch)

        if not self.repo.commits.exists(commit_hash):
            raise CommitNotFound(commit_hash)

        branches[branch] = commit_hash
        self.write_branches(branches)
        logger.debug("Branch %s -> %s", branch, commit_hash)

    def create_branch(self, name: str) -> Optional[str]:
        """
        Create a branch forked at the active branch's head.

        Args:
            name: New branch name

        Returns:
            Commit hash the new branch points to (None if no commits yet)

        Raises:
            InvalidBranchName: If the name cannot be stored
            BranchAlreadyExists: If a branch with that name exists
        """
        validate_branch_name(name)

        branches = self.read_branches()
        if name in branches:
            raise BranchAlreadyExists(name)

        head = self.resolve_head(self.get_current_branch())
        branches[name] = head
        self.write_branches(branches)
        logger.debug("Created branch %s at %s", name, head or NULL_HASH)
        return head

    def checkout(self, name: str) -> None:
        """
        Make a branch the active one.

        Raises:
            BranchNotFound: If the branch does not exist
        """
        if not self.branch_exists(name):
            raise BranchNotFound(name)

        self.repo.write_state(self.head_file, name + '\n')
        logger.debug("HEAD -> %s", name)

    def __repr__(self) -> str:
        return f"RefManager({self.branches_file})"
