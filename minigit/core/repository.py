"""Repository management for MiniGit."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .config import Config, get_config
from .errors import (
    AmbiguousReference,
    BranchNotFound,
    CorruptObject,
    EmptyCommitMessage,
    InvalidPath,
    InvalidReference,
    NothingToCommit,
    RepoNotInitialized,
)
from .fileutil import atomic_write
from .graph import CommitGraph
from .hash import is_valid_hash
from .index import Index
from .lock import Journal, RepositoryLock
from .objects import Commit
from .refs import validate_branch_name
from .store import ObjectStore

logger = logging.getLogger(__name__)

REPO_DIR_NAME = '.minigit'
MIN_PREFIX_LENGTH = 4


class Repository:
    """
    Represents a MiniGit repository.

    A repository owns the .minigit directory and every piece of state kept
    in it: the content store, the commit graph, the branch table, HEAD and
    the staging area. All operations go through one Repository object.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.minigit_dir = self.work_tree / REPO_DIR_NAME
        self.objects_dir = self.minigit_dir / 'objects'
        self.commits_dir = self.minigit_dir / 'commits'
        self.branches_file = self.minigit_dir / 'branches.txt'
        self.head_file = self.minigit_dir / 'HEAD'
        self.index_file = self.minigit_dir / 'index.txt'
        self.config_file = self.minigit_dir / 'config'
        self.lock_file = self.minigit_dir / 'lock'
        self.journal_file = self.minigit_dir / 'journal'

        # Lazily created to avoid circular imports with operations
        self._objects = None
        self._commits = None
        self._ref_manager = None
        self._diff_engine = None
        self._merge_engine = None
        self._config = None
        self._lock = None
        self._journal: Optional[Journal] = None

    @property
    def objects(self) -> ObjectStore:
        if self._objects is None:
            self._objects = ObjectStore(self.objects_dir)
        return self._objects

    @property
    def commits(self) -> CommitGraph:
        if self._commits is None:
            self._commits = CommitGraph(self.commits_dir)
        return self._commits

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def diff(self):
        """Get DiffEngine instance."""
        if self._diff_engine is None:
            from minigit.operations.diff import DiffEngine
            self._diff_engine = DiffEngine(self)
        return self._diff_engine

    @property
    def merge(self):
        """Get MergeEngine instance."""
        if self._merge_engine is None:
            from minigit.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = get_config(self)
        return self._config

    def is_initialized(self) -> bool:
        return self.minigit_dir.is_dir()

    def require_initialized(self) -> None:
        """
        Raises:
            RepoNotInitialized: If there is no .minigit directory
        """
        if not self.is_initialized():
            raise RepoNotInitialized(self.work_tree)

    def init(self, default_branch: Optional[str] = None) -> bool:
        """
        Initialize a new repository.

        Creates the .minigit directory structure:
        .minigit/
        ├── objects/       # Blob store
        ├── commits/       # Commit records
        ├── branches.txt   # Branch table
        ├── HEAD           # Active branch name
        ├── index.txt      # Staging area
        └── config         # Repository configuration

        Initialization is idempotent: an existing repository is left
        untouched.

        Args:
            default_branch: Name of the initial branch (defaults to the
                init.defaultbranch config value, then 'main')

        Returns:
            bool: True if a repository was created, False if one already existed
        """
        if self.minigit_dir.exists():
            logger.info("Repository already initialized at %s", self.minigit_dir)
            return False

        branch = validate_branch_name(default_branch or Config().default_branch)

        self.minigit_dir.mkdir(parents=True)
        self.objects_dir.mkdir()
        self.commits_dir.mkdir()

        atomic_write(self.config_file, '[core]\nrepositoryformatversion = 0\n')
        atomic_write(self.index_file, '')
        atomic_write(self.branches_file, f'{branch}:null\n')
        atomic_write(self.head_file, branch + '\n')

        logger.debug("Initialized repository at %s on branch %s", self.minigit_dir, branch)
        return True

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .minigit
        directory or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / REPO_DIR_NAME).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def open(cls, path: str = '.') -> 'Repository':
        """
        Find the repository containing ``path``.

        Raises:
            RepoNotInitialized: If no enclosing repository exists
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise RepoNotInitialized(Path(path).resolve())
        return repo

    # State access

    def read_state(self, path: Path) -> Optional[str]:
        """
        Read one of the mutable state files.

        Inside a transaction, content queued by earlier writes is returned.

        Returns:
            File content, or None if the file does not exist
        """
        if self._journal is not None:
            pending = self._journal.pending(path)
            if pending is not None:
                return pending
        try:
            return Path(path).read_text(encoding='utf-8')
        except FileNotFoundError:
            return None

    def write_state(self, path: Path, content: str) -> None:
        """Rewrite a mutable state file, through the open transaction if any."""
        if self._journal is not None:
            self._journal.write(path, content)
        else:
            atomic_write(path, content)

    def read_index(self) -> Index:
        try:
            return Index.parse(self.read_state(self.index_file) or '')
        except ValueError as e:
            raise CorruptObject(self.index_file, str(e)) from e

    def write_index(self, index: Index) -> None:
        self.write_state(self.index_file, index.serialize())

    @contextmanager
    def lock(self) -> Iterator['Repository']:
        """
        Hold the repository write lock.

        The first acquisition replays any transaction a crashed process
        left behind.

        Raises:
            RepoNotInitialized: If there is no repository
            RepositoryLocked: If another process keeps the lock too long
        """
        self.require_initialized()

        if self._lock is None:
            self._lock = RepositoryLock(self.lock_file, timeout=self.config.lock_timeout)

        first = not self._lock.held
        with self._lock:
            if first:
                Journal(self.minigit_dir, self.journal_file).recover()
            yield self

    @contextmanager
    def transaction(self) -> Iterator[Journal]:
        """
        Group writes to HEAD, the branch table and the staging area.

        Either every queued write lands or none does. Nested transactions
        join the outer one.
        """
        with self.lock():
            if self._journal is not None:
                yield self._journal
                return

            journal = Journal(self.minigit_dir, self.journal_file)
            self._journal = journal
            try:
                yield journal
            except BaseException:
                journal.discard()
                raise
            else:
                journal.commit()
            finally:
                self._journal = None

    # Operations

    @property
    def current_branch(self) -> str:
        return self.refs.get_current_branch()

    def _collect_files(self, paths: Iterable) -> List[Tuple[str, Path]]:
        """Expand paths to (repository-relative name, absolute path) pairs."""
        collected = []

        for raw in paths:
            path = Path(raw)
            if not path.is_absolute():
                path = self.work_tree / path

            if not path.exists():
                raise FileNotFoundError(f"File not found: {raw}")

            path = path.resolve()
            try:
                rel = path.relative_to(self.work_tree)
            except ValueError:
                raise InvalidPath(raw, "outside repository") from None

            if rel.parts and rel.parts[0] == REPO_DIR_NAME:
                raise InvalidPath(raw, "inside repository metadata")

            if path.is_file():
                collected.append((rel.as_posix(), path))
            elif path.is_dir():
                for file_path in sorted(path.rglob('*')):
                    if not file_path.is_file():
                        continue
                    file_rel = file_path.relative_to(self.work_tree)
                    if any(part.startswith('.') for part in file_rel.parts):
                        continue
                    collected.append((file_rel.as_posix(), file_path))
            else:
                raise InvalidPath(raw, "not a regular file")

        return collected

    def add(self, paths: Iterable) -> Dict[str, str]:
        """
        Stage files for the next commit.

        Each file's content goes into the content store and the staging
        area records ``filename -> hash``, replacing an earlier entry for
        the same filename. Directories are added recursively.

        Args:
            paths: Files or directories (relative paths are taken from the
                repository root)

        Returns:
            Dict of staged filename to blob hash

        Raises:
            FileNotFoundError: If a path does not exist; nothing is staged
            InvalidPath: If a path lies outside the repository
        """
        self.require_initialized()
        files = self._collect_files(paths)

        staged = {}
        with self.transaction():
            index = self.read_index()
            for rel, full_path in files:
                blob_hash = self.objects.put_file(full_path)
                index.stage(rel, blob_hash)
                staged[rel] = blob_hash
            self.write_index(index)

        logger.debug("Staged %d file(s)", len(staged))
        return staged

    def commit(self, message: str, timestamp: Optional[int] = None) -> str:
        """
        Record the staging area as a new commit on the active branch.

        Args:
            message: Commit message
            timestamp: Unix timestamp (defaults to now)

        Returns:
            str: Hash of the new commit

        Raises:
            EmptyCommitMessage: If the message is blank
            NothingToCommit: If the staging area is empty
        """
        if not message or not message.strip():
            raise EmptyCommitMessage()

        with self.transaction():
            return self.commit_staged(message, timestamp=timestamp)

    def commit_staged(
        self,
        message: str,
        extra_parents: Iterable[str] = (),
        timestamp: Optional[int] = None,
    ) -> str:
        """
        Commit the staging area; must run inside a transaction.

        The active branch's head becomes the first parent; ``extra_parents``
        follow it (a merge passes the merged branch's head).
        """
        index = self.read_index()
        if index.is_empty():
            raise NothingToCommit()

        branch = self.refs.get_current_branch()
        head = self.refs.resolve_head(branch)

        parents = [head] if head else []
        for parent in extra_parents:
            if parent not in parents:
                parents.append(parent)

        commit_hash = self.commits.create_commit(message, parents, branch, index.materialize(), timestamp)
        self.refs.set_head(branch, commit_hash)

        index.clear()
        self.write_index(index)

        logger.debug("Committed %s on %s (parents: %s)", commit_hash, branch, ', '.join(parents) or 'none')
        return commit_hash

    def create_branch(self, name: str) -> Optional[str]:
        """
        Create a branch at the active branch's head.

        Returns:
            Commit hash the branch points to (None if no commits yet)
        """
        with self.transaction():
            return self.refs.create_branch(name)

    def checkout(self, name: str) -> None:
        """Make ``name`` the active branch."""
        with self.transaction():
            self.refs.checkout(name)

    def get_commit(self, commit_hash: str) -> Commit:
        return self.commits.get_commit(commit_hash)

    def head_commit(self, branch: Optional[str] = None) -> Optional[Commit]:
        """Commit at a branch's head, or None if it has no commits."""
        head = self.refs.resolve_head(branch)
        return self.commits.get_commit(head) if head else None

    def resolve_commit(self, ref: str) -> str:
        """
        Resolve a full hash, branch name or unique hash prefix to a commit.

        Raises:
            BranchNotFound: If ``ref`` names a branch with no commits
            InvalidReference: If nothing matches
            AmbiguousReference: If a prefix matches several commits
        """
        self.require_initialized()

        if is_valid_hash(ref) and self.commits.exists(ref):
            return ref

        if self.refs.branch_exists(ref):
            head = self.refs.resolve_head(ref)
            if head is None:
                raise BranchNotFound(ref, "has no commits")
            return head

        ref_lower = ref.lower()
        if len(ref_lower) >= MIN_PREFIX_LENGTH and all(c in '0123456789abcdef' for c in ref_lower):
            matches = [h for h in self.commits.all_hashes() if h.startswith(ref_lower)]
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                raise AmbiguousReference(ref, matches)

        raise InvalidReference(ref)

    def log(self, branch: Optional[str] = None, max_count: Optional[int] = None) -> Iterator[Commit]:
        """Iterate a branch's history newest-first (see operations.log)."""
        from minigit.operations.log import iter_log
        return iter_log(self, branch, max_count=max_count)

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
