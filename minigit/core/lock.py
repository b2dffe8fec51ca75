"""Writer serialization and crash-safe multi-file updates.

Two pieces keep the mutable files (branch table, HEAD, staging area)
consistent when several processes touch one repository:

- ``RepositoryLock``: an exclusive advisory lock on ``.minigit/lock``
  (``fcntl.flock`` on Unix, ``msvcrt.locking`` on Windows). Every mutation
  runs while it is held.
- ``Journal``: a write-ahead record of the files a transaction rewrites.
  The whole set of new contents is published atomically first, then each
  file is replaced, then the record is removed. If the process dies in
  between, the next lock holder replays the record, so either every file of
  the transaction changes or none does.
"""

import json
import logging
import platform
import time
from pathlib import Path
from typing import Dict, Optional

from .errors import CorruptObject, RepositoryLocked
from .fileutil import atomic_write

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 10.0
_POLL_INTERVAL = 0.05


def _try_lock(file_handle) -> bool:
    """Attempt a non-blocking exclusive lock; False if another process holds it."""
    if platform.system() == "Windows":
        import msvcrt

        try:
            file_handle.seek(0)
            msvcrt.locking(file_handle.fileno(), msvcrt.LK_NBLCK, 1)
        except OSError:
            return False
        return True

    import fcntl

    try:
        fcntl.flock(file_handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except BlockingIOError:
        return False
    return True


def _unlock(file_handle) -> None:
    if platform.system() == "Windows":
        import msvcrt

        file_handle.seek(0)
        msvcrt.locking(file_handle.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        import fcntl

        fcntl.flock(file_handle.fileno(), fcntl.LOCK_UN)


class RepositoryLock:
    """
    Exclusive, re-entrant (within one object) repository write lock.

    Usage:
        with RepositoryLock(path, timeout=5):
            ...  # critical section
    """

    def __init__(self, lock_path: Path, timeout: float = DEFAULT_LOCK_TIMEOUT):
        self.lock_path = Path(lock_path)
        self.timeout = timeout
        self._handle = None
        self._depth = 0

    @property
    def held(self) -> bool:
        return self._depth > 0

    def acquire(self) -> None:
        """
        Acquire the lock, polling until the timeout expires.

        Raises:
            RepositoryLocked: If another process keeps the lock past the timeout
        """
        if self._depth:
            self._depth += 1
            return

        handle = open(self.lock_path, 'a+b')
        deadline = time.monotonic() + self.timeout
        try:
            while not _try_lock(handle):
                if time.monotonic() >= deadline:
                    raise RepositoryLocked(self.lock_path, self.timeout)
                time.sleep(_POLL_INTERVAL)
        except BaseException:
            handle.close()
            raise

        self._handle = handle
        self._depth = 1
        logger.debug("Acquired lock on %s", self.lock_path)

    def release(self) -> None:
        if not self._depth:
            raise RuntimeError("Releasing a lock that is not held")

        self._depth -= 1
        if self._depth:
            return

        handle, self._handle = self._handle, None
        try:
            _unlock(handle)
        finally:
            handle.close()
        logger.debug("Released lock on %s", self.lock_path)

    def __enter__(self) -> 'RepositoryLock':
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class Journal:
    """
    Write-ahead journal for atomic multi-file updates.

    Paths are stored relative to the repository directory so a journal
    stays valid if the repository is moved.
    """

    def __init__(self, repo_dir: Path, journal_path: Path):
        self.repo_dir = Path(repo_dir)
        self.journal_path = Path(journal_path)
        self._pending: Dict[str, str] = {}

    def write(self, path: Path, content: str) -> None:
        """Queue a full-content replacement of ``path``."""
        rel = Path(path).resolve().relative_to(self.repo_dir.resolve())
        self._pending[rel.as_posix()] = content

    def pending(self, path: Path) -> Optional[str]:
        """Queued content for ``path``, or None if it is not being rewritten."""
        rel = Path(path).resolve().relative_to(self.repo_dir.resolve())
        return self._pending.get(rel.as_posix())

    def commit(self) -> None:
        """Publish and apply every queued write."""
        if not self._pending:
            return

        atomic_write(self.journal_path, json.dumps(self._pending, sort_keys=True))
        self._apply(self._pending)
        self.journal_path.unlink()
        logger.debug("Applied journal with %d file(s)", len(self._pending))
        self._pending = {}

    def discard(self) -> None:
        self._pending = {}

    def _apply(self, writes: Dict[str, str]) -> None:
        # Path order puts HEAD and branches.txt before index.txt, so the
        # staging area is only ever cleared after the branch head has moved.
        for rel, content in sorted(writes.items()):
            atomic_write(self.repo_dir / rel, content)

    def recover(self) -> bool:
        """
        Replay a journal left behind by an interrupted transaction.

        Must be called with the repository lock held.

        Returns:
            True if a journal was found and replayed
        """
        writes = self._load()
        if writes is None:
            return False

        logger.warning("Recovering interrupted transaction (%d file(s))", len(writes))
        self._apply(writes)
        self.journal_path.unlink()
        return True

    def _load(self) -> Optional[Dict[str, str]]:
        try:
            text = self.journal_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return None

        try:
            writes = json.loads(text)
        except ValueError as e:
            raise CorruptObject(self.journal_path, f"unreadable journal: {e}") from e
        if not isinstance(writes, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in writes.items()
        ):
            raise CorruptObject(self.journal_path, "journal is not a path to content mapping")
        return writes
