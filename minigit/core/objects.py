"""MiniGit objects: blobs and commits."""

import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .fileutil import format_records, parse_records
from .hash import NULL_HASH, hash_object


class MiniGitObject(ABC):
    """Base class for content-addressed MiniGit objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Serialized object data
        """

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Serialized object data
        """

    @property
    def type(self) -> str:
        """Object type name (blob, commit)."""
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        The hash is the SHA-1 of the serialized form, with no header, so a
        blob's hash is the hash of the file content itself.

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = hash_object(self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        return self.compute_hash()


class Blob(MiniGitObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


def _escape(text: str) -> str:
    return text.replace('\\', '\\\\').replace('\n', '\\n')


def _unescape(text: str) -> str:
    out = []
    chars = iter(text)
    for ch in chars:
        if ch == '\\':
            nxt = next(chars, '')
            out.append('\n' if nxt == 'n' else nxt)
        else:
            out.append(ch)
    return ''.join(out)


class Commit(MiniGitObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - Snapshot of tracked files (filename -> blob hash)
    - Parent commit(s) for history; two parents for a merge
    - Branch that was active when it was created
    - Timestamp
    - Commit message
    """

    def __init__(self):
        super().__init__()
        self.message: str = ''
        self.parents: List[str] = []
        self.branch: str = ''
        self.timestamp: int = 0
        self.snapshot: Dict[str, str] = {}

    @property
    def parent(self) -> Optional[str]:
        """First parent, or None for a root commit."""
        return self.parents[0] if self.parents else None

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    def serialize(self) -> bytes:
        """
        Serialize commit to MiniGit format.

        Format:
        message <escaped message>
        parent <parent-hash>   (one per parent, "null" for a root commit)
        branch <branch-name>
        timestamp <unix-seconds>

        <filename>:<blob-hash>  (sorted by filename)

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'message {_escape(self.message)}']

        for parent in self.parents or [NULL_HASH]:
            lines.append(f'parent {parent}')

        lines.append(f'branch {self.branch}')
        lines.append(f'timestamp {self.timestamp}')
        lines.append('')

        header = '\n'.join(lines) + '\n'
        body = format_records(sorted(self.snapshot.items()))
        return (header + body).encode('utf-8')

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit from MiniGit format.

        Raises:
            ValueError: If the data is not a well-formed commit record
        """
        content = data.decode('utf-8')
        header, sep, body = content.partition('\n\n')
        if not sep:
            raise ValueError("missing blank line after commit header")

        self.parents = []
        seen = set()
        for line in header.split('\n'):
            key, _, value = line.partition(' ')
            if key == 'message':
                self.message = _unescape(value)
            elif key == 'parent':
                if value != NULL_HASH:
                    self.parents.append(value)
            elif key == 'branch':
                self.branch = value
            elif key == 'timestamp':
                self.timestamp = int(value)
            else:
                raise ValueError(f"unknown header field {key!r}")
            seen.add(key)

        missing = {'message', 'parent', 'branch', 'timestamp'} - seen
        if missing:
            raise ValueError(f"missing header fields: {', '.join(sorted(missing))}")

        self.snapshot = dict(parse_records(body))
        self._hash = None

    @classmethod
    def from_bytes(cls, data: bytes, commit_hash: Optional[str] = None) -> 'Commit':
        """
        Load a stored commit.

        Args:
            data: Serialized commit data
            commit_hash: Hash the record is stored under, if known
        """
        commit = cls()
        commit.deserialize(data)
        commit._hash = commit_hash
        return commit

    @classmethod
    def create(
        cls,
        message: str,
        parent_hashes: List[str],
        branch: str,
        snapshot: Dict[str, str],
        timestamp: Optional[int] = None,
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            message: Commit message
            parent_hashes: Ordered parent commit hashes (first parent first)
            branch: Name of the branch the commit is made on
            snapshot: Mapping of filename to blob hash
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            Commit: New commit object
        """
        commit = cls()
        commit.message = message
        commit.parents = list(parent_hashes)
        commit.branch = branch
        commit.snapshot = dict(sorted(snapshot.items()))
        commit.timestamp = int(time.time()) if timestamp is None else int(timestamp)
        return commit

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"
