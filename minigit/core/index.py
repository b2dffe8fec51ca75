"""Index (staging area) implementation."""

from typing import Dict, Optional

from .fileutil import format_records, parse_records


def validate_filename(path: str) -> str:
    """
    Check a filename can be stored in the index and commit snapshots.

    Records end at ``\\n``, and ``index.txt`` is read back as text with
    universal newlines, so those two characters are the only ones a name
    cannot hold.

    Raises:
        ValueError: If the name is empty or contains ``\\n`` or ``\\r``
    """
    if not path or '\n' in path or '\r' in path:
        raise ValueError(f"Unsupported filename: {path!r}")
    return path


class Index:
    """
    MiniGit index (staging area).

    Maps each staged filename to the hash of the content staged for it.
    Staging a filename again replaces its previous entry, so the index
    never holds two entries for one name. The index is the tentative
    snapshot of the next commit.

    On disk (``index.txt``) it is one ``filename:hash`` line per entry,
    sorted by filename.
    """

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        self.entries: Dict[str, str] = dict(entries or {})

    def stage(self, path: str, blob_hash: str) -> None:
        """
        Stage content for a filename, replacing any earlier entry.

        Args:
            path: Filename relative to repository root
            blob_hash: Hash of the staged content
        """
        self.entries[validate_filename(path)] = blob_hash

    def unstage(self, path: str) -> bool:
        """Remove a filename from the index; False if it was not staged."""
        return self.entries.pop(path, None) is not None

    def get(self, path: str) -> Optional[str]:
        return self.entries.get(path)

    def materialize(self) -> Dict[str, str]:
        """Return a copy of the staged mapping, sorted by filename."""
        return dict(sorted(self.entries.items()))

    def clear(self) -> None:
        """Clear all entries from index."""
        self.entries.clear()

    def is_empty(self) -> bool:
        return not self.entries

    def serialize(self) -> str:
        return format_records(sorted(self.entries.items()))

    @classmethod
    def parse(cls, text: str) -> 'Index':
        """
        Load an index from its text form.

        Later lines win over earlier ones for the same filename.
        """
        return cls(dict(parse_records(text)))

    def __contains__(self, path: str) -> bool:
        return path in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Index(entries={len(self.entries)})"
