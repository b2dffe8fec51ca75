"""Filesystem helpers shared by the on-disk stores."""

import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union


def atomic_write(path: Path, data: Union[bytes, str]) -> None:
    """
    Replace a file's content so readers see either the old or the new bytes.

    The data goes to a temporary file in the destination directory, is
    flushed to disk, and is then renamed over the target.

    Args:
        path: Destination file
        data: New content (str is encoded as UTF-8)
    """
    if isinstance(data, str):
        data = data.encode('utf-8')

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=str(path.parent))
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise


def parse_records(text: str) -> List[Tuple[str, str]]:
    """
    Parse newline-separated ``key:value`` records.

    Only ``\\n`` ends a record, so keys may hold any other character,
    including whitespace and Unicode line separators. The split happens on
    the last colon, since values (hashes, ``null``) never contain one while
    keys (filenames) may.

    Returns:
        List of (key, value) tuples in file order
    """
    records = []
    for line in text.split('\n'):
        if not line:
            continue
        key, sep, value = line.rpartition(':')
        if not sep:
            raise ValueError(f"Malformed record: {line!r}")
        records.append((key, value.strip()))
    return records


def format_records(records: Union[Dict[str, str], Iterable[Tuple[str, str]]]) -> str:
    """Format records as ``key:value`` lines, one per record."""
    items = records.items() if isinstance(records, dict) else records
    return ''.join(f"{key}:{value}\n" for key, value in items)
