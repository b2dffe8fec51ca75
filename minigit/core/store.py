"""Content-addressed blob storage."""

import logging
from pathlib import Path

from .errors import ObjectNotFound
from .fileutil import atomic_write
from .hash import is_valid_hash
from .objects import Blob

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Deduplicating store of raw file content.

    Each distinct content is kept once, as ``<objects_dir>/<sha1>``,
    holding the bytes unmodified. Objects are never rewritten or deleted.
    """

    def __init__(self, objects_dir: Path):
        self.objects_dir = Path(objects_dir)

    def object_path(self, obj_hash: str) -> Path:
        return self.objects_dir / obj_hash

    def put(self, content: bytes) -> str:
        """
        Store content and return its hash.

        Storing content that is already present writes nothing.

        Args:
            content: Raw bytes

        Returns:
            str: SHA-1 hash of the content
        """
        blob = Blob(content)
        obj_hash = blob.hash
        path = self.object_path(obj_hash)

        if path.exists():
            logger.debug("Object %s already stored", obj_hash)
            return obj_hash

        atomic_write(path, blob.serialize())
        logger.debug("Stored object %s (%d bytes)", obj_hash, len(content))
        return obj_hash

    def put_file(self, filepath) -> str:
        """
        Store a working file's content.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {filepath}")
        return self.put(Blob.from_file(str(path)).data)

    def get(self, obj_hash: str) -> bytes:
        """
        Read back stored content.

        Raises:
            ObjectNotFound: If no object is stored under the hash. Callers
                reach this only through a reference held by a commit or the
                staging area, so it means the repository is damaged.
        """
        if not is_valid_hash(obj_hash):
            raise ObjectNotFound(obj_hash)

        path = self.object_path(obj_hash)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFound(obj_hash) from None

    def exists(self, obj_hash: str) -> bool:
        return is_valid_hash(obj_hash) and self.object_path(obj_hash).exists()

    def __repr__(self) -> str:
        return f"ObjectStore({self.objects_dir})"
