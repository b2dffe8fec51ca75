"""Hash utilities tests."""

import hashlib
import tempfile
from pathlib import Path

from minigit.core.hash import hash_object, hash_file, is_valid_hash


def test_hash_object_empty():
    """Test hashing empty bytes."""
    result = hash_object(b'')
    assert len(result) == 40
    assert isinstance(result, str)


def test_hash_object_deterministic():
    """Test hash consistency for same input."""
    data = b'hello world'
    assert hash_object(data) == hash_object(data)


def test_hash_object_is_plain_sha1():
    """The hash is a standard digest, stable across processes."""
    assert hash_object(b'hello') == hashlib.sha1(b'hello').hexdigest()
    assert hash_object(b'hello') == 'aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d'


def test_hash_object_different_data():
    """Test different data produces different hashes."""
    assert hash_object(b'hello') != hash_object(b'world')


def test_hash_file_matches_content_hash():
    """Test hashing file contents."""
    with tempfile.NamedTemporaryFile(mode='wb', delete=False) as f:
        f.write(b'test content')
        temp_path = f.name

    try:
        assert hash_file(temp_path) == hash_object(b'test content')
    finally:
        Path(temp_path).unlink()


def test_is_valid_hash():
    assert is_valid_hash('a' * 40)
    assert not is_valid_hash('null')
    assert not is_valid_hash('A' * 40)
    assert not is_valid_hash('a' * 39)
    assert not is_valid_hash('')
