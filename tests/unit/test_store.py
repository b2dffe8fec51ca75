"""Unit tests for the content store."""

import pytest

from minigit.core.errors import CorruptionError, ObjectNotFound
from minigit.core.hash import hash_object


def test_put_returns_content_hash(repo):
    obj_hash = repo.objects.put(b'hello')
    assert obj_hash == hash_object(b'hello')
    assert repo.objects.object_path(obj_hash).read_bytes() == b'hello'


def test_put_is_idempotent(repo):
    """Same content twice gives one hash and one stored copy."""
    first = repo.objects.put(b'hello')
    second = repo.objects.put(b'hello')

    assert first == second
    stored = [p for p in repo.objects_dir.iterdir() if not p.name.startswith('.')]
    assert [p.name for p in stored] == [first]


def test_put_file(repo, write_file):
    path = write_file('a.txt', 'hello')
    assert repo.objects.put_file(path) == hash_object(b'hello')


def test_put_file_missing(repo):
    with pytest.raises(FileNotFoundError):
        repo.objects.put_file(repo.work_tree / 'missing.txt')


def test_get_roundtrip_binary(repo):
    data = bytes(range(256))
    assert repo.objects.get(repo.objects.put(data)) == data


def test_get_missing_is_corruption(repo):
    with pytest.raises(ObjectNotFound) as excinfo:
        repo.objects.get('0' * 40)
    assert isinstance(excinfo.value, CorruptionError)


def test_exists(repo):
    obj_hash = repo.objects.put(b'x')
    assert repo.objects.exists(obj_hash)
    assert not repo.objects.exists('0' * 40)
    assert not repo.objects.exists('../escape')
