"""Unit tests for commit graph storage."""

import pytest

from minigit.core.errors import CommitNotFound, CorruptObject
from minigit.core.hash import hash_object


def test_create_and_read_commit(repo):
    graph = repo.commits
    commit_hash = graph.create_commit('first', [], 'main', {'a.txt': 'a' * 40}, timestamp=100)

    commit = graph.get_commit(commit_hash)
    assert commit.hash == commit_hash
    assert commit.message == 'first'
    assert commit.parents == []
    assert commit.snapshot == {'a.txt': 'a' * 40}


def test_commit_hash_is_hash_of_record(repo):
    commit_hash = repo.commits.create_commit('first', [], 'main', {}, timestamp=100)
    data = repo.commits.commit_path(commit_hash).read_bytes()
    assert hash_object(data) == commit_hash


def test_identical_commits_share_a_record(repo):
    a = repo.commits.create_commit('same', [], 'main', {'a.txt': 'a' * 40}, timestamp=100)
    b = repo.commits.create_commit('same', [], 'main', {'a.txt': 'a' * 40}, timestamp=100)
    assert a == b
    assert repo.commits.all_hashes() == [a]


def test_get_missing_commit(repo):
    with pytest.raises(CommitNotFound):
        repo.commits.get_commit('f' * 40)


def test_get_invalid_hash(repo):
    with pytest.raises(CommitNotFound):
        repo.commits.get_commit('null')


def test_get_corrupt_commit(repo):
    bad = 'e' * 40
    repo.commits.commit_path(bad).write_text('garbage')
    with pytest.raises(CorruptObject):
        repo.commits.get_commit(bad)


def test_ancestors_follow_all_parents(repo):
    graph = repo.commits
    root = graph.create_commit('root', [], 'main', {}, timestamp=1)
    left = graph.create_commit('left', [root], 'main', {}, timestamp=2)
    right = graph.create_commit('right', [root], 'feature', {}, timestamp=3)
    merge = graph.create_commit('merge', [left, right], 'main', {}, timestamp=4)

    assert graph.ancestors(merge) == {root, left, right, merge}
    assert graph.is_ancestor(right, merge)
    assert not graph.is_ancestor(right, left)


def test_ancestors_stop_on_missing_parent(repo):
    orphan = repo.commits.create_commit('orphan', ['d' * 40], 'main', {}, timestamp=1)
    with pytest.raises(CommitNotFound):
        repo.commits.ancestors(orphan)
