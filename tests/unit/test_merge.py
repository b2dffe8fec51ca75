"""Unit tests for merge operations."""

import pytest

from minigit.core.errors import BranchNotFound
from minigit.core.hash import hash_object
from minigit.operations.merge import MergeConflict, MergeEngine, MergeResult, merge_message, reconcile


def test_merge_engine_initialization(repo):
    """Test MergeEngine initialization."""
    engine = repo.merge
    assert isinstance(engine, MergeEngine)
    assert engine.repo == repo


def test_reconcile_disjoint_is_union():
    ours = {'a.txt': '1' * 40}
    theirs = {'b.txt': '2' * 40}

    merged, conflicts = reconcile(ours, theirs)

    assert merged == {'a.txt': '1' * 40, 'b.txt': '2' * 40}
    assert conflicts == []


def test_reconcile_conflict_keeps_ours():
    ours = {'a.txt': '1' * 40, 'same.txt': '3' * 40}
    theirs = {'a.txt': '2' * 40, 'same.txt': '3' * 40}

    merged, conflicts = reconcile(ours, theirs)

    assert merged == {'a.txt': '1' * 40, 'same.txt': '3' * 40}
    assert conflicts == [MergeConflict('a.txt', '1' * 40, '2' * 40)]


def test_reconcile_output_sorted():
    merged, conflicts = reconcile(
        {'z.txt': '1' * 40, 'b.txt': '1' * 40},
        {'z.txt': '2' * 40, 'a.txt': '2' * 40, 'b.txt': '2' * 40},
    )
    assert list(merged) == ['a.txt', 'b.txt', 'z.txt']
    assert [c.path for c in conflicts] == ['b.txt', 'z.txt']


@pytest.fixture
def diverged(repo, commit_files):
    """main and feature each committed after forking."""
    base = commit_files({'shared.txt': 'base'}, 'base')
    repo.create_branch('feature')
    main_head = commit_files({'main.txt': 'main'}, 'main work')
    repo.checkout('feature')
    feature_head = commit_files({'feature.txt': 'feature'}, 'feature work')
    repo.checkout('main')
    return base, main_head, feature_head


def test_merge_disjoint_branches(repo, diverged):
    _, main_head, feature_head = diverged

    result = repo.merge.merge('feature')

    assert isinstance(result, MergeResult)
    assert result.conflicts == []
    assert not result.has_conflicts
    assert result.snapshot == {
        'feature.txt': hash_object(b'feature'),
        'main.txt': hash_object(b'main'),
    }
    assert result.parents == [main_head, feature_head]
    assert repo.refs.resolve_head('main') == result.commit_hash
    assert repo.refs.resolve_head('feature') == feature_head


def test_merge_commit_record(repo, diverged):
    result = repo.merge.merge('feature')
    commit = repo.get_commit(result.commit_hash)

    assert commit.is_merge
    assert commit.branch == 'main'
    assert commit.message == 'Merged branch feature into main'
    assert result.message == merge_message('feature', 'main')
    assert repo.read_index().is_empty()


def test_merge_conflict_current_branch_wins(repo, commit_files):
    """init; a.txt=hello on main; a.txt=world on feature; merge feature into main."""
    c1 = commit_files({'a.txt': 'hello'}, 'first')
    repo.create_branch('feature')
    repo.checkout('feature')
    c2 = commit_files({'a.txt': 'world'}, 'second')
    assert repo.get_commit(c2).parent == c1
    repo.checkout('main')

    result = repo.merge.merge('feature')

    h1 = hash_object(b'hello')
    assert [c.path for c in result.conflicts] == ['a.txt']
    assert result.conflicts[0].ours_hash == h1
    assert result.conflicts[0].theirs_hash == hash_object(b'world')
    assert result.snapshot == {'a.txt': h1}
    assert result.parents == [c1, c2]
    assert repo.refs.resolve_head('main') == result.commit_hash


def test_merge_includes_already_staged_entries(repo, diverged, write_file):
    write_file('extra.txt', 'staged before merge')
    repo.add(['extra.txt'])

    result = repo.merge.merge('feature')

    assert 'extra.txt' in result.snapshot
    assert result.overwritten_staged == []


def test_merge_replaces_staged_file_it_also_carries(repo, diverged, write_file, caplog):
    write_file('main.txt', 'edited but not committed')
    repo.add(['main.txt'])

    result = repo.merge.merge('feature')

    assert result.snapshot['main.txt'] == hash_object(b'main')
    assert result.overwritten_staged == ['main.txt']
    assert 'main.txt' in caplog.text


def test_merge_into_branch_without_commits(repo, commit_files):
    commit_hash = commit_files({'a.txt': 'a'}, 'first')
    with repo.transaction():
        repo.refs.write_branches({'main': commit_hash, 'empty': None})
    repo.checkout('empty')

    result = repo.merge.merge('main')

    assert result.parents == [commit_hash]
    assert result.snapshot == {'a.txt': hash_object(b'a')}
    assert repo.refs.resolve_head('empty') == result.commit_hash


def test_merge_already_merged(repo, diverged):
    repo.merge.merge('feature')
    second = repo.merge.merge('feature')
    assert second.already_merged


def test_merge_missing_branch(repo_with_commits):
    repo = repo_with_commits
    head = repo.refs.resolve_head()

    with pytest.raises(BranchNotFound):
        repo.merge.merge('nope')
    assert repo.refs.resolve_head() == head


def test_merge_branch_without_commits(repo):
    repo.create_branch('feature')
    with pytest.raises(BranchNotFound):
        repo.merge.merge('feature')
    assert repo.read_index().is_empty()
