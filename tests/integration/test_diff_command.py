"""Integration tests for diff command."""

import pytest

from minigit.cli.main import cli


@pytest.fixture
def two_commits(repo, commit_files, monkeypatch):
    a = commit_files({'keep.txt': 'same', 'edit.txt': 'v1', 'drop.txt': 'bye'}, 'A')
    b = commit_files({'keep.txt': 'same', 'edit.txt': 'v2', 'new.txt': 'hi'}, 'B')
    monkeypatch.chdir(repo.work_tree)
    return repo, a, b


class TestDiffCommand:
    def test_diff_lists_changes_sorted(self, runner, two_commits):
        _, a, b = two_commits

        result = runner.invoke(cli, ['diff', a, b])

        assert result.exit_code == 0
        lines = [line for line in result.output.splitlines() if line.strip()]
        assert [line.split()[:2] for line in lines] == [['D', 'drop.txt'], ['M', 'edit.txt'], ['A', 'new.txt']]
        assert 'keep.txt' not in result.output

    def test_diff_reversed(self, runner, two_commits):
        _, a, b = two_commits

        result = runner.invoke(cli, ['diff', b, a])

        assert 'A  drop.txt' in result.output
        assert 'D  new.txt' in result.output

    def test_diff_same_commit(self, runner, two_commits):
        _, a, _ = two_commits

        result = runner.invoke(cli, ['diff', a, a])

        assert result.exit_code == 0
        assert 'No differences' in result.output

    def test_diff_by_prefix_and_branch(self, runner, two_commits):
        _, a, _ = two_commits

        result = runner.invoke(cli, ['diff', a[:10], 'main'])

        assert result.exit_code == 0
        assert 'A  new.txt' in result.output

    def test_diff_stat(self, runner, two_commits):
        _, a, b = two_commits

        result = runner.invoke(cli, ['diff', '--stat', a, b])

        assert result.exit_code == 0
        assert 'Added: 1' in result.output
        assert 'Modified: 1' in result.output
        assert 'Removed: 1' in result.output

    def test_diff_unknown_reference(self, runner, two_commits):
        _, a, _ = two_commits

        result = runner.invoke(cli, ['diff', a, 'no-such-ref'])

        assert result.exit_code == 11
        assert 'no-such-ref' in result.output

    def test_diff_missing_commit_record(self, runner, two_commits):
        repo, a, b = two_commits
        repo.commits.commit_path(b).unlink()

        result = runner.invoke(cli, ['diff', a, 'main'])

        assert result.exit_code == 8
        assert 'Repository corruption' in result.output
