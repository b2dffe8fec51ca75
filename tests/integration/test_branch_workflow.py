"""Integration tests for branch and checkout."""

from minigit.cli.main import cli


class TestBranchCommand:
    def test_list_fresh_repository(self, runner, in_repo):
        result = runner.invoke(cli, ['branch'])

        assert result.exit_code == 0
        assert '* main' in result.output

    def test_create_and_list(self, runner, repo_with_commits, monkeypatch):
        repo = repo_with_commits
        monkeypatch.chdir(repo.work_tree)

        result = runner.invoke(cli, ['branch', 'feature'])
        assert result.exit_code == 0
        assert "Created branch 'feature'" in result.output
        assert repo.refs.resolve_head('feature') == repo.commit_hashes[-1]

        listing = runner.invoke(cli, ['branch'])
        lines = listing.output.splitlines()
        assert '  feature' in lines
        assert '* main' in lines

    def test_verbose_listing(self, runner, repo_with_commits, monkeypatch):
        monkeypatch.chdir(repo_with_commits.work_tree)
        runner.invoke(cli, ['branch', 'feature'])

        result = runner.invoke(cli, ['branch', '-v'])

        assert result.exit_code == 0
        assert repo_with_commits.commit_hashes[-1][:7] in result.output
        assert 'Second commit' in result.output

    def test_duplicate_branch(self, runner, in_repo):
        result = runner.invoke(cli, ['branch', 'main'])
        assert result.exit_code == 5
        assert 'already exists' in result.output

    def test_invalid_branch_name(self, runner, in_repo):
        result = runner.invoke(cli, ['branch', 'bad:name'])
        assert result.exit_code == 11


class TestCheckoutCommand:
    def test_switch_branch(self, runner, in_repo):
        runner.invoke(cli, ['branch', 'feature'])

        result = runner.invoke(cli, ['checkout', 'feature'])

        assert result.exit_code == 0
        assert "Switched to branch 'feature'" in result.output
        assert in_repo.current_branch == 'feature'

    def test_already_on_branch(self, runner, in_repo):
        result = runner.invoke(cli, ['checkout', 'main'])
        assert result.exit_code == 0
        assert "Already on 'main'" in result.output

    def test_missing_branch(self, runner, in_repo):
        result = runner.invoke(cli, ['checkout', 'nope'])

        assert result.exit_code == 6
        assert "Branch 'nope' not found" in result.output
        assert in_repo.current_branch == 'main'

    def test_commit_after_checkout_lands_on_new_branch(self, runner, repo_with_commits, monkeypatch):
        repo = repo_with_commits
        monkeypatch.chdir(repo.work_tree)
        runner.invoke(cli, ['branch', 'feature'])
        runner.invoke(cli, ['checkout', 'feature'])

        (repo.work_tree / 'f.txt').write_text('feature')
        runner.invoke(cli, ['add', 'f.txt'])
        result = runner.invoke(cli, ['commit', '-m', 'on feature'])

        assert result.exit_code == 0
        assert 'on feature' in result.output
        assert repo.refs.resolve_head('main') == repo.commit_hashes[-1]
        assert repo.refs.resolve_head('feature') != repo.commit_hashes[-1]
