"""Integration tests for init and the command group."""

from minigit import __version__
from minigit.cli.main import cli
from minigit.core.repository import Repository


class TestInitCommand:
    """Tests for minigit init."""

    def test_init_current_directory(self, runner, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        result = runner.invoke(cli, ['init'])

        assert result.exit_code == 0
        assert 'Initialized empty MiniGit repository' in result.output
        assert 'On branch main' in result.output
        assert (temp_dir / '.minigit' / 'branches.txt').read_text() == 'main:null\n'

    def test_init_twice_reports_existing(self, runner, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        runner.invoke(cli, ['init'])
        head_before = (temp_dir / '.minigit' / 'HEAD').read_text()

        result = runner.invoke(cli, ['init', '-b', 'other'])

        assert result.exit_code == 0
        assert 'already initialized' in result.output
        assert (temp_dir / '.minigit' / 'HEAD').read_text() == head_before

    def test_init_new_directory(self, runner, temp_dir):
        target = temp_dir / 'project'

        result = runner.invoke(cli, ['init', str(target)])

        assert result.exit_code == 0
        assert Repository(str(target)).is_initialized()

    def test_init_initial_branch(self, runner, temp_dir):
        result = runner.invoke(cli, ['init', str(temp_dir), '--initial-branch', 'trunk'])

        assert result.exit_code == 0
        assert Repository(str(temp_dir)).current_branch == 'trunk'

    def test_init_invalid_branch(self, runner, temp_dir):
        result = runner.invoke(cli, ['init', str(temp_dir), '-b', 'bad name'])

        assert result.exit_code == 11
        assert not (temp_dir / '.minigit').exists()


class TestCommandGroup:
    def test_help_shows_banner(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'A minimal local version control engine' in result.output
        assert 'merge' in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_unknown_command_is_usage_error(self, runner):
        result = runner.invoke(cli, ['frobnicate'])
        assert result.exit_code == 2

    def test_commands_outside_repository(self, runner, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        for args in (['add', 'a.txt'], ['commit', '-m', 'x'], ['log'], ['status'],
                     ['branch'], ['checkout', 'main'], ['merge', 'main'], ['diff', 'a', 'b']):
            result = runner.invoke(cli, args)
            assert result.exit_code == 3, args
            assert 'Not a minigit repository' in result.output

    def test_verbose_and_no_color_flags(self, runner, in_repo):
        result = runner.invoke(cli, ['-v', '--no-color', 'status'])
        assert result.exit_code == 0
        assert 'On branch main' in result.output
