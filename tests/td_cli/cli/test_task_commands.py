"""Integration tests for the td command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from td_cli import __version__
from td_cli import app as cli_app
from td_cli.core.context import TdContext
from td_cli.core.paths import NO_PROJECT_DIRNAME
from td_cli.runtime.home import TD_HOME_ENV_VAR, ConfigurationError
from td_cli.tasks.frontmatter import read_task
from td_cli.tasks.models import TaskStatus

REMOTE = "https://example.com/my repo.git"
PROJECT_SEGMENT = "https___example.com_my_repo.git"


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def context(make_context) -> TdContext:
    return make_context(url=REMOTE)


@pytest.fixture
def project_dir(td_home: Path) -> Path:
    return td_home / PROJECT_SEGMENT


def _only_task_file(directory: Path) -> Path:
    files = list(directory.iterdir())
    assert len(files) == 1
    return files[0]


class TestRootCommand:
    def test_no_command_prints_hint(self, runner):
        result = runner.invoke(cli_app, [])

        assert result.exit_code == 0
        assert "No command provided. Use --help for more information." in result.stdout

    def test_version(self, runner):
        result = runner.invoke(cli_app, ["--version"])

        assert result.exit_code == 0
        assert result.stdout.strip() == f"td {__version__}"

    def test_verbose_flag_is_accepted(self, runner, context):
        result = runner.invoke(cli_app, ["--verbose", "ls"], obj=context)

        assert result.exit_code == 0, result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli_app, ["--help"])

        assert result.exit_code == 0
        assert "add" in result.stdout
        assert "ls" in result.stdout
        assert "Author" in result.stdout


class TestAdd:
    def test_add_minimal_task(self, runner, context, project_dir):
        result = runner.invoke(cli_app, ["add", "Write tests"], obj=context)

        assert result.exit_code == 0, result.output
        task_file = _only_task_file(project_dir)
        task = read_task(task_file)
        assert task_file.name == f"{task.id}.td"
        assert task.title == "Write tests"
        assert task.status is TaskStatus.TODO
        assert task.tags == []
        assert task.description == ""
        assert "tags" not in task_file.read_text(encoding="utf-8")
        assert f"Added task {task.id}: Write tests" in result.stdout

    def test_add_with_description_and_tags(self, runner, context, project_dir):
        result = runner.invoke(
            cli_app,
            ["add", "Ship it", "--desc", "Tag and publish", "-t", "a, b ,c"],
            obj=context,
        )

        assert result.exit_code == 0, result.output
        task = read_task(_only_task_file(project_dir))
        assert task.description == "Tag and publish"
        assert task.tags == ["a", "b", "c"]

    def test_successive_adds_keep_every_task(self, runner, context, project_dir):
        for title in ("one", "two", "three"):
            assert runner.invoke(cli_app, ["add", title], obj=context).exit_code == 0

        titles = sorted(read_task(path).title for path in project_dir.iterdir())
        assert titles == ["one", "three", "two"]

    def test_add_requires_title(self, runner, context):
        result = runner.invoke(cli_app, ["add"], obj=context)

        assert result.exit_code != 0

    def test_add_reports_io_errors(self, runner, context, td_home):
        td_home.parent.mkdir(parents=True)
        td_home.write_text("not a directory", encoding="utf-8")

        result = runner.invoke(cli_app, ["add", "Write tests"], obj=context)

        assert result.exit_code == 1
        assert "Error:" in result.stdout


class TestLs:
    def test_ls_empty_project(self, runner, context, project_dir):
        result = runner.invoke(cli_app, ["ls"], obj=context)

        assert result.exit_code == 0
        assert result.stdout == ""
        assert project_dir.is_dir()

    def test_ls_after_add(self, runner, context, project_dir):
        runner.invoke(cli_app, ["add", "Write tests"], obj=context)
        task_file = _only_task_file(project_dir)

        result = runner.invoke(cli_app, ["ls"], obj=context)

        assert result.exit_code == 0
        assert result.stdout.splitlines() == [task_file.name]

    def test_ls_is_scoped_to_project(self, runner, make_context):
        runner.invoke(cli_app, ["add", "elsewhere"], obj=make_context(url="git@example.com:other/repo.git"))

        result = runner.invoke(cli_app, ["ls"], obj=make_context(url=REMOTE))

        assert result.exit_code == 0
        assert result.stdout == ""

    def test_fallback_is_announced(self, runner, make_context, td_home):
        result = runner.invoke(cli_app, ["ls"], obj=make_context(in_repository=False))

        assert result.exit_code == 0
        assert NO_PROJECT_DIRNAME in result.output
        assert (td_home / NO_PROJECT_DIRNAME).is_dir()


class TestEnvironmentContext:
    def test_context_built_from_environment(self, runner, tmp_path, monkeypatch):
        home = tmp_path / "td-home"
        workdir = tmp_path / "not-a-repo"
        workdir.mkdir()
        monkeypatch.setenv(TD_HOME_ENV_VAR, str(home))
        monkeypatch.chdir(workdir)

        result = runner.invoke(cli_app, ["add", "Write tests"])

        assert result.exit_code == 0, result.output
        task = read_task(_only_task_file(home / NO_PROJECT_DIRNAME))
        assert task.title == "Write tests"

    def test_configuration_error_exits_cleanly(self, runner, monkeypatch):
        def broken(cls):
            raise ConfigurationError("Could not find the home directory")

        monkeypatch.setattr(TdContext, "from_environment", classmethod(broken))

        result = runner.invoke(cli_app, ["ls"])

        assert result.exit_code == 1
        assert "Error: Could not find the home directory" in result.stdout
