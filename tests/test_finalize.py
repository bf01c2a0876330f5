import subprocess
from unittest.mock import patch

import pytest

from mcp_new.errors import GenerationError
from mcp_new.generator.finalize import (
    INITIAL_COMMIT_MESSAGE,
    init_git,
    install_dependencies,
    is_empty_dir,
    write_project,
)
from mcp_new.generator.languages import default_languages

PYTHON = default_languages().get("python")


class TestWriteProject:
    def test_creates_nested_files(self, tmp_path):
        write_project(tmp_path / "out", {"a.txt": "A", "src/tools/b.py": "B"})
        assert (tmp_path / "out" / "a.txt").read_text() == "A"
        assert (tmp_path / "out" / "src" / "tools" / "b.py").read_text() == "B"

    def test_keeps_existing_without_overwrite(self, tmp_path):
        (tmp_path / "a.txt").write_text("old")
        skipped = write_project(tmp_path, {"a.txt": "new", "b.txt": "B"}, overwrite=False)
        assert skipped == ["a.txt"]
        assert (tmp_path / "a.txt").read_text() == "old"
        assert (tmp_path / "b.txt").read_text() == "B"

    def test_is_empty_dir(self, tmp_path):
        assert is_empty_dir(tmp_path)
        assert is_empty_dir(tmp_path / "missing")
        (tmp_path / "x").write_text("")
        assert not is_empty_dir(tmp_path)


class TestInstallDependencies:
    @patch("mcp_new.generator.finalize.shutil.which", return_value=None)
    @patch("mcp_new.generator.finalize.subprocess.run")
    def test_missing_tool_skipped(self, mock_run, _which, tmp_path):
        assert install_dependencies(tmp_path, PYTHON) is False
        mock_run.assert_not_called()

    @patch("mcp_new.generator.finalize.shutil.which", return_value="/usr/bin/pip")
    @patch("mcp_new.generator.finalize.subprocess.run")
    def test_runs_install_command(self, mock_run, _which, tmp_path):
        assert install_dependencies(tmp_path, PYTHON) is True
        args, kwargs = mock_run.call_args
        assert args[0] == ["pip", "install", "-r", "requirements.txt"]
        assert kwargs["cwd"] == tmp_path
        assert kwargs["check"] is True

    @patch("mcp_new.generator.finalize.shutil.which", return_value="/usr/bin/pip")
    @patch("mcp_new.generator.finalize.subprocess.run")
    def test_failure_raises(self, mock_run, _which, tmp_path):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["pip"], stderr="boom")
        with pytest.raises(GenerationError, match="boom") as exc:
            install_dependencies(tmp_path, PYTHON)
        assert exc.value.exit_code == 4


class TestInitGit:
    @patch("mcp_new.generator.finalize.shutil.which", return_value=None)
    def test_missing_git_skipped(self, _which, tmp_path):
        assert init_git(tmp_path) is False

    @patch("mcp_new.generator.finalize.shutil.which", return_value="/usr/bin/git")
    @patch("mcp_new.generator.finalize.subprocess.run")
    def test_init_add_commit(self, mock_run, _which, tmp_path):
        assert init_git(tmp_path) is True
        commands = [c.args[0] for c in mock_run.call_args_list]
        assert commands == [
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE],
        ]

    @patch("mcp_new.generator.finalize.shutil.which", return_value="/usr/bin/git")
    @patch("mcp_new.generator.finalize.subprocess.run")
    def test_commit_failure_is_a_warning(self, mock_run, _which, tmp_path):
        def run(command, **kwargs):
            if command[1] == "commit":
                raise subprocess.CalledProcessError(128, command, stderr="Please tell me who you are")
            return subprocess.CompletedProcess(command, 0)

        mock_run.side_effect = run
        assert init_git(tmp_path) is True

    @patch("mcp_new.generator.finalize.shutil.which", return_value="/usr/bin/git")
    @patch("mcp_new.generator.finalize.subprocess.run")
    def test_existing_repository_not_reinitialized(self, mock_run, _which, tmp_path):
        (tmp_path / ".git").mkdir()
        init_git(tmp_path)
        assert ["git", "init"] not in [c.args[0] for c in mock_run.call_args_list]
