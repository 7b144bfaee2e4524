"""Tests for resetting the theme tree through git."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from theme_builder.config import BuilderConfig
from theme_builder.workspace import WorkspaceError, reset_workspace

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture
def git_theme(theme_dir: Path) -> Path:
    """The sample theme committed to a fresh git repository."""

    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=theme_dir, check=True, capture_output=True)

    git("init")
    git("config", "user.email", "builder@example.invalid")
    git("config", "user.name", "Theme Builder Test")
    git("config", "commit.gpgsign", "false")
    git("add", "-A")
    git("commit", "-m", "Initial commit")
    return theme_dir


@requires_git
def test_reset_restores_committed_tree(git_theme: Path) -> None:
    original = (git_theme / "functions.php").read_text()
    (git_theme / "functions.php").write_text("changed\n")
    (git_theme / "config.rb").unlink()
    (git_theme / "extensions/custom-post-types/book-post-type-class.php").write_text("new\n")

    reset_workspace(git_theme, BuilderConfig().reset_commands)

    assert (git_theme / "functions.php").read_text() == original
    assert (git_theme / "config.rb").is_file()
    assert not (git_theme / "extensions/custom-post-types/book-post-type-class.php").exists()


@requires_git
def test_failing_command_raises(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceError, match="Command failed") as info:
        reset_workspace(tmp_path, [("git", "reset", "--hard")])
    assert info.value.command == ("git", "reset", "--hard")


def test_missing_command_raises(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceError, match="Command not found"):
        reset_workspace(tmp_path, [("definitely-not-a-real-binary-xyz",)])
