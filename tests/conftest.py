"""Shared fixtures for the test suite."""

import shutil
import subprocess
from pathlib import Path

import pytest

MODIFIED_DIFF = (
    "diff --git a/x.txt b/x.txt\n"
    "--- a/x.txt\n"
    "+++ b/x.txt\n"
    "@@ -1,2 +1,3 @@\n"
    " line1\n"
    "-line2\n"
    "+line2x\n"
    "+line3\n"
)

NEW_FILE_DIFF = (
    "diff --git a/new.txt b/new.txt\n"
    "new file mode 100644\n"
    "index 0000000..3b18e51\n"
    "--- /dev/null\n"
    "+++ b/new.txt\n"
    "@@ -0,0 +1,2 @@\n"
    "+hello\n"
    "+world\n"
)

DELETED_FILE_DIFF = (
    "diff --git a/old.txt b/old.txt\n"
    "deleted file mode 100644\n"
    "index 3b18e51..0000000\n"
    "--- a/old.txt\n"
    "+++ /dev/null\n"
    "@@ -1,3 +0,0 @@\n"
    "-one\n"
    "-two\n"
    "-three\n"
)

MULTI_HUNK_DIFF = (
    "diff --git a/src/app.py b/src/app.py\n"
    "index 83db48f..bf269f4 100644\n"
    "--- a/src/app.py\n"
    "+++ b/src/app.py\n"
    "@@ -1,4 +1,4 @@\n"
    " import os\n"
    "-import sys\n"
    "+import re\n"
    " \n"
    " def main():\n"
    "@@ -20,3 +20,5 @@ def main():\n"
    "     run()\n"
    "+    cleanup()\n"
    "+    return 0\n"
    " \n"
    "-# end\n"
    "\\ No newline at end of file\n"
    "+# end\n"
)


@pytest.fixture
def multi_file_diff() -> str:
    """Three files back to back: modified, added and deleted."""
    return MODIFIED_DIFF + NEW_FILE_DIFF + DELETED_FILE_DIFF


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True)


@pytest.fixture
def git_repo_with_commits(tmp_path: Path) -> Path:
    """A git repository with two commits and an uncommitted change."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "commit.gpgsign", "false")

    (repo / "file1.txt").write_text("alpha\nbeta\n")
    (repo / "file2.txt").write_text("one\ntwo\nthree\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-q", "-m", "Initial commit")

    (repo / "file1.txt").write_text("alpha\nbeta\ngamma\n")
    (repo / "file2.txt").unlink()
    (repo / "file3.txt").write_text("new\n")
    _git(repo, "add", "-A")
    _git(repo, "commit", "-q", "-m", "Second commit")

    (repo / "file1.txt").write_text("alpha\ngamma\n")
    return repo
