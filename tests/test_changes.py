"""Tests for the changed-file list."""

import pytest

from conftest import DELETED_FILE_DIFF, MODIFIED_DIFF, NEW_FILE_DIFF
from patchstat.changes import process_diff_to_changed_files
from patchstat.exceptions import DiffValidationError
from patchstat.models import FileStatus
from patchstat.summary import summarize_diff


class TestProcessDiffToChangedFiles:

    def test_multi_file(self, multi_file_diff: str) -> None:
        files = process_diff_to_changed_files(multi_file_diff)

        assert [(f.filename, f.status, f.additions, f.deletions, f.changes) for f in files] == [
            ("x.txt", FileStatus.MODIFIED, 2, 1, 3),
            ("new.txt", FileStatus.ADDED, 2, 0, 2),
            ("old.txt", FileStatus.REMOVED, 0, 3, 3),
        ]
        assert [f.patch for f in files] == [MODIFIED_DIFF, NEW_FILE_DIFF, DELETED_FILE_DIFF]

    def test_empty_input(self) -> None:
        assert process_diff_to_changed_files("") == []
        assert process_diff_to_changed_files("\n  \n") == []

    def test_headerless_diff_is_one_file(self) -> None:
        diff = "--- a/x.txt\n+++ b/x.txt\n@@ -1,2 +1,2 @@\n-a\n+b\n c\n"
        files = process_diff_to_changed_files(diff)

        assert len(files) == 1
        assert files[0].filename == "x.txt"
        assert files[0].status is FileStatus.MODIFIED
        assert (files[0].additions, files[0].deletions) == (1, 1)
        assert files[0].patch == diff

    def test_headerless_new_file(self) -> None:
        diff = "--- /dev/null\n+++ b/fresh.txt\n@@ -0,0 +1 @@\n+hi\n"
        files = process_diff_to_changed_files(diff)
        assert files[0].filename == "fresh.txt"
        assert files[0].status is FileStatus.ADDED

    def test_serializes_status_as_string(self) -> None:
        data = process_diff_to_changed_files(NEW_FILE_DIFF)[0].model_dump(mode="json")
        assert data["status"] == "added"

    def test_strict_mode_propagates(self) -> None:
        diff = "diff --git a/a.txt b/a.txt\n@@ -1,5 +1,5 @@\n+x\n"
        assert process_diff_to_changed_files(diff)[0].additions == 1
        with pytest.raises(DiffValidationError):
            process_diff_to_changed_files(diff, strict=True)

    def test_text_that_is_not_a_diff(self) -> None:
        assert process_diff_to_changed_files("hello world\n") == []


QUOTED_PATH_DIFF = (
    'diff --git "a/caf\\303\\251.txt" "b/caf\\303\\251.txt"\n'
    'index 83db48f..bf269f4 100644\n'
    '--- "a/caf\\303\\251.txt"\n'
    '+++ "b/caf\\303\\251.txt"\n'
    "@@ -1 +1,2 @@\n"
    " menu\n"
    "+croissant\n"
    "+espresso\n"
)


class TestQuotedPaths:
    """Headers the segmenter cannot key still count toward the file list."""

    def test_quoted_section_after_plain_one(self) -> None:
        diff = MODIFIED_DIFF + QUOTED_PATH_DIFF
        files = process_diff_to_changed_files(diff)

        assert [f.filename for f in files] == ["x.txt"]
        assert sum(f.additions for f in files) == summarize_diff(diff).insertions == 4
        assert sum(f.deletions for f in files) == summarize_diff(diff).deletions == 1

    def test_only_quoted_headers(self) -> None:
        files = process_diff_to_changed_files(QUOTED_PATH_DIFF)

        assert len(files) == 1
        assert files[0].additions == summarize_diff(QUOTED_PATH_DIFF).insertions == 2
        assert files[0].status is FileStatus.MODIFIED
        assert files[0].patch == QUOTED_PATH_DIFF


class TestCrlfInput:

    def test_names_agree_with_summary(self) -> None:
        diff = MODIFIED_DIFF.replace("\n", "\r\n")
        files = process_diff_to_changed_files(diff)

        assert files[0].filename == "x.txt"
        assert summarize_diff(diff).file_changes[0].file == "x.txt"
        assert (files[0].additions, files[0].deletions) == (2, 1)
