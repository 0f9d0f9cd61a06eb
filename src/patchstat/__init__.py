"""Unified diff parsing and summarization."""

from __future__ import annotations

from patchstat.changes import process_diff_to_changed_files
from patchstat.exceptions import DiffValidationError, GitCommandError, PatchstatError
from patchstat.models import (
    ChangedFile,
    DiffHunk,
    DiffLine,
    DiffSegment,
    DiffSummary,
    FileDiff,
    FileStatus,
    FileSummary,
    LineType,
    ParseIssue,
)
from patchstat.parser import DiffParser, ParserState, parse_diff
from patchstat.segmenter import extract_file_diff, segment_diff, split_diff_by_files
from patchstat.summary import file_status, summarize_diff, summarize_file

__version__ = "0.1.0"

__all__: list[str] = [
    "ChangedFile",
    "DiffHunk",
    "DiffLine",
    "DiffParser",
    "DiffSegment",
    "DiffSummary",
    "DiffValidationError",
    "FileDiff",
    "FileStatus",
    "FileSummary",
    "GitCommandError",
    "LineType",
    "ParseIssue",
    "ParserState",
    "PatchstatError",
    "extract_file_diff",
    "file_status",
    "parse_diff",
    "process_diff_to_changed_files",
    "segment_diff",
    "split_diff_by_files",
    "summarize_diff",
    "summarize_file",
]
