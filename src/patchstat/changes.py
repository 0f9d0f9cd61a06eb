"""Build a changed-file list (filename, status, counts, patch) from diff text."""

import logging
from typing import List, Sequence

from patchstat.exceptions import DiffValidationError
from patchstat.models import ChangedFile, FileDiff, FileStatus
from patchstat.parser import DiffParser, parse_diff
from patchstat.segmenter import split_diff_by_files
from patchstat.summary import file_status, summarize_diff, summarize_file

logger = logging.getLogger(__name__)


def _changed_file(filename: str, files: Sequence[FileDiff], patch: str) -> ChangedFile:
    """Describe one segment; counts cover every file the segment parsed into."""
    summary = summarize_diff(files)
    return ChangedFile(
        filename=filename,
        status=file_status(files[0]) if files else FileStatus.MODIFIED,
        additions=summary.insertions,
        deletions=summary.deletions,
        changes=summary.insertions + summary.deletions,
        patch=patch,
    )


def _has_git_header(diff: str) -> bool:
    return any(line.startswith("diff --git ") for line in diff.split("\n"))


def _parse_unsegmented(diff: str, strict: bool) -> List[FileDiff]:
    if _has_git_header(diff):
        # e.g. quoted paths, which the segmenter does not key
        return parse_diff(diff, strict=strict)
    parser = DiffParser(strict=strict)
    file_diff = parser.parse_file(diff)
    if parser.issues:
        raise DiffValidationError(parser.issues)
    return [file_diff]


def _is_empty(file_diff: FileDiff) -> bool:
    return not (file_diff.old_path or file_diff.new_path or file_diff.hunks)


def process_diff_to_changed_files(diff: str, strict: bool = False) -> List[ChangedFile]:
    """Split a diff per file and describe each one.

    A diff the segmenter cannot split is treated as a single file. Text that
    yields no paths and no hunks produces an empty list.
    """
    file_diffs = split_diff_by_files(diff)

    if not file_diffs:
        if not diff.strip():
            return []
        logger.debug("No segmentable file headers found, treating the diff as a single file")
        files = [f for f in _parse_unsegmented(diff, strict) if not _is_empty(f)]
        if not files:
            return []
        first = files[0]
        filename = summarize_file(first).file or first.new_path or first.old_path
        return [_changed_file(filename, files, diff)]

    return [
        _changed_file(filename, parse_diff(patch, strict=strict), patch)
        for filename, patch in file_diffs.items()
    ]
