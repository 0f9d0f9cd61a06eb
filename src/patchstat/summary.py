from typing import List, Sequence, Union

from patchstat.models import DiffSummary, FileDiff, FileStatus, FileSummary, LineType
from patchstat.parser import parse_diff


def summarize_file(file_diff: FileDiff) -> FileSummary:
    """Count inserted and deleted lines of one file.

    Deleted files are reported under their pre-image path since the
    post-image no longer exists.
    """
    insertions = 0
    deletions = 0
    for hunk in file_diff.hunks:
        for line in hunk.lines:
            if line.type is LineType.ADDED:
                insertions += 1
            elif line.type is LineType.REMOVED:
                deletions += 1

    return FileSummary(
        file=file_diff.old_path if file_diff.is_deleted_file else file_diff.new_path,
        insertions=insertions,
        deletions=deletions,
        is_new_file=file_diff.is_new_file,
        is_deleted_file=file_diff.is_deleted_file,
    )


def summarize_diff(diff: Union[str, Sequence[FileDiff]]) -> DiffSummary:
    """Summarize a diff given as raw text or as already parsed files."""
    files = parse_diff(diff) if isinstance(diff, str) else list(diff)
    file_changes: List[FileSummary] = [summarize_file(f) for f in files]

    return DiffSummary(
        files_changed=len(files),
        insertions=sum(f.insertions for f in file_changes),
        deletions=sum(f.deletions for f in file_changes),
        file_changes=file_changes,
    )


def file_status(file_diff: FileDiff) -> FileStatus:
    """Classify a file as removed, added or modified."""
    if file_diff.is_deleted_file:
        return FileStatus.REMOVED
    if file_diff.is_new_file:
        return FileStatus.ADDED
    return FileStatus.MODIFIED
