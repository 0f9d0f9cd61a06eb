from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class LineType(str, Enum):
    """Type of line in a diff hunk."""
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


class FileStatus(str, Enum):
    """Change status of a file, as reported in a changed-file list."""
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class DiffLine(BaseModel):
    """A single content line in a hunk.

    Added lines carry only ``new_num``, removed lines only ``old_num`` and
    context lines carry both.
    """
    model_config = ConfigDict(frozen=True)

    type: LineType
    content: str
    old_num: Optional[int] = None
    new_num: Optional[int] = None


class DiffHunk(BaseModel):
    """A contiguous block of changes bounded by an ``@@`` header."""
    model_config = ConfigDict(frozen=True)

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: List[DiffLine]


class FileDiff(BaseModel):
    """One file section of a diff."""
    model_config = ConfigDict(frozen=True)

    old_path: str = ""
    new_path: str = ""
    is_new_file: bool = False
    is_deleted_file: bool = False
    hunks: List[DiffHunk] = []


class FileSummary(BaseModel):
    """Insertion and deletion counts for one file."""
    model_config = ConfigDict(frozen=True)

    file: str
    insertions: int
    deletions: int
    is_new_file: bool
    is_deleted_file: bool


class DiffSummary(BaseModel):
    """Aggregate change statistics for a whole diff."""
    model_config = ConfigDict(frozen=True)

    files_changed: int
    insertions: int
    deletions: int
    file_changes: List[FileSummary]


class DiffSegment(BaseModel):
    """Raw diff text of one file, keyed by its position in the input."""
    model_config = ConfigDict(frozen=True)

    index: int
    old_path: str
    new_path: str
    patch: str


class ChangedFile(BaseModel):
    """A file entry in a changed-file list."""
    filename: str
    status: FileStatus
    additions: int
    deletions: int
    changes: int
    patch: str


class ParseIssue(BaseModel):
    """A problem found while parsing in strict mode."""
    model_config = ConfigDict(frozen=True)

    line_number: int
    message: str


class DiffRequest(BaseModel):
    """Request carrying raw diff text."""
    diff: str
    strict: Optional[bool] = None
