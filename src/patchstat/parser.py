"""Parse unified diff text into files, hunks and lines.

The parser is a single forward pass over the input lines driven by a small
state machine:

* ``OUTSIDE_FILE`` - before the first ``diff --git`` header, every line is ignored.
* ``IN_FILE`` - inside a file section with no open hunk; path lines, ``/dev/null``
  markers and hunk headers are recognized, anything else is skipped.
* ``IN_HUNK`` - content lines are classified and numbered.

Malformed input is never an error in the default mode: unrecognized lines are
skipped and whatever structure was recovered is returned. Strict mode records
the problems it sees and ``parse_diff(..., strict=True)`` raises
:class:`~patchstat.exceptions.DiffValidationError` when there are any.
"""

import logging
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from patchstat.exceptions import DiffValidationError
from patchstat.models import DiffHunk, DiffLine, FileDiff, LineType, ParseIssue

logger = logging.getLogger(__name__)

HUNK_HEADER_RE = re.compile(r"@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

DEV_NULL = "/dev/null"
NO_NEWLINE_MARKER = "\\ No newline at end of file"
METADATA_PREFIXES = ("index ", "new file mode ", "deleted file mode ")


class ParserState(str, Enum):
    """Where the parser is in the diff."""
    OUTSIDE_FILE = "outside_file"
    IN_FILE = "in_file"
    IN_HUNK = "in_hunk"


class DiffParser:
    """Single-use parser for one diff string."""

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self.state = ParserState.OUTSIDE_FILE
        self.files: List[FileDiff] = []
        self.issues: List[ParseIssue] = []
        self._current_file: Optional[Dict[str, Any]] = None
        self._current_hunk: Optional[Dict[str, Any]] = None
        self._line_number = 0
        self._file_header_line = 0

    def parse(self, diff: str) -> List[FileDiff]:
        """Consume the whole diff and return the parsed files."""
        for self._line_number, line in enumerate(diff.split("\n"), start=1):
            self.feed(line)
        self.finish()
        return self.files

    def parse_file(self, diff: str) -> FileDiff:
        """Parse a single-file diff that lacks a ``diff --git`` header."""
        self._start_file()
        return self.parse(diff)[0]

    def feed(self, line: str) -> None:
        """Consume a single line of input."""
        line = line.rstrip("\r")
        if line.startswith("diff --git "):
            self._start_file()
        elif self.state is ParserState.OUTSIDE_FILE:
            return
        elif line.startswith("--- a/"):
            self._current_file["old_path"] = line[len("--- a/"):]
        elif line.startswith("+++ b/"):
            self._current_file["new_path"] = line[len("+++ b/"):]
        elif line.startswith("--- " + DEV_NULL):
            self._current_file["is_new_file"] = True
        elif line.startswith("+++ " + DEV_NULL):
            self._current_file["is_deleted_file"] = True
        elif line.startswith(METADATA_PREFIXES):
            return
        elif line.startswith("@@ "):
            self._start_hunk(line)
        elif self.state is ParserState.IN_HUNK:
            self._add_line(line)

    def finish(self) -> None:
        """Flush the file under construction, if any."""
        self._close_file()
        self.state = ParserState.OUTSIDE_FILE

    def _start_file(self) -> None:
        self._close_file()
        self._current_file = {
            "old_path": "",
            "new_path": "",
            "is_new_file": False,
            "is_deleted_file": False,
            "hunks": [],
        }
        self._file_header_line = self._line_number or 1
        self.state = ParserState.IN_FILE

    def _start_hunk(self, line: str) -> None:
        self._close_hunk()
        match = HUNK_HEADER_RE.match(line)
        if not match:
            logger.debug("Skipping malformed hunk header at line %d: %r", self._line_number, line)
            self._report(f"Malformed hunk header: {line!r}")
            self.state = ParserState.IN_FILE
            return

        old_start = int(match.group(1))
        new_start = int(match.group(3))
        self._current_hunk = {
            "old_start": old_start,
            "old_lines": int(match.group(2) or 1),
            "new_start": new_start,
            "new_lines": int(match.group(4) or 1),
            "lines": [],
            "current_old": old_start,
            "current_new": new_start,
            "header_line": self._line_number,
        }
        self.state = ParserState.IN_HUNK

    def _add_line(self, line: str) -> None:
        hunk = self._current_hunk
        if line.startswith("+"):
            hunk["lines"].append(DiffLine(
                type=LineType.ADDED,
                content=line[1:],
                new_num=hunk["current_new"],
            ))
            hunk["current_new"] += 1
        elif line.startswith("-"):
            hunk["lines"].append(DiffLine(
                type=LineType.REMOVED,
                content=line[1:],
                old_num=hunk["current_old"],
            ))
            hunk["current_old"] += 1
        elif line.startswith(" "):
            hunk["lines"].append(DiffLine(
                type=LineType.CONTEXT,
                content=line[1:],
                old_num=hunk["current_old"],
                new_num=hunk["current_new"],
            ))
            hunk["current_old"] += 1
            hunk["current_new"] += 1
        # "\ No newline at end of file" and anything else are skipped

    def _close_hunk(self) -> None:
        hunk = self._current_hunk
        if hunk is None:
            return
        self._current_hunk = None
        if self.strict:
            self._check_hunk_counts(hunk)
        self._current_file["hunks"].append(DiffHunk(
            old_start=hunk["old_start"],
            old_lines=hunk["old_lines"],
            new_start=hunk["new_start"],
            new_lines=hunk["new_lines"],
            lines=hunk["lines"],
        ))

    def _close_file(self) -> None:
        if self._current_file is None:
            return
        self._close_hunk()
        file_data = self._current_file
        self._current_file = None
        if self.strict and file_data["is_new_file"] and file_data["is_deleted_file"]:
            self._report("File is marked both new and deleted", self._file_header_line)
        self.files.append(FileDiff(**file_data))

    def _check_hunk_counts(self, hunk: Dict[str, Any]) -> None:
        old_seen = hunk["current_old"] - hunk["old_start"]
        new_seen = hunk["current_new"] - hunk["new_start"]
        if old_seen != hunk["old_lines"] or new_seen != hunk["new_lines"]:
            self.issues.append(ParseIssue(
                line_number=hunk["header_line"],
                message=(
                    f"Hunk declares -{hunk['old_lines']} +{hunk['new_lines']} lines "
                    f"but contains -{old_seen} +{new_seen}"
                ),
            ))

    def _report(self, message: str, line_number: Optional[int] = None) -> None:
        if self.strict:
            self.issues.append(ParseIssue(line_number=line_number or self._line_number, message=message))


def parse_diff(diff: str, strict: bool = False) -> List[FileDiff]:
    """Parse a (possibly multi-file) diff into a list of FileDiff records.

    With ``strict=True`` a :class:`DiffValidationError` is raised when hunk
    headers are malformed or their declared line counts do not match the
    content.
    """
    parser = DiffParser(strict=strict)
    files = parser.parse(diff)
    if parser.issues:
        raise DiffValidationError(parser.issues)
    return files
