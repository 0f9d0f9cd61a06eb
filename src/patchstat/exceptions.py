"""Exceptions raised by patchstat."""

from typing import List, Sequence

from patchstat.models import ParseIssue


class PatchstatError(Exception):
    """Base class for patchstat errors."""


class DiffValidationError(PatchstatError):
    """Raised by strict-mode parsing when the diff is not internally consistent."""

    def __init__(self, issues: Sequence[ParseIssue]) -> None:
        self.issues: List[ParseIssue] = list(issues)
        first = self.issues[0].message if self.issues else "invalid diff"
        super().__init__(f"{len(self.issues)} problem(s) in diff, first: {first}")


class GitCommandError(PatchstatError):
    """Raised when a git command fails."""

    def __init__(self, cmd: Sequence[str], stderr: str) -> None:
        self.cmd = list(cmd)
        self.stderr = stderr
        super().__init__(f"Git command failed: {' '.join(self.cmd)}: {stderr}")
