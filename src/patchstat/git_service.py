import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from patchstat.changes import process_diff_to_changed_files
from patchstat.exceptions import GitCommandError
from patchstat.models import ChangedFile, DiffSummary, FileDiff
from patchstat.parser import parse_diff
from patchstat.summary import summarize_diff

logger = logging.getLogger(__name__)


class GitService:
    """Produces diff text from a local git repository."""

    def __init__(self, repo_path: Optional[Union[str, Path]] = None) -> None:
        """Initialize with optional repository path."""
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()

    def get_diff_text(
        self,
        commit_hash: Optional[str] = None,
        commit_range: Optional[str] = None,
        staged: bool = False,
    ) -> str:
        """Get raw diff text for a commit, a range, staged or working directory changes."""
        if commit_hash and commit_range:
            raise ValueError("Cannot specify both a commit and a range")

        if commit_range:
            # e.g. "abc123..def456" or "main..feature"
            cmd = ["git", "diff", commit_range]
        elif commit_hash:
            cmd = ["git", "show", "--pretty=format:", commit_hash]
        elif staged:
            cmd = ["git", "diff", "--cached"]
        else:
            cmd = ["git", "diff", "HEAD"]

        return self._run_git_command(cmd)

    def get_files(self, commit_hash: Optional[str] = None, commit_range: Optional[str] = None,
                  staged: bool = False, strict: bool = False) -> List[FileDiff]:
        """Parse the selected changes into files, hunks and lines."""
        return parse_diff(self.get_diff_text(commit_hash, commit_range, staged), strict=strict)

    def get_summary(self, commit_hash: Optional[str] = None, commit_range: Optional[str] = None,
                    staged: bool = False, strict: bool = False) -> DiffSummary:
        """Summarize the selected changes."""
        return summarize_diff(self.get_files(commit_hash, commit_range, staged, strict))

    def get_changed_files(self, commit_hash: Optional[str] = None, commit_range: Optional[str] = None,
                          staged: bool = False, strict: bool = False) -> List[ChangedFile]:
        """Get a changed-file list for the selected changes."""
        diff_text = self.get_diff_text(commit_hash, commit_range, staged)
        return process_diff_to_changed_files(diff_text, strict=strict)

    def _run_git_command(self, cmd: List[str]) -> str:
        """Run a git command and return output."""
        logger.debug("Running %s in %s", " ".join(cmd), self.repo_path)
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=True
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            # Unknown revisions produce an empty diff
            if "does not exist" in e.stderr or "bad revision" in e.stderr or "unknown revision" in e.stderr:
                logger.debug("Treating missing revision as empty diff: %s", e.stderr.strip())
                return ""
            raise GitCommandError(cmd, e.stderr)
