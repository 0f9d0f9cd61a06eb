from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from patchstat.changes import process_diff_to_changed_files
from patchstat.config import Settings, settings as default_settings
from patchstat.exceptions import DiffValidationError, GitCommandError
from patchstat.git_service import GitService
from patchstat.models import ChangedFile, DiffRequest, DiffSegment, DiffSummary, FileDiff
from patchstat.parser import parse_diff
from patchstat.segmenter import segment_diff
from patchstat.summary import summarize_diff


def _validation_error(e: DiffValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": str(e),
            "issues": [issue.model_dump() for issue in e.issues],
        },
    )


def create_api_router(settings: Optional[Settings] = None) -> APIRouter:
    """Create the API router exposing the diff engine."""
    settings = settings or default_settings
    router = APIRouter()

    def check_request(request: DiffRequest) -> bool:
        """Enforce the size limit and resolve the strict flag for a request."""
        size = len(request.diff.encode("utf-8"))
        if size > settings.max_diff_size:
            raise HTTPException(
                status_code=413,
                detail=f"Diff is {size} bytes, limit is {settings.max_diff_size}",
            )
        return settings.strict if request.strict is None else request.strict

    def git_service() -> GitService:
        return GitService(settings.repo_path)

    def check_refs(commit: Optional[str], range: Optional[str]) -> None:
        if commit and range:
            raise HTTPException(status_code=400, detail="Cannot specify both 'commit' and 'range' parameters")

    @router.get("/health")
    async def health() -> dict:
        """Liveness check."""
        return {"status": "ok"}

    @router.post("/api/diff/parse")
    async def parse(request: DiffRequest) -> List[FileDiff]:
        """Parse diff text into files, hunks and lines."""
        strict = check_request(request)
        try:
            return parse_diff(request.diff, strict=strict)
        except DiffValidationError as e:
            raise _validation_error(e)

    @router.post("/api/diff/summary")
    async def summary(request: DiffRequest) -> DiffSummary:
        """Summarize insertions and deletions per file."""
        strict = check_request(request)
        try:
            return summarize_diff(parse_diff(request.diff, strict=strict))
        except DiffValidationError as e:
            raise _validation_error(e)

    @router.post("/api/diff/split")
    async def split(request: DiffRequest) -> List[DiffSegment]:
        """Split diff text into per-file segments."""
        check_request(request)
        return segment_diff(request.diff)

    @router.post("/api/diff/files")
    async def changed_files(request: DiffRequest) -> List[ChangedFile]:
        """Describe each file of the diff with its status and counts."""
        strict = check_request(request)
        try:
            return process_diff_to_changed_files(request.diff, strict=strict)
        except DiffValidationError as e:
            raise _validation_error(e)

    @router.get("/api/git/summary")
    def git_summary(
        commit: Optional[str] = Query(None, description="Summarize a specific commit"),
        range: Optional[str] = Query(None, description="Summarize a commit range"),
        staged: bool = Query(False, description="Summarize staged changes"),
    ) -> DiffSummary:
        """Summarize changes in the local repository."""
        check_refs(commit, range)
        try:
            return git_service().get_summary(commit, range, staged, strict=settings.strict)
        except GitCommandError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except DiffValidationError as e:
            raise _validation_error(e)

    @router.get("/api/git/files")
    def git_files(
        commit: Optional[str] = Query(None, description="List files of a specific commit"),
        range: Optional[str] = Query(None, description="List files of a commit range"),
        staged: bool = Query(False, description="List staged files"),
    ) -> List[ChangedFile]:
        """List changed files in the local repository."""
        check_refs(commit, range)
        try:
            return git_service().get_changed_files(commit, range, staged, strict=settings.strict)
        except GitCommandError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except DiffValidationError as e:
            raise _validation_error(e)

    return router
