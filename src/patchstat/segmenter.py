"""Split a multi-file diff into per-file slices of raw text."""

import logging
import re
from typing import Dict, Iterator, List, Optional, Tuple

from patchstat.models import DiffSegment

logger = logging.getLogger(__name__)

FILE_HEADER_RE = re.compile(r"^diff --git a/(.*?) b/(.*?)(?:\r?\n|\Z)", re.MULTILINE)


def _iter_headers(diff: str) -> Iterator[Tuple[int, int, str, str]]:
    """Yield (start, end, old_path, new_path) for every file section."""
    matches = list(FILE_HEADER_RE.finditer(diff))
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(diff)
        yield match.start(), end, match.group(1), match.group(2)


def split_diff_by_files(diff: str) -> Dict[str, str]:
    """Map each file's pre-image path to its raw diff text.

    A diff without any ``diff --git`` header yields an empty mapping. When two
    sections share the same ``a/`` path the later one wins; use
    :func:`segment_diff` to keep both.
    """
    file_diffs: Dict[str, str] = {}
    for start, end, old_path, _ in _iter_headers(diff):
        if old_path in file_diffs:
            logger.debug("Duplicate file header for %s, keeping the later section", old_path)
        file_diffs[old_path] = diff[start:end]
    return file_diffs


def segment_diff(diff: str) -> List[DiffSegment]:
    """Return every file section in input order, keyed by ordinal index."""
    return [
        DiffSegment(index=i, old_path=old_path, new_path=new_path, patch=diff[start:end])
        for i, (start, end, old_path, new_path) in enumerate(_iter_headers(diff))
    ]


def extract_file_diff(diff: str, file_name: str) -> Optional[str]:
    """Get the raw diff text for a single file, or None if it is not in the diff."""
    return split_diff_by_files(diff).get(file_name) or None
