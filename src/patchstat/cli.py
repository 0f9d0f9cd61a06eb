"""Command line interface: ``git diff | patchstat summary``."""

import argparse
import json
import sys
from typing import List, Optional

from pydantic import TypeAdapter

from patchstat.changes import process_diff_to_changed_files
from patchstat.config import configure_logging, settings
from patchstat.exceptions import DiffValidationError, PatchstatError
from patchstat.git_service import GitService
from patchstat.models import ChangedFile, DiffSegment, FileDiff
from patchstat.parser import parse_diff
from patchstat.segmenter import segment_diff
from patchstat.summary import summarize_diff

COMMANDS = ("summary", "parse", "split", "files")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="patchstat", description="Parse and summarize unified diffs")
    parser.add_argument("command", choices=COMMANDS, help="What to print")
    parser.add_argument("path", nargs="?", default="-", help="Diff file to read ('-' for stdin)")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--commit", help="Read the diff of a commit from the local repository")
    source.add_argument("--range", dest="commit_range", help="Read the diff of a commit range, e.g. main..HEAD")
    source.add_argument("--staged", action="store_true", help="Read staged changes")
    source.add_argument("--worktree", action="store_true", help="Read working directory changes against HEAD")

    parser.add_argument("--strict", action=argparse.BooleanOptionalAction, default=settings.strict,
                        help="Fail when hunk headers do not match their content")
    parser.add_argument("--repo", default=settings.repo_path, help="Repository path for git sources")
    parser.add_argument("--debug", action="store_true", default=settings.debug, help="Verbose logging")
    return parser


def read_diff(args: argparse.Namespace) -> str:
    """Load the diff text from git, stdin or a file."""
    if args.commit or args.commit_range or args.staged or args.worktree:
        return GitService(args.repo).get_diff_text(args.commit, args.commit_range, args.staged)
    if args.path == "-":
        return sys.stdin.read()
    with open(args.path, "r", encoding="utf-8") as f:
        return f.read()


def render(command: str, diff: str, strict: bool) -> str:
    """Run one command over the diff text and return JSON."""
    if command == "summary":
        return summarize_diff(parse_diff(diff, strict=strict)).model_dump_json(indent=2)
    if command == "parse":
        files = parse_diff(diff, strict=strict)
        return TypeAdapter(List[FileDiff]).dump_json(files, indent=2).decode()
    if command == "split":
        return TypeAdapter(List[DiffSegment]).dump_json(segment_diff(diff), indent=2).decode()
    changed = process_diff_to_changed_files(diff, strict=strict)
    return TypeAdapter(List[ChangedFile]).dump_json(changed, indent=2).decode()


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the patchstat command."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    try:
        output = render(args.command, read_diff(args), args.strict)
    except DiffValidationError as e:
        print(json.dumps({"error": str(e), "issues": [i.model_dump() for i in e.issues]}, indent=2),
              file=sys.stderr)
        return 1
    except (PatchstatError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
