"""
Command Line Interface

Entry point for running the changelog check inside a CI job.

Exit codes: 0 when the check passes, 1 when the changelog policy is
violated, 2 when inputs could not be collected or configuration is invalid.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence

from . import __version__
from .api import ChangelogCheckAPI
from .config import load_config
from .exceptions import ChangelogCheckError, PolicyViolation
from .formatting.actions import ActionsReporter
from .models.event import EventType


logger = logging.getLogger(__name__)

EXIT_PASSED = 0
EXIT_POLICY_VIOLATION = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="changelog-check",
        description="Fail a pull request check unless the changelog was changed or the PR carries the exemption label.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="YAML configuration file (default: environment variables)")
    parser.add_argument("--label", action="append", default=[], help="Pull request label (repeatable)")
    parser.add_argument("--changed-file", action="append", default=[], help="Changed path (repeatable)")
    parser.add_argument(
        "--changed-files-from",
        metavar="FILE",
        help="Read newline-separated changed paths from FILE ('-' for stdin)",
    )
    parser.add_argument(
        "--event-path",
        default=os.environ.get("GITHUB_EVENT_PATH"),
        help="GitHub Actions event payload (default: $GITHUB_EVENT_PATH)",
    )
    parser.add_argument("--repository", help="Repository as owner/repo; query the GitHub API directly")
    parser.add_argument("--pr-number", type=int, help="Pull request number, used with --repository")
    parser.add_argument(
        "--event-type",
        default=EventType.SYNCHRONIZE.value,
        choices=[e.value for e in EventType],
        help="Triggering pull request action when no payload is used",
    )
    parser.add_argument(
        "--no-annotations",
        action="store_true",
        help="Do not emit GitHub Actions workflow commands",
    )
    return parser


def _read_changed_paths(api: ChangelogCheckAPI, args: argparse.Namespace) -> Optional[List[str]]:
    """Explicitly supplied changed paths, or None when none were given."""
    if args.changed_files_from is None and not args.changed_file:
        return None

    paths = list(args.changed_file)
    try:
        if args.changed_files_from == "-":
            paths.extend(api.parser.read_path_list(sys.stdin))
        elif args.changed_files_from:
            with open(args.changed_files_from, "r", encoding="utf-8") as f:
                paths.extend(api.parser.read_path_list(f))
    except (OSError, UnicodeDecodeError) as e:
        raise ChangelogCheckError(f"Cannot read changed files list {args.changed_files_from}: {e}") from e
    return paths


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    api = ChangelogCheckAPI(config)

    if args.pr_number is not None and not args.repository:
        raise ChangelogCheckError("--pr-number requires --repository")

    changed_paths = _read_changed_paths(api, args)

    if args.repository:
        if args.pr_number is None:
            raise ChangelogCheckError("--repository requires --pr-number")
        report = api.check_pull_request(args.repository, args.pr_number, event_type=args.event_type)
    elif args.event_path:
        if args.label:
            logger.warning("--label is ignored when labels are read from the event payload")
        report = api.check_payload(args.event_path, changed_paths=changed_paths)
    else:
        if changed_paths is None:
            raise ChangelogCheckError(
                "No changed files: pass --changed-file/--changed-files-from, --event-path, or --repository"
            )
        report = api.check_inputs(args.label, changed_paths, event_type=args.event_type)

    annotations = not args.no_annotations and os.environ.get("GITHUB_ACTIONS") == "true"
    ActionsReporter(annotations=annotations).report(
        report.result,
        report.event,
        summary_path=os.environ.get("GITHUB_STEP_SUMMARY"),
    )

    api.enforce(report.result)
    return EXIT_PASSED


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        return run(args)
    except PolicyViolation:
        return EXIT_POLICY_VIOLATION
    except ChangelogCheckError as e:
        logger.error(f"Changelog check could not run: {e}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
