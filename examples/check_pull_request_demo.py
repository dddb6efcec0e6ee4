#!/usr/bin/env python3
"""
Pull Request Changelog Check Demo

Demonstrates how to run the changelog check against a live pull request
through the GitHub API.

Usage:
    python examples/check_pull_request_demo.py <owner> <repo> <pr_number>

Example:
    GITHUB_TOKEN=... python examples/check_pull_request_demo.py octocat hello-world 42
"""

import sys
import logging

from changelog_check.api import ChangelogCheckAPI
from changelog_check.config import load_config
from changelog_check.exceptions import ChangelogCheckError


def main():
    """Main demo function."""
    config = load_config()
    logger = logging.getLogger(__name__)

    if len(sys.argv) != 4:
        print("Usage: python check_pull_request_demo.py <owner> <repo> <pr_number>")
        sys.exit(2)

    repository = f"{sys.argv[1]}/{sys.argv[2]}"
    try:
        pr_number = int(sys.argv[3])
    except ValueError:
        print("Error: PR number must be an integer")
        sys.exit(2)

    api = ChangelogCheckAPI(config)

    try:
        logger.info(f"Checking {repository}#{pr_number}...")
        report = api.check_pull_request(repository, pr_number)
    except ChangelogCheckError as e:
        print(f"❌ Could not run check: {e}")
        sys.exit(2)

    event, result = report.event, report.result
    print(f"\n📋 Pull Request: {repository}#{pr_number}")
    print(f"   Labels: {', '.join(sorted(event.labels)) or '(none)'}")
    print(f"   Exemption label: {config.policy.exemption_label}")

    if event.changed_paths:
        print(f"\n📁 Files Changed: {len(event.changed_paths)}")
        for path in event.changed_paths[:5]:
            print(f"   - {path}")
        if len(event.changed_paths) > 5:
            print(f"   ... and {len(event.changed_paths) - 5} more files")

    icon = "✅" if result.passed else "❌"
    print(f"\n{icon} {result.reason}")
    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
