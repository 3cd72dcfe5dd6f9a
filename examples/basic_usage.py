#!/usr/bin/env python3
"""Programmatic usage example.

This demonstrates the fluent handlers end to end:

* load settings from `.env`
* connect and inspect a repository
* cut a branch, open a pull request and file an issue

Repository selection is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from simple_github import GitHubClient, SimpleGitHubError, SimpleGitHubSettings
from simple_github.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Exercise simple-github against a repository.")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/repo"')
    parser.add_argument("--branch", default="", help="Create this branch from the default branch")
    parser.add_argument("--title", default="", help="Open an issue with this title (optional)")
    parser.add_argument(
        "--labels",
        default="",
        help='Comma-separated issue labels, e.g. "bug,triage" (optional)',
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    owner, _, name = args.repo.partition("/")
    labels = [label.strip() for label in args.labels.split(",") if label.strip()]

    settings = SimpleGitHubSettings()
    configure_logging(settings.log_level)

    try:
        with GitHubClient.connect(
            settings.github_token,
            base_url=settings.github_base_url,
            api_version=settings.github_api_version,
        ) as client:
            repo = client.repository(owner, name)
            default_branch = repo.get_default_branch()
            print(f"{repo.full_name}: default branch {default_branch}, private={repo.is_private()}")
            print(f"Branches: {', '.join(repo.get_branch_names())}")

            if args.branch:
                branch = repo.create_branch(args.branch, default_branch)
                print(f"Created branch {branch.name} at {branch.get_sha()}")

            if args.title:
                issue = repo.create_issue(args.title).labels(*labels).create()
                print(f"Created issue #{issue.number}: {issue.html_url}")

            for pull in repo.get_open_pull_requests():
                print(f"Open PR #{pull.number}: {pull.get_state().value}")
    except SimpleGitHubError as exc:
        print(f"GitHub request failed: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
