"""Handler for pull request operations.

Covers state queries, labels and reviewers, merging, comments and review
comments. Multi-step operations (label removal, title+body update) are not
transactional: a failure aborts the remaining steps without undoing the ones
already applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from github import GithubException
from github.PullRequest import PullRequest
from github.Repository import Repository

from simple_github.exceptions import (
    ApiError,
    ConflictError,
    PreconditionFailedError,
    from_github_exception,
    github_errors,
)

logger = logging.getLogger(__name__)


class PullRequestState(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    MERGED = "MERGED"


class MergeMethod(str, Enum):
    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


@dataclass(frozen=True, slots=True)
class ReviewComment:
    """An inline comment on a line of the pull request diff."""

    id: int
    author: str
    body: str
    path: str
    line: int | None
    commit_sha: str
    created_at: datetime


class PullRequestHandler:
    """Wraps one PyGithub pull request object."""

    def __init__(self, pull_request: PullRequest, repository: Repository) -> None:
        self._pull = pull_request
        self._repository = repository

    @property
    def number(self) -> int:
        return self._pull.number

    def _log_extra(self, **extra: object) -> dict[str, object]:
        return {"repo": self._repository.full_name, "pull_number": self._pull.number, **extra}

    def get_state(self) -> PullRequestState:
        """Return OPEN, CLOSED or MERGED, refreshed from the API."""

        with github_errors("get_pull_request"):
            self._pull.update()
            if self._pull.merged:
                return PullRequestState.MERGED
            if self._pull.state == "closed":
                return PullRequestState.CLOSED
            return PullRequestState.OPEN

    def is_merged(self) -> bool:
        with github_errors("is_merged"):
            return self._pull.is_merged()

    def get_requested_reviewers(self) -> list[str]:
        with github_errors("get_review_requests"):
            users, _teams = self._pull.get_review_requests()
            return [user.login for user in users]

    def request_reviewers(self, reviewers: list[str]) -> None:
        with github_errors("create_review_request"):
            self._pull.create_review_request(reviewers=list(reviewers))
        logger.info("Reviewers requested", extra=self._log_extra(reviewers=list(reviewers)))

    def add_labels(self, *labels: str) -> None:
        with github_errors("add_labels"):
            self._pull.add_to_labels(*labels)

    def remove_labels(self, *labels: str) -> None:
        for label in labels:
            with github_errors("remove_label"):
                self._pull.remove_from_labels(label)

    def merge(self, commit_message: str, method: MergeMethod = MergeMethod.MERGE) -> None:
        """Merge the pull request.

        Raises:
            ConflictError: On merge conflicts, a moved head, or an already merged PR.
            PreconditionFailedError: When required checks or reviews are not satisfied.
        """

        with github_errors("merge_pull_request"):
            try:
                status = self._pull.merge(
                    commit_message=commit_message,
                    merge_method=MergeMethod(method).value,
                )
            except GithubException as exc:
                raise _merge_error(exc) from exc

        if not status.merged:
            raise ConflictError(200, None, status.message or "Pull request was not merged")

        logger.info(
            "Pull request merged",
            extra=self._log_extra(merge_method=MergeMethod(method).value, sha=status.sha),
        )

    def comment(self, text: str) -> None:
        with github_errors("create_issue_comment"):
            self._pull.create_issue_comment(text)

    def create_review_comment(self, body: str, commit_sha: str, path: str, line: int) -> None:
        with github_errors("create_review_comment"):
            commit = self._repository.get_commit(commit_sha)
            self._pull.create_review_comment(body, commit, path, line=line)

    def get_review_comments(self) -> list[ReviewComment]:
        with github_errors("get_review_comments"):
            return [
                ReviewComment(
                    id=comment.id,
                    author=comment.user.login if comment.user else "unknown",
                    body=comment.body,
                    path=comment.path,
                    line=comment.line,
                    commit_sha=comment.commit_id,
                    created_at=comment.created_at,
                )
                for comment in self._pull.get_review_comments()
            ]

    def get_commits(self) -> list[str]:
        """Return the commit SHAs of the pull request in API order."""

        with github_errors("get_commits"):
            return [commit.sha for commit in self._pull.get_commits()]

    def update(self, title: str, body: str) -> None:
        """Set title, then body, as two separate edits."""

        with github_errors("edit_title"):
            self._pull.edit(title=title)
        with github_errors("edit_body"):
            self._pull.edit(body=body)

    def __repr__(self) -> str:
        return f"PullRequestHandler(number={self._pull.number})"


def _merge_error(exc: GithubException) -> ApiError:
    # GitHub answers 405 both for conflicts/already-merged ("not mergeable") and for
    # unmet branch protection rules (failing checks, missing approvals).
    if exc.status == 405:
        error = from_github_exception(exc)
        if "not mergeable" in error.message.lower():
            return ConflictError(exc.status, exc.data, error.message)
        return PreconditionFailedError(exc.status, exc.data, error.message)
    return from_github_exception(exc)
