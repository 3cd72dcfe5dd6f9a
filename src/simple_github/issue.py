"""Fluent builder for creating GitHub issues."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from github.Repository import Repository

from simple_github.exceptions import InvalidStateError, github_errors

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IssueDraft:
    """Fields accumulated before the single creation call."""

    title: str | None = None
    body: str | None = None
    # Insertion-ordered set; dict keys keep the first occurrence only.
    labels: dict[str, None] = field(default_factory=dict)
    assignees: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CreatedIssue:
    """Minimal issue metadata returned from GitHub."""

    repository: str
    number: int
    title: str
    body: str
    labels: list[str]
    assignees: list[str]
    html_url: str | None


class IssueBuilder:
    """Accumulates issue fields and creates the issue on :meth:`create`.

    Nothing reaches the API until :meth:`create`, which may run once. After it
    has been called, successfully or not, the builder is spent and any further
    :meth:`create` raises :class:`InvalidStateError`.
    """

    def __init__(
        self,
        repository: Callable[[], Repository],
        *,
        full_name: str,
        title: str | None = None,
    ) -> None:
        self._get_repository = repository
        self._full_name = full_name
        self._draft = IssueDraft(title=title)
        self._submitted = False

    @property
    def draft(self) -> IssueDraft:
        """A copy of the fields accumulated so far."""

        return replace(
            self._draft,
            labels=dict(self._draft.labels),
            assignees=list(self._draft.assignees),
        )

    @property
    def submitted(self) -> bool:
        return self._submitted

    def title(self, title: str) -> IssueBuilder:
        self._draft.title = title
        return self

    def body(self, body: str) -> IssueBuilder:
        self._draft.body = body
        return self

    def labels(self, *labels: str) -> IssueBuilder:
        for label in labels:
            self._draft.labels[label] = None
        return self

    def label(self, label: str) -> IssueBuilder:
        return self.labels(label)

    def assignees(self, *assignees: str) -> IssueBuilder:
        self._draft.assignees.extend(assignees)
        return self

    def assignee(self, assignee: str) -> IssueBuilder:
        return self.assignees(assignee)

    def create(self) -> CreatedIssue:
        """Create the issue.

        Raises:
            InvalidStateError: If the title is missing or the builder was already used.
        """

        if self._submitted:
            raise InvalidStateError("Issue has already been submitted by this builder")

        draft = self._draft
        if draft.title is None or not draft.title.strip():
            raise InvalidStateError("Issue title is required")

        self._submitted = True
        labels = list(draft.labels)
        assignees = list(draft.assignees)

        logger.info(
            "Creating issue",
            extra={"repo": self._full_name, "title": draft.title, "labels": labels},
        )
        with github_errors("create_issue"):
            issue = self._get_repository().create_issue(
                title=draft.title,
                body=draft.body or "",
                labels=labels,
                assignees=assignees,
            )

        created = CreatedIssue(
            repository=self._full_name,
            number=issue.number,
            title=issue.title,
            body=issue.body or "",
            labels=[label.name for label in issue.labels],
            assignees=[user.login for user in issue.assignees],
            html_url=issue.html_url,
        )
        logger.info("Issue created", extra={"repo": self._full_name, "issue_number": created.number})
        return created
