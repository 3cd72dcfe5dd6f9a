"""Operations on a specific GitHub repository.

Covers issues, branches, pull requests, Actions workflows and repository
secrets. The repository is never cached: every call resolves it again, so two
consecutive calls may observe different remote state.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from github import Github
from github.Repository import Repository

from simple_github.branch import BranchHandler
from simple_github.exceptions import (
    ConflictError,
    NotSupportedError,
    ValidationError,
    github_errors,
)
from simple_github.issue import IssueBuilder
from simple_github.pull_request import PullRequestHandler
from simple_github.rest.session import GitHubRestSession
from simple_github.workflow import WorkflowHandler

logger = logging.getLogger(__name__)

SECRET_TYPES = frozenset({"actions", "dependabot"})


class RepositoryHandler:
    """Handler bound to an (owner, name) pair."""

    def __init__(
        self,
        github_api: Github,
        rest: GitHubRestSession,
        *,
        owner: str,
        name: str,
    ) -> None:
        if not owner.strip() or not name.strip():
            raise ValueError("repository owner and name are required")
        self._github = github_api
        self._rest = rest
        self._owner = owner.strip()
        self._name = name.strip().rstrip("/")

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def name(self) -> str:
        return self._name

    @property
    def full_name(self) -> str:
        """Return the repository name as "owner/repo"."""

        return f"{self._owner}/{self._name}"

    def _repository(self) -> Repository:
        with github_errors("get_repo"):
            return self._github.get_repo(self.full_name)

    def create_issue(self, title: str | None = None) -> IssueBuilder:
        """Start an issue draft; the issue is created by ``IssueBuilder.create()``."""

        return IssueBuilder(self._repository, full_name=self.full_name, title=title)

    def get_description(self) -> str | None:
        return self._repository().description

    def get_open_issues_count(self) -> int:
        return self._repository().open_issues_count

    def is_private(self) -> bool:
        return bool(self._repository().private)

    def get_default_branch(self) -> str:
        return self._repository().default_branch

    def get_branch_names(self) -> list[str]:
        repo = self._repository()
        with github_errors("get_branches"):
            return [branch.name for branch in repo.get_branches()]

    def branch(self, name: str) -> BranchHandler:
        return BranchHandler(self._repository, name)

    def create_branch(self, new_name: str, source_name: str) -> BranchHandler:
        """Create ``new_name`` pointing at the head commit of ``source_name``.

        Raises:
            NotFoundError: If the source branch does not exist.
            ConflictError: If ``refs/heads/<new_name>`` already exists.
        """

        repo = self._repository()
        with github_errors("get_branch"):
            sha = repo.get_branch(source_name).commit.sha

        try:
            with github_errors("create_git_ref"):
                repo.create_git_ref(ref=f"refs/heads/{new_name}", sha=sha)
        except ValidationError as exc:
            # GitHub reports an existing ref as 422 "Reference already exists".
            if "already exists" in exc.message.lower():
                raise ConflictError(exc.status, exc.body, exc.message) from exc
            raise

        logger.info(
            "Branch created",
            extra={"repo": self.full_name, "branch": new_name, "source": source_name, "sha": sha},
        )
        return BranchHandler(self._repository, new_name)

    def pull_request(self, number: int) -> PullRequestHandler:
        repo = self._repository()
        with github_errors("get_pull"):
            return PullRequestHandler(repo.get_pull(number), repo)

    def create_pull_request(self, title: str, head: str, base: str, body: str) -> PullRequestHandler:
        repo = self._repository()
        with github_errors("create_pull"):
            pull = repo.create_pull(base=base, head=head, title=title, body=body)
        logger.info("Pull request created", extra={"repo": self.full_name, "pull_number": pull.number})
        return PullRequestHandler(pull, repo)

    def get_open_pull_requests(self) -> list[PullRequestHandler]:
        repo = self._repository()
        with github_errors("get_pulls"):
            return [PullRequestHandler(pull, repo) for pull in repo.get_pulls(state="open")]

    def workflow(self, workflow_id: str | int) -> WorkflowHandler:
        return WorkflowHandler(
            self._repository,
            self._rest,
            full_name=self.full_name,
            workflow_id=str(workflow_id),
        )

    def get_workflows(self) -> list[str]:
        """Return the ids of all workflows defined in the repository."""

        repo = self._repository()
        with github_errors("get_workflows"):
            return [str(workflow.id) for workflow in repo.get_workflows()]

    def create_secret(
        self,
        name: str,
        value: str,
        *,
        encryption_key_id: str | None = None,
        secret_type: str = "actions",
    ) -> None:
        """Create or update a repository secret.

        The value is encrypted with the repository public key. When
        ``encryption_key_id`` is passed it must match that key's id.

        Raises:
            ValidationError: If ``encryption_key_id`` does not match the current key.
            NotSupportedError: If ``secret_type`` is not "actions" or "dependabot".
        """

        _check_secret_type(secret_type)
        repo = self._repository()
        if encryption_key_id is not None:
            with github_errors("get_public_key"):
                key_id = str(repo.get_public_key(secret_type=secret_type).key_id)
            if key_id != str(encryption_key_id):
                raise ValidationError(
                    422, None, f"Encryption key id {encryption_key_id!r} is not the current key"
                )

        with github_errors("create_secret"):
            repo.create_secret(name, value, secret_type=secret_type)
        logger.info("Secret stored", extra={"repo": self.full_name, "secret": name})

    def delete_secret(self, name: str, *, secret_type: str = "actions") -> None:
        """Delete a repository secret.

        Goes through the REST session because PyGithub reports this call as a bare
        boolean.

        Raises:
            NotFoundError: If the secret does not exist.
        """

        _check_secret_type(secret_type)
        if not name.strip():
            raise ValueError("secret name is required")
        self._rest.request(
            "DELETE", f"repos/{self.full_name}/{secret_type}/secrets/{quote(name, safe='')}"
        )
        logger.info("Secret deleted", extra={"repo": self.full_name, "secret": name})

    def __repr__(self) -> str:
        return f"RepositoryHandler({self.full_name!r})"


def _check_secret_type(secret_type: str) -> None:
    if secret_type not in SECRET_TYPES:
        raise NotSupportedError(
            f"Unsupported secret type {secret_type!r}; expected one of {sorted(SECRET_TYPES)}"
        )
