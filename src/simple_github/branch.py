"""Operations on a single branch of a repository."""

from __future__ import annotations

import logging
from collections.abc import Callable

from github.Branch import Branch
from github.Repository import Repository

from simple_github.exceptions import github_errors

logger = logging.getLogger(__name__)


class BranchHandler:
    """Handler bound to one branch name; every call looks the branch up again."""

    def __init__(self, repository: Callable[[], Repository], name: str) -> None:
        if not name.strip():
            raise ValueError("branch name is required")
        self._get_repository = repository
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def _branch(self) -> Branch:
        with github_errors("get_branch"):
            return self._get_repository().get_branch(self._name)

    def get_sha(self) -> str:
        """Return the SHA of the branch head commit."""

        branch = self._branch()
        with github_errors("get_branch"):
            return branch.commit.sha

    def is_protected(self) -> bool:
        branch = self._branch()
        with github_errors("get_branch"):
            return bool(branch.protected)

    def delete(self) -> None:
        """Delete the `heads/<name>` ref.

        Raises:
            NotFoundError: If the branch does not exist.
        """

        with github_errors("delete_branch"):
            self._get_repository().get_git_ref(f"heads/{self._name}").delete()
        logger.info("Branch deleted", extra={"branch": self._name})

    def __repr__(self) -> str:
        return f"BranchHandler(name={self._name!r})"
