"""Unit tests for repository and branch handlers (mocked PyGithub)."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from github import GithubException, UnknownObjectException

from simple_github.client import GitHubClient
from simple_github.exceptions import (
    ConflictError,
    NotFoundError,
    NotSupportedError,
    ValidationError,
)
from simple_github.repository import RepositoryHandler


def _named(name: str, **attrs: object) -> Mock:
    obj = Mock(**attrs)
    obj.name = name
    return obj


def _branch(name: str, sha: str, *, protected: bool = False) -> Mock:
    return _named(name, commit=Mock(sha=sha), protected=protected)


@pytest.fixture
def handler(client: GitHubClient) -> RepositoryHandler:
    return client.repository("octo-org", "octo-repo")


def test_repository_accessors_resolve_the_repo_on_every_call(
    handler: RepositoryHandler, github_api: Mock, repo: Mock
) -> None:
    repo.description = "A test repository"
    repo.open_issues_count = 3
    repo.private = True
    repo.default_branch = "main"

    assert handler.get_description() == "A test repository"
    assert handler.get_open_issues_count() == 3
    assert handler.is_private() is True
    assert handler.get_default_branch() == "main"

    assert github_api.get_repo.call_count == 4
    github_api.get_repo.assert_called_with("octo-org/octo-repo")


def test_missing_repository_raises_not_found(handler: RepositoryHandler, github_api: Mock) -> None:
    github_api.get_repo.side_effect = UnknownObjectException(404, {"message": "Not Found"}, None)

    with pytest.raises(NotFoundError):
        handler.get_description()


def test_branch_names(handler: RepositoryHandler, repo: Mock) -> None:
    repo.get_branches.return_value = [_branch("main", "a1"), _branch("dev", "b2")]

    assert handler.get_branch_names() == ["main", "dev"]


def test_branch_handler_reads_sha_and_protection(handler: RepositoryHandler, repo: Mock) -> None:
    repo.get_branch.return_value = _branch("main", "abc123", protected=True)

    branch = handler.branch("main")

    assert branch.name == "main"
    assert branch.get_sha() == "abc123"
    assert branch.is_protected() is True
    assert repo.get_branch.call_count == 2


def test_branch_delete_removes_heads_ref(handler: RepositoryHandler, repo: Mock) -> None:
    ref = Mock()
    repo.get_git_ref.return_value = ref

    handler.branch("feature").delete()

    repo.get_git_ref.assert_called_once_with("heads/feature")
    ref.delete.assert_called_once_with()


def test_branch_delete_of_missing_branch_raises_not_found(
    handler: RepositoryHandler, repo: Mock
) -> None:
    repo.get_git_ref.side_effect = UnknownObjectException(404, {"message": "Not Found"}, None)

    with pytest.raises(NotFoundError):
        handler.branch("gone").delete()


def test_create_branch_points_at_source_head(handler: RepositoryHandler, repo: Mock) -> None:
    branches = {"main": _branch("main", "abc123")}
    repo.get_branch.side_effect = lambda name: branches[name]

    def create_git_ref(*, ref: str, sha: str) -> Mock:
        name = ref.removeprefix("refs/heads/")
        branches[name] = _branch(name, sha)
        return Mock(ref=ref)

    repo.create_git_ref.side_effect = create_git_ref

    created = handler.create_branch("feature", "main")

    repo.create_git_ref.assert_called_once_with(ref="refs/heads/feature", sha="abc123")
    assert created.name == "feature"
    assert created.get_sha() == handler.branch("main").get_sha()


def test_create_branch_from_missing_source_raises_not_found(
    handler: RepositoryHandler, repo: Mock
) -> None:
    repo.get_branch.side_effect = UnknownObjectException(404, {"message": "Branch not found"}, None)

    with pytest.raises(NotFoundError):
        handler.create_branch("feature", "missing")

    repo.create_git_ref.assert_not_called()


def test_create_existing_branch_raises_conflict(handler: RepositoryHandler, repo: Mock) -> None:
    repo.get_branch.return_value = _branch("main", "abc123")
    repo.create_git_ref.side_effect = GithubException(
        422, {"message": "Reference already exists"}, None
    )

    with pytest.raises(ConflictError):
        handler.create_branch("main-copy", "main")


def test_other_ref_validation_errors_stay_validation_errors(
    handler: RepositoryHandler, repo: Mock
) -> None:
    repo.get_branch.return_value = _branch("main", "abc123")
    repo.create_git_ref.side_effect = GithubException(
        422, {"message": "Reference name is not valid"}, None
    )

    with pytest.raises(ValidationError):
        handler.create_branch("bad..name", "main")


def test_open_pull_requests_keep_api_order(handler: RepositoryHandler, repo: Mock) -> None:
    repo.get_pulls.return_value = [Mock(number=7), Mock(number=3)]

    pulls = handler.get_open_pull_requests()

    repo.get_pulls.assert_called_once_with(state="open")
    assert [p.number for p in pulls] == [7, 3]


def test_create_pull_request(handler: RepositoryHandler, repo: Mock) -> None:
    repo.create_pull.return_value = Mock(number=42)

    pull = handler.create_pull_request("Add feature", "feature", "main", "Body")

    repo.create_pull.assert_called_once_with(
        base="main", head="feature", title="Add feature", body="Body"
    )
    assert pull.number == 42


def test_pull_request_lookup_of_missing_number_raises_not_found(
    handler: RepositoryHandler, repo: Mock
) -> None:
    repo.get_pull.side_effect = UnknownObjectException(404, {"message": "Not Found"}, None)

    with pytest.raises(NotFoundError):
        handler.pull_request(999)


def test_get_workflows_returns_ids_as_strings(handler: RepositoryHandler, repo: Mock) -> None:
    repo.get_workflows.return_value = [Mock(id=161335), Mock(id=269289)]

    assert handler.get_workflows() == ["161335", "269289"]


def test_workflow_handler_is_built_without_api_calls(
    handler: RepositoryHandler, github_api: Mock
) -> None:
    workflow = handler.workflow(161335)

    assert workflow.workflow_id == "161335"
    github_api.get_repo.assert_not_called()


def test_create_secret_delegates_encryption(handler: RepositoryHandler, repo: Mock) -> None:
    handler.create_secret("API_KEY", "s3cret")

    repo.create_secret.assert_called_once_with("API_KEY", "s3cret", secret_type="actions")
    repo.get_public_key.assert_not_called()


def test_create_secret_checks_explicit_key_id(handler: RepositoryHandler, repo: Mock) -> None:
    repo.get_public_key.return_value = Mock(key_id="568250167242549743")

    handler.create_secret("API_KEY", "s3cret", encryption_key_id="568250167242549743")

    repo.get_public_key.assert_called_once_with(secret_type="actions")
    repo.create_secret.assert_called_once()


def test_create_secret_with_stale_key_id_is_rejected(handler: RepositoryHandler, repo: Mock) -> None:
    repo.get_public_key.return_value = Mock(key_id="current")

    with pytest.raises(ValidationError):
        handler.create_secret("API_KEY", "s3cret", encryption_key_id="stale")

    repo.create_secret.assert_not_called()


def test_unsupported_secret_type(handler: RepositoryHandler) -> None:
    with pytest.raises(NotSupportedError):
        handler.create_secret("API_KEY", "s3cret", secret_type="codespaces")
    with pytest.raises(NotSupportedError):
        handler.delete_secret("API_KEY", secret_type="codespaces")


def test_delete_secret_sends_delete(
    handler: RepositoryHandler, http_session: Mock, make_response
) -> None:
    http_session.request.return_value = make_response(204, text="")

    handler.delete_secret("API_KEY")

    assert http_session.request.call_args.args == (
        "DELETE",
        "https://api.github.com/repos/octo-org/octo-repo/actions/secrets/API_KEY",
    )


def test_delete_missing_secret_raises_not_found(
    handler: RepositoryHandler, http_session: Mock, make_response
) -> None:
    http_session.request.return_value = make_response(404, {"message": "Not Found"})

    with pytest.raises(NotFoundError):
        handler.delete_secret("NOPE")
