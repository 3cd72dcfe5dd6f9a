"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import pytest
import requests
from github import Github
from github.Repository import Repository

from simple_github.client import GitHubClient
from simple_github.rest.session import GitHubRestSession

ResponseFactory = Callable[..., Mock]


@pytest.fixture
def make_response() -> ResponseFactory:
    """Build fake `requests.Response` objects."""

    def _make(
        status_code: int = 200,
        json_body: Any = None,
        *,
        text: str = "",
        headers: dict[str, str] | None = None,
    ) -> Mock:
        resp = Mock(spec=requests.Response)
        resp.status_code = status_code
        resp.headers = headers or {}
        resp.text = text
        if json_body is None:
            resp.json.side_effect = ValueError("No JSON body")
        else:
            resp.json.return_value = json_body
        return resp

    return _make


@pytest.fixture
def http_session() -> Mock:
    """A `requests.Session` stand-in; no network access."""

    session = Mock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def rest(http_session: Mock) -> GitHubRestSession:
    return GitHubRestSession(token="test-token", session=http_session)


@pytest.fixture
def repo() -> Mock:
    repository = Mock(spec=Repository)
    repository.full_name = "octo-org/octo-repo"
    return repository


@pytest.fixture
def github_api(repo: Mock) -> Mock:
    api = Mock(spec=Github)
    api.get_repo.return_value = repo
    return api


@pytest.fixture
def client(github_api: Mock, rest: GitHubRestSession) -> GitHubClient:
    return GitHubClient("test-token", github_api=github_api, rest=rest)
