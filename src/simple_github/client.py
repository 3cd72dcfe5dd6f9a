"""Entry point: holds the token and hands out repository handlers."""

from __future__ import annotations

import logging

from github import Auth, Github

from simple_github.config import DEFAULT_API_VERSION, DEFAULT_BASE_URL, SimpleGitHubSettings
from simple_github.exceptions import TransportError
from simple_github.repository import RepositoryHandler
from simple_github.rest.session import GitHubRestSession

logger = logging.getLogger(__name__)


class GitHubClient:
    """Small wrapper around PyGithub that builds per-repository handlers.

    Constructing the client does no network I/O; use :meth:`connect` to also
    verify that the API is reachable and accepts the token.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        github_api: Github | None = None,
        rest: GitHubRestSession | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._base_url = base_url.rstrip("/")
        self._github = github_api or Github(auth=Auth.Token(token), base_url=self._base_url)
        self._rest = rest or GitHubRestSession(
            token=token, base_url=self._base_url, api_version=api_version
        )

    @classmethod
    def connect(
        cls,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        github_api: Github | None = None,
        rest: GitHubRestSession | None = None,
    ) -> GitHubClient:
        """Create a client and validate the connection.

        Raises:
            TransportError: If the API cannot be reached or rejects the token.
        """

        client = cls(
            token,
            base_url=base_url,
            api_version=api_version,
            github_api=github_api,
            rest=rest,
        )
        try:
            client._handshake()
        except Exception as e:
            logger.error("Failed to connect to GitHub", extra={"base_url": client._base_url})
            client.close()
            raise TransportError(f"Could not connect to {client._base_url}: {e}") from e

        logger.info("Authenticated with GitHub", extra={"base_url": client._base_url})
        return client

    @classmethod
    def from_settings(cls, settings: SimpleGitHubSettings) -> GitHubClient:
        return cls(
            settings.github_token,
            base_url=settings.github_base_url,
            api_version=settings.github_api_version,
        )

    def _handshake(self) -> None:
        self._github.get_rate_limit()

    def repository(self, owner: str, name: str) -> RepositoryHandler:
        """Return a handler for ``owner/name``; nothing is fetched yet."""

        return RepositoryHandler(self._github, self._rest, owner=owner, name=name)

    def is_connected(self) -> bool:
        """Return True if the API answers with this token; never raises."""

        try:
            self._handshake()
        except Exception:
            logger.warning(
                "GitHub connectivity check failed",
                extra={"base_url": self._base_url},
                exc_info=True,
            )
            return False
        return True

    def close(self) -> None:
        """Close the underlying PyGithub and REST connections."""

        self._github.close()
        self._rest.close()
        logger.debug("GitHub client closed")

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
