"""GitHub Copilot seat management and usage endpoints.

These endpoints are not wrapped by PyGithub, so they go through
:class:`~simple_github.rest.session.GitHubRestSession` directly.
"""

from __future__ import annotations

import logging
from datetime import datetime
from urllib.parse import quote

import requests

from simple_github.config import DEFAULT_API_VERSION, DEFAULT_BASE_URL, SimpleGitHubSettings
from simple_github.rest.models import (
    CopilotSeatInfo,
    CopilotUsageMetrics,
    CopilotUserStatus,
    format_timestamp,
)
from simple_github.rest.session import GitHubRestSession

logger = logging.getLogger(__name__)


class CopilotRestClient:
    """Client for the organization-level Copilot REST endpoints.

    Stateless apart from the token held by the underlying session; each method is
    exactly one HTTP round trip.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        session: requests.Session | None = None,
    ) -> None:
        self._rest = GitHubRestSession(
            token=token,
            base_url=base_url,
            api_version=api_version,
            session=session,
        )

    @classmethod
    def from_settings(cls, settings: SimpleGitHubSettings) -> CopilotRestClient:
        return cls(
            settings.github_token,
            base_url=settings.github_base_url,
            api_version=settings.github_api_version,
        )

    @staticmethod
    def _org_path(org: str, suffix: str) -> str:
        if not org.strip():
            raise ValueError("org is required")
        return f"orgs/{quote(org, safe='')}/{suffix.lstrip('/')}"

    def _member_path(self, org: str, username: str) -> str:
        if not username.strip():
            raise ValueError("username is required")
        return self._org_path(org, f"members/{quote(username, safe='')}/copilot")

    def get_seats(self, org: str) -> CopilotSeatInfo:
        """Return Copilot seat allocation and billing plan for ``org``."""

        data = self._rest.get_json(self._org_path(org, "copilot/billing"))
        return CopilotSeatInfo.model_validate(data)

    def get_usage(self, org: str, start_date: datetime, end_date: datetime) -> CopilotUsageMetrics:
        """Return usage metrics for ``org`` between ``start_date`` and ``end_date`` (inclusive)."""

        params = {
            "start_date": format_timestamp(start_date),
            "end_date": format_timestamp(end_date),
        }
        data = self._rest.get_json(self._org_path(org, "copilot/usage"), params=params)
        return CopilotUsageMetrics.model_validate(data)

    def get_user_status(self, org: str, username: str) -> CopilotUserStatus:
        """Return the Copilot status of one member.

        Raises:
            NotFoundError: If the user has no Copilot record in ``org``.
        """

        data = self._rest.get_json(self._member_path(org, username))
        return CopilotUserStatus.model_validate(data)

    def assign_seat(self, org: str, username: str) -> None:
        self._rest.request("PUT", self._member_path(org, username), json={})
        logger.info("Copilot seat assigned", extra={"org": org, "username": username})

    def remove_seat(self, org: str, username: str) -> None:
        self._rest.request("DELETE", self._member_path(org, username))
        logger.info("Copilot seat removed", extra={"org": org, "username": username})

    def close(self) -> None:
        self._rest.close()

    def __enter__(self) -> CopilotRestClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
