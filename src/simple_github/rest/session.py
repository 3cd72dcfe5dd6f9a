"""Thin `requests` session for REST endpoints that PyGithub does not cover."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any

import requests

from simple_github.config import DEFAULT_API_VERSION, DEFAULT_BASE_URL
from simple_github.exceptions import TransportError, error_for_status

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30


class GitHubRestSession:
    """Authenticated JSON requests against the GitHub REST API.

    One call is one HTTP round trip: no retries, no pagination, no caching.
    Non-2xx responses raise the matching :class:`~simple_github.exceptions.ApiError`
    subclass; connection failures raise :class:`~simple_github.exceptions.TransportError`.
    """

    def __init__(
        self,
        *,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": api_version,
                "User-Agent": "simple-github",
            }
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def url(self, path: str) -> str:
        """Resolve an API path (or pass through an absolute URL)."""

        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        allow_redirects: bool = True,
        expected_status: Collection[int] | None = None,
    ) -> requests.Response:
        """Send one request and return the response.

        Any status outside 2xx raises, unless it is listed in ``expected_status``,
        which then replaces the 2xx range.
        """

        url = self.url(path)
        logger.debug("GitHub REST request", extra={"method": method, "url": url})
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                allow_redirects=allow_redirects,
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if expected_status is not None:
            accepted = resp.status_code in expected_status
        else:
            accepted = 200 <= resp.status_code < 300
        if not accepted:
            body = _response_body(resp)
            logger.info(
                "GitHub REST request refused",
                extra={"method": method, "url": url, "status": resp.status_code},
            )
            raise error_for_status(resp.status_code, body)
        return resp

    def get_json(self, path: str, *, params: dict[str, str] | None = None) -> Any:
        resp = self.request("GET", path, params=params)
        try:
            return resp.json()
        except ValueError as exc:
            raise error_for_status(
                resp.status_code, resp.text, "Response body is not valid JSON"
            ) from exc

    def close(self) -> None:
        self._session.close()


def _response_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text
