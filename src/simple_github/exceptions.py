"""Exception types raised by simple-github.

PyGithub and requests errors never leak out of the handlers; they are translated
into the classes below by :func:`github_errors`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import requests
from github import GithubException

logger = logging.getLogger(__name__)


class SimpleGitHubError(Exception):
    """Base exception for all simple-github errors."""


class TransportError(SimpleGitHubError, ConnectionError):
    """Raised when the remote API could not be reached (connection/IO failure)."""


class ApiError(SimpleGitHubError):
    """Raised for any non-2xx response from the GitHub API."""

    def __init__(self, status: int, body: Any = None, message: str | None = None) -> None:
        self.status = status
        self.body = body
        self.message = message or _message_from_body(body) or f"HTTP {status}"
        super().__init__(f"[{status}] {self.message}")


class NotFoundError(ApiError):
    """Raised when a resource does not exist (404)."""


class ConflictError(ApiError):
    """Raised on conflicts: existing refs, unmergeable or already merged pull requests."""


class PreconditionFailedError(ApiError):
    """Raised when the remote side refuses an operation whose preconditions are unmet."""


class ValidationError(ApiError):
    """Raised when the API rejects the request payload (422)."""


class InvalidStateError(SimpleGitHubError):
    """Raised when a builder is used after its terminal transition."""


class NotSupportedError(SimpleGitHubError):
    """Raised when a caller asks for a variant this library does not handle."""


_STATUS_ERRORS: dict[int, type[ApiError]] = {
    404: NotFoundError,
    409: ConflictError,
    412: PreconditionFailedError,
    422: ValidationError,
}


def _message_from_body(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    if isinstance(body, str) and body.strip():
        return body.strip()
    return None


def error_for_status(status: int, body: Any = None, message: str | None = None) -> ApiError:
    """Build the most specific :class:`ApiError` subclass for an HTTP status."""

    error_cls = _STATUS_ERRORS.get(status, ApiError)
    return error_cls(status, body, message)


def from_github_exception(exc: GithubException) -> ApiError:
    return error_for_status(exc.status, exc.data, exc.message)


@contextmanager
def github_errors(operation: str) -> Iterator[None]:
    """Translate PyGithub / requests failures raised inside the block.

    Args:
        operation: Short description used in debug logs, e.g. ``"create_branch"``.
    """

    try:
        yield
    except GithubException as exc:
        logger.debug(
            "GitHub API call failed",
            extra={"operation": operation, "status": exc.status},
        )
        raise from_github_exception(exc) from exc
    except requests.RequestException as exc:
        logger.debug("GitHub API unreachable", extra={"operation": operation})
        raise TransportError(f"{operation}: {exc}") from exc
