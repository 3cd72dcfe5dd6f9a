"""Configuration for simple-github.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

A dedicated token variable (`SIMPLE_GITHUB_TOKEN`) is used so that a
`GITHUB_TOKEN` exported for other tools is never picked up by accident.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"


class SimpleGitHubSettings(BaseSettings):
    """Settings shared by :class:`GitHubClient` and :class:`CopilotRestClient`.

    Environment variables:
    - SIMPLE_GITHUB_TOKEN
    - GITHUB_BASE_URL     (optional)
    - GITHUB_API_VERSION  (optional)
    - LOG_LEVEL           (optional)

    Notes:
        Tests can point at a different env file via
        `SimpleGitHubSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias="SIMPLE_GITHUB_TOKEN",
        description="GitHub token used for API authentication",
    )
    github_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    github_api_version: str = Field(
        default=DEFAULT_API_VERSION,
        validation_alias="GITHUB_API_VERSION",
        description="Value sent in the X-GitHub-Api-Version header",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_github_auth(self) -> SimpleGitHubSettings:
        if not self.github_token.strip():
            raise ValueError("SIMPLE_GITHUB_TOKEN is required")
        return self
