"""Direct REST access for endpoints outside PyGithub's coverage."""

from simple_github.rest.copilot import CopilotRestClient
from simple_github.rest.models import (
    CopilotSeatInfo,
    CopilotUsageMetrics,
    CopilotUserStatus,
    DailyMetrics,
    PendingCancellation,
)
from simple_github.rest.session import GitHubRestSession

__all__ = [
    "CopilotRestClient",
    "CopilotSeatInfo",
    "CopilotUsageMetrics",
    "CopilotUserStatus",
    "DailyMetrics",
    "GitHubRestSession",
    "PendingCancellation",
]
