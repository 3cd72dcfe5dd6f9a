"""simple-github.

A fluent convenience layer over the GitHub REST API:
- `GitHubClient` hands out repository, branch, pull request and workflow handlers
- `IssueBuilder` drafts and creates issues
- `CopilotRestClient` manages Copilot seats and reads usage metrics
"""

__version__ = "0.1.0"

from simple_github.branch import BranchHandler
from simple_github.client import GitHubClient
from simple_github.config import SimpleGitHubSettings
from simple_github.exceptions import (
    ApiError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    NotSupportedError,
    PreconditionFailedError,
    SimpleGitHubError,
    TransportError,
    ValidationError,
)
from simple_github.issue import CreatedIssue, IssueBuilder, IssueDraft
from simple_github.pull_request import MergeMethod, PullRequestHandler, PullRequestState
from simple_github.repository import RepositoryHandler
from simple_github.rest import CopilotRestClient
from simple_github.workflow import JobRef, RunRef, Timing, WorkflowHandler

__all__ = [
    "__version__",
    "ApiError",
    "BranchHandler",
    "ConflictError",
    "CopilotRestClient",
    "CreatedIssue",
    "GitHubClient",
    "InvalidStateError",
    "IssueBuilder",
    "IssueDraft",
    "JobRef",
    "MergeMethod",
    "NotFoundError",
    "NotSupportedError",
    "PreconditionFailedError",
    "PullRequestHandler",
    "PullRequestState",
    "RepositoryHandler",
    "RunRef",
    "SimpleGitHubError",
    "SimpleGitHubSettings",
    "Timing",
    "TransportError",
    "ValidationError",
    "WorkflowHandler",
]
