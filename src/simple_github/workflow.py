"""Handler for GitHub Actions workflow operations.

Reads go through PyGithub. Mutations (dispatch, enable/disable, cancel, rerun)
and the signed log URL lookup go through the REST session: PyGithub reports
those as booleans and drops the response status and body.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import quote

from github.Repository import Repository
from github.Workflow import Workflow
from github.WorkflowRun import WorkflowRun

from simple_github.exceptions import ApiError, github_errors
from simple_github.rest.session import GitHubRestSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunRef:
    """Minimal workflow run metadata."""

    id: int
    name: str
    status: str
    conclusion: str | None
    head_branch: str
    head_sha: str
    run_number: int
    event: str
    html_url: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class JobRef:
    """Minimal workflow job metadata."""

    id: int
    name: str
    status: str
    conclusion: str | None
    started_at: datetime | None
    completed_at: datetime | None
    html_url: str


@dataclass(frozen=True, slots=True)
class Timing:
    """Run duration and billable time per runner OS."""

    run_duration_ms: int | None
    billable: dict[str, object] = field(default_factory=dict)


class WorkflowHandler:
    """Handler bound to one workflow (numeric id or workflow file name)."""

    def __init__(
        self,
        repository: Callable[[], Repository],
        rest: GitHubRestSession,
        *,
        full_name: str,
        workflow_id: str,
    ) -> None:
        if not str(workflow_id).strip():
            raise ValueError("workflow_id is required")
        self._get_repository = repository
        self._rest = rest
        self._full_name = full_name
        self._workflow_id = str(workflow_id)

    @property
    def workflow_id(self) -> str:
        return self._workflow_id

    def _workflow(self) -> Workflow:
        return self._get_repository().get_workflow(self._workflow_id)

    def _workflow_path(self, suffix: str) -> str:
        workflow = quote(self._workflow_id, safe="")
        return f"repos/{self._full_name}/actions/workflows/{workflow}/{suffix}"

    def _run_path(self, run_id: int, suffix: str) -> str:
        if run_id <= 0:
            raise ValueError("run_id must be a positive integer")
        return f"repos/{self._full_name}/actions/runs/{run_id}/{suffix}"

    def get_workflow_runs(self) -> list[RunRef]:
        """Return the runs of this workflow, newest first (API order)."""

        with github_errors("get_workflow_runs"):
            return [_run_ref(run) for run in self._workflow().get_runs()]

    def get_latest_run(self) -> RunRef | None:
        with github_errors("get_workflow_runs"):
            run = next(iter(self._workflow().get_runs()), None)
            return _run_ref(run) if run is not None else None

    def dispatch(self, branch: str, inputs: Mapping[str, str] | None = None) -> None:
        """Trigger a `workflow_dispatch` run on ``branch``.

        Raises:
            ValidationError: If the workflow has no `workflow_dispatch` trigger or
                the inputs are rejected.
        """

        payload = {"ref": branch, "inputs": dict(inputs or {})}
        self._rest.request("POST", self._workflow_path("dispatches"), json=payload)
        logger.info(
            "Workflow dispatched",
            extra={"repo": self._full_name, "workflow": self._workflow_id, "ref": branch},
        )

    def set_enabled(self, enabled: bool) -> None:
        self._rest.request("PUT", self._workflow_path("enable" if enabled else "disable"))
        logger.info(
            "Workflow state changed",
            extra={"repo": self._full_name, "workflow": self._workflow_id, "enabled": enabled},
        )

    def cancel_run(self, run_id: int) -> None:
        self._rest.request("POST", self._run_path(run_id, "cancel"))

    def rerun(self, run_id: int) -> None:
        """Re-run every job of a run."""

        self._rest.request("POST", self._run_path(run_id, "rerun"))

    def rerun_failed_jobs(self, run_id: int) -> None:
        self._rest.request("POST", self._run_path(run_id, "rerun-failed-jobs"))

    def get_jobs(self, run_id: int) -> list[JobRef]:
        with github_errors("get_workflow_jobs"):
            run = self._get_repository().get_workflow_run(run_id)
            return [
                JobRef(
                    id=job.id,
                    name=job.name,
                    status=job.status,
                    conclusion=job.conclusion,
                    started_at=job.started_at,
                    completed_at=job.completed_at,
                    html_url=job.html_url,
                )
                for job in run.jobs()
            ]

    def get_logs_url(self, run_id: int) -> str:
        """Return the short-lived signed URL the log archive redirects to.

        The URL expires after about a minute; callers should download promptly.
        """

        resp = self._rest.request(
            "GET",
            self._run_path(run_id, "logs"),
            allow_redirects=False,
            expected_status={302},
        )
        location = resp.headers.get("Location")
        if not location:
            raise ApiError(resp.status_code, None, "Log download response has no Location header")
        return location

    def get_timing(self, run_id: int) -> Timing:
        with github_errors("get_workflow_run_timing"):
            timing = self._get_repository().get_workflow_run(run_id).timing()
        return Timing(run_duration_ms=timing.run_duration_ms, billable=dict(timing.billable))

    def __repr__(self) -> str:
        return f"WorkflowHandler(workflow_id={self._workflow_id!r})"


def _run_ref(run: WorkflowRun) -> RunRef:
    return RunRef(
        id=run.id,
        name=run.name,
        status=run.status,
        conclusion=run.conclusion,
        head_branch=run.head_branch,
        head_sha=run.head_sha,
        run_number=run.run_number,
        event=run.event,
        html_url=run.html_url,
        created_at=run.created_at,
    )
