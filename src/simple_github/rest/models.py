"""Copilot data records returned by :class:`~simple_github.rest.copilot.CopilotRestClient`.

Field names are snake_case Python attributes; where the wire name differs the
alias carries the wire name. Always serialize with ``by_alias=True`` to get the
GitHub wire format back.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

# Extended-format date-time only; dates, hour-only and basic-format values are rejected.
_ISO_DATE_TIME = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:\d{2})?"
)


def parse_timestamp(value: object) -> datetime:
    """Parse an ISO-8601 date-time string ("2024-01-09T00:00:00Z" style).

    Naive values are taken as UTC. Anything that is not an ISO-8601 string is
    rejected.
    """

    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if not isinstance(value, str) or not _ISO_DATE_TIME.fullmatch(value.strip()):
        raise ValueError(f"Invalid ISO-8601 date-time: {value!r}")
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


Timestamp = Annotated[
    datetime,
    BeforeValidator(parse_timestamp),
    PlainSerializer(format_timestamp, return_type=str),
]


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class CopilotSeatInfo(_WireModel):
    """Copilot seat allocation in an organization."""

    total_seats: int = Field(alias="seats")
    used_seats: int = Field(alias="used_seats")
    billing_plan: str = Field(alias="plan_name")
    public_code_suggestions: bool = Field(alias="public_code_suggestions")
    business_plan: bool = Field(alias="is_business_plan")


class DailyMetrics(_WireModel):
    """Usage for a single day."""

    date: Timestamp
    suggestions_accepted: int = Field(alias="suggestions_accepted")
    lines_accepted: int = Field(alias="lines_accepted")
    active_users: int = Field(alias="active_users")


class CopilotUsageMetrics(_WireModel):
    """Copilot usage metrics for an organization over a date range."""

    daily_metrics: list[DailyMetrics] = Field(default_factory=list, alias="daily_metrics")
    total_suggestions_accepted: int = Field(alias="total_suggestions_accepted")
    total_lines_accepted: int = Field(alias="total_lines_accepted")
    acceptance_rate: float = Field(alias="acceptance_rate", ge=0.0, le=1.0)


class PendingCancellation(_WireModel):
    effective_date: Timestamp = Field(alias="effective_date")
    reason: str


class CopilotUserStatus(_WireModel):
    """Copilot access status of one organization member."""

    username: str = Field(alias="user_login")
    seat_assigned: bool = Field(alias="seat_assigned")
    last_activity_date: Timestamp | None = Field(default=None, alias="last_activity_date")
    assignment_date: Timestamp | None = Field(default=None, alias="assignment_date")
    assigned_by: str | None = Field(default=None, alias="assigned_by")
    pending_cancellation: PendingCancellation | None = Field(
        default=None, alias="pending_cancellation"
    )
