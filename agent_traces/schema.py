"""Pydantic schemas for synthetic agent traces.

This module defines the data handed to the dashboard:
- Sessions (one simulated end-user interaction, also the trace root)
- Spans (timed units of work forming a tree via ``parent_span_id``)
- The summary block and the ``DashboardData`` envelope

Field names are snake_case in Python; ``model_dump(by_alias=True)`` emits the
camelCase keys the dashboard consumes.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from opentelemetry.trace import StatusCode
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from agent_traces.config import Complexity
from agent_traces.telemetry import AgentTraceAttributes


class OperationKind(str, Enum):
    """Kind of work a span represents."""

    SESSION = "session"
    AGENT_TASK = "agent_task"
    LLM = "llm"
    TOOL = "tool"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Session(_WireModel):
    """One simulated end-user interaction."""

    session_id: str
    user_id: str
    session_type: str
    complexity: Complexity
    start_time: datetime
    end_time: datetime
    duration: int = Field(description="Milliseconds, end_time - start_time")
    num_tasks: int
    num_agents: int
    success: bool
    total_tokens: int
    trace_id: str

    @model_validator(mode="after")
    def _check_invariants(self) -> "Session":
        if self.duration <= 0:
            raise ValueError(f"Session duration must be positive, got {self.duration}")
        if self.num_tasks < 2:
            raise ValueError(f"Session needs at least 2 tasks, got {self.num_tasks}")
        if self.end_time != self.start_time + timedelta(milliseconds=self.duration):
            raise ValueError("Session end_time must equal start_time + duration")
        if self.trace_id != self.session_id:
            raise ValueError("Session trace_id must equal session_id")
        return self


class Span(_WireModel):
    """One timed unit of work within a trace."""

    trace_id: str
    span_id: str
    parent_span_id: str | None = None
    kind: OperationKind
    operation_name: str
    start_time: datetime
    end_time: datetime
    duration: int = Field(description="Milliseconds, end_time - start_time")
    success: bool
    attributes: dict[str, Any] = Field(default_factory=dict)

    # Agent task fields
    agent_id: str | None = None
    agent_type: str | None = None
    task_type: str | None = None

    # LLM fields
    model: str | None = None
    input_tokens: int | None = None
    output_tokens: int | None = None

    # Tool fields
    tool_name: str | None = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "Span":
        if self.duration <= 0:
            raise ValueError(
                f"Span {self.span_id} duration must be positive, got {self.duration}"
            )
        if self.end_time != self.start_time + timedelta(milliseconds=self.duration):
            raise ValueError(
                f"Span {self.span_id} end_time must equal start_time + duration"
            )
        has_error = AgentTraceAttributes.ERROR_TYPE in self.attributes
        if has_error == self.success:
            raise ValueError(
                f"Span {self.span_id} must carry error attributes iff it failed"
            )
        if (self.parent_span_id is None) != (self.kind == OperationKind.SESSION):
            raise ValueError(
                f"Span {self.span_id}: only session spans may omit a parent"
            )
        return self

    @property
    def is_root(self) -> bool:
        return self.parent_span_id is None

    @property
    def status_code(self) -> StatusCode:
        """OpenTelemetry status equivalent of ``success``."""
        return StatusCode.OK if self.success else StatusCode.ERROR

    @property
    def error_type(self) -> str | None:
        return self.attributes.get(AgentTraceAttributes.ERROR_TYPE)

    @property
    def error_message(self) -> str | None:
        return self.attributes.get(AgentTraceAttributes.ERROR_MESSAGE)


class TimeRange(_WireModel):
    """Inclusive time bounds of a session population."""

    start: datetime | None = None
    end: datetime | None = None


class Summary(_WireModel):
    """Aggregate statistics over a generated population."""

    total_sessions: int
    total_spans: int
    time_range: TimeRange
    agent_types: list[str]
    success_rate: float


class DashboardData(_WireModel):
    """The generator's sole output, owned by the caller."""

    sessions: list[Session]
    spans: list[Span]
    summary: Summary

    def to_wire(self) -> dict[str, Any]:
        """Return the camelCase JSON-compatible payload."""
        return self.model_dump(mode="json", by_alias=True)
