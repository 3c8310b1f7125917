"""Session and span filtering for the dashboard tables."""

from typing import Literal

from agent_traces.schema import Session, Span

StatusFilter = Literal["all", "success", "failed"]


def _matches_status(success: bool, status: StatusFilter) -> bool:
    if status == "all":
        return True
    if status == "success":
        return success
    if status == "failed":
        return not success
    raise ValueError(f"Unknown status filter: {status!r}")


def filter_sessions(
    sessions: list[Session], status: StatusFilter = "all"
) -> list[Session]:
    """Return the sessions matching *status*, preserving order."""
    return [s for s in sessions if _matches_status(s.success, status)]


def filter_spans(
    spans: list[Span],
    status: StatusFilter = "all",
    agent_type: str | None = None,
    trace_id: str | None = None,
) -> list[Span]:
    """Return the spans matching every given criterion, preserving order.

    Args:
        spans: Span population to filter.
        status: ``all``, ``success`` or ``failed``.
        agent_type: Keep only agent-task spans of this type.
        trace_id: Keep only spans of this trace.
    """
    return [
        s
        for s in spans
        if _matches_status(s.success, status)
        and (agent_type is None or s.agent_type == agent_type)
        and (trace_id is None or s.trace_id == trace_id)
    ]


def agent_types_in(spans: list[Span]) -> list[str]:
    """Distinct agent types present in *spans*, sorted."""
    return sorted({s.agent_type for s in spans if s.agent_type})
