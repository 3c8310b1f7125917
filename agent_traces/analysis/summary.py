"""Aggregation over a generated session/span population.

``summarize`` is the summary block shipped inside ``DashboardData``.  The
remaining helpers compute the derived figures the dashboard overview and
traces views show: span/session success rates, token totals, per-agent-type
activity and per-trace error counts.  All of them are pure reductions.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from agent_traces.schema import (
    DashboardData,
    OperationKind,
    Session,
    Span,
    Summary,
    TimeRange,
)
from agent_traces.synthetic.catalog import agent_type_names


def _rate(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator else 0.0


def summarize(sessions: list[Session], spans: list[Span]) -> Summary:
    """Fold sessions and spans into the dashboard summary.

    ``success_rate`` is the fraction of successful sessions, 0.0 when there
    are none; ``agent_types`` comes from the static catalog.
    """
    time_range = TimeRange()
    if sessions:
        time_range = TimeRange(
            start=min(s.start_time for s in sessions),
            end=max(s.end_time for s in sessions),
        )

    return Summary(
        total_sessions=len(sessions),
        total_spans=len(spans),
        time_range=time_range,
        agent_types=agent_type_names(),
        success_rate=_rate(sum(1 for s in sessions if s.success), len(sessions)),
    )


class DashboardMetrics(BaseModel):
    """Headline figures for the overview tab."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    total_spans: int
    successful_spans: int
    error_spans: int
    span_success_rate: float
    total_sessions: int
    successful_sessions: int
    session_success_rate: float
    avg_span_duration: float
    total_tokens: int
    llm_span_count: int
    total_input_tokens: int
    total_output_tokens: int
    agent_task_count: int
    agent_type_counts: dict[str, int]
    success_rate_by_kind: dict[str, float]
    success_rate_by_agent_type: dict[str, float]


def _success_rates(groups: dict[str, list[bool]]) -> dict[str, float]:
    return {
        key: _rate(sum(outcomes), len(outcomes)) for key, outcomes in groups.items()
    }


def compute_dashboard_metrics(data: DashboardData) -> DashboardMetrics:
    """Compute overview metrics from a generated population."""
    spans = data.spans
    sessions = data.sessions

    successful_spans = sum(1 for s in spans if s.success)
    successful_sessions = sum(1 for s in sessions if s.success)
    llm_spans = [s for s in spans if s.kind == OperationKind.LLM]
    task_spans = [s for s in spans if s.kind == OperationKind.AGENT_TASK]

    by_kind: dict[str, list[bool]] = defaultdict(list)
    for span in spans:
        by_kind[span.kind.value].append(span.success)

    by_agent_type: dict[str, list[bool]] = defaultdict(list)
    for span in task_spans:
        if span.agent_type:
            by_agent_type[span.agent_type].append(span.success)

    return DashboardMetrics(
        total_spans=len(spans),
        successful_spans=successful_spans,
        error_spans=len(spans) - successful_spans,
        span_success_rate=_rate(successful_spans, len(spans)),
        total_sessions=len(sessions),
        successful_sessions=successful_sessions,
        session_success_rate=_rate(successful_sessions, len(sessions)),
        avg_span_duration=(
            sum(s.duration for s in spans) / len(spans) if spans else 0.0
        ),
        total_tokens=sum(s.total_tokens for s in sessions),
        llm_span_count=len(llm_spans),
        total_input_tokens=sum(s.input_tokens or 0 for s in llm_spans),
        total_output_tokens=sum(s.output_tokens or 0 for s in llm_spans),
        agent_task_count=len(task_spans),
        agent_type_counts=dict(
            Counter(s.agent_type for s in task_spans if s.agent_type)
        ),
        success_rate_by_kind=_success_rates(by_kind),
        success_rate_by_agent_type=_success_rates(by_agent_type),
    )


class TraceOverview(BaseModel):
    """One row of the traces table: a session plus its span statistics."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    trace_id: str
    session_id: str
    user_id: str
    session_type: str
    start_time: datetime
    duration: int
    success: bool
    span_count: int
    error_count: int


def trace_overviews(data: DashboardData) -> list[TraceOverview]:
    """Group spans by trace and return one overview row per session."""
    span_counts: Counter[str] = Counter()
    error_counts: Counter[str] = Counter()
    for span in data.spans:
        span_counts[span.trace_id] += 1
        if not span.success:
            error_counts[span.trace_id] += 1

    return [
        TraceOverview(
            trace_id=session.trace_id,
            session_id=session.session_id,
            user_id=session.user_id,
            session_type=session.session_type,
            start_time=session.start_time,
            duration=session.duration,
            success=session.success,
            span_count=span_counts[session.trace_id],
            error_count=error_counts[session.trace_id],
        )
        for session in data.sessions
    ]
