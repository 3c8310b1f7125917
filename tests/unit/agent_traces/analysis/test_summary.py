"""Tests for summary aggregation and dashboard metrics."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from agent_traces.analysis.summary import (
    compute_dashboard_metrics,
    summarize,
    trace_overviews,
)
from agent_traces.schema import DashboardData, OperationKind
from agent_traces.synthetic.catalog import agent_type_names
from agent_traces.synthetic.generator import generate_sample_trace_data

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


@pytest.fixture(scope="module")
def data() -> DashboardData:
    return generate_sample_trace_data(60, seed=8, now=NOW)


class TestSummarize:
    """The summary must be derivable from sessions and spans alone."""

    def test_counts(self, data: DashboardData) -> None:
        summary = data.summary
        assert summary.total_sessions == len(data.sessions)
        assert summary.total_spans == len(data.spans)

    def test_time_range(self, data: DashboardData) -> None:
        tr = data.summary.time_range
        assert tr.start == min(s.start_time for s in data.sessions)
        assert tr.end == max(s.end_time for s in data.sessions)

    def test_success_rate(self, data: DashboardData) -> None:
        expected = sum(s.success for s in data.sessions) / len(data.sessions)
        assert data.summary.success_rate == pytest.approx(expected)

    def test_agent_types_from_catalog(self, data: DashboardData) -> None:
        assert data.summary.agent_types == agent_type_names()

    def test_recomputing_matches_embedded_summary(self, data: DashboardData) -> None:
        assert summarize(data.sessions, data.spans) == data.summary

    def test_empty_population(self) -> None:
        summary = summarize([], [])
        assert summary.total_sessions == 0
        assert summary.success_rate == 0.0
        assert summary.time_range.start is None
        assert summary.time_range.end is None


class TestDashboardMetrics:
    def test_span_totals(self, data: DashboardData) -> None:
        m = compute_dashboard_metrics(data)
        assert m.total_spans == len(data.spans)
        assert m.successful_spans + m.error_spans == m.total_spans
        assert m.span_success_rate == pytest.approx(m.successful_spans / m.total_spans)
        assert m.session_success_rate == pytest.approx(data.summary.success_rate)

    def test_llm_token_totals(self, data: DashboardData) -> None:
        m = compute_dashboard_metrics(data)
        llm = [s for s in data.spans if s.kind == OperationKind.LLM]
        assert m.llm_span_count == len(llm)
        assert m.total_input_tokens == sum(s.input_tokens for s in llm)
        assert m.total_output_tokens == sum(s.output_tokens for s in llm)
        assert m.total_tokens == sum(s.total_tokens for s in data.sessions)

    def test_agent_type_breakdown(self, data: DashboardData) -> None:
        m = compute_dashboard_metrics(data)
        assert sum(m.agent_type_counts.values()) == m.agent_task_count
        assert m.agent_task_count == sum(s.num_tasks for s in data.sessions)
        assert set(m.success_rate_by_agent_type) == set(m.agent_type_counts)
        for rate in m.success_rate_by_agent_type.values():
            assert 0.0 <= rate <= 1.0

    def test_success_rate_by_kind(self, data: DashboardData) -> None:
        rates = compute_dashboard_metrics(data).success_rate_by_kind
        assert set(rates) == {"session", "agent_task", "llm", "tool"}
        assert rates["session"] == pytest.approx(data.summary.success_rate)
        tasks = [s for s in data.spans if s.kind == OperationKind.AGENT_TASK]
        assert rates["agent_task"] == pytest.approx(
            sum(s.success for s in tasks) / len(tasks)
        )

    def test_average_duration(self, data: DashboardData) -> None:
        m = compute_dashboard_metrics(data)
        expected = sum(s.duration for s in data.spans) / len(data.spans)
        assert m.avg_span_duration == pytest.approx(expected)

    def test_empty_population(self) -> None:
        m = compute_dashboard_metrics(generate_sample_trace_data(0))
        assert m.total_spans == 0
        assert m.span_success_rate == 0.0
        assert m.avg_span_duration == 0.0
        assert m.agent_type_counts == {}

    def test_camel_case_dump(self, data: DashboardData) -> None:
        dumped = compute_dashboard_metrics(data).model_dump(by_alias=True)
        assert "totalSpans" in dumped
        assert "successRateByAgentType" in dumped


class TestTraceOverviews:
    def test_one_row_per_session(self, data: DashboardData) -> None:
        rows = trace_overviews(data)
        assert [r.trace_id for r in rows] == [s.trace_id for s in data.sessions]

    def test_span_and_error_counts(self, data: DashboardData) -> None:
        rows = trace_overviews(data)
        assert sum(r.span_count for r in rows) == len(data.spans)
        assert sum(r.error_count for r in rows) == sum(
            not s.success for s in data.spans
        )
        for row in rows:
            assert row.error_count <= row.span_count
            if not row.success:
                # root plus every task span fail in a failed session
                assert row.error_count >= 1
