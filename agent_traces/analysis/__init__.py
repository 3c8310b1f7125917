"""Read-only analysis views over generated trace data."""

from .filters import agent_types_in, filter_sessions, filter_spans
from .summary import (
    DashboardMetrics,
    TraceOverview,
    compute_dashboard_metrics,
    summarize,
    trace_overviews,
)
from .tree import SpanArena, SpanNode, WaterfallItem

__all__ = [
    "agent_types_in",
    "filter_sessions",
    "filter_spans",
    "DashboardMetrics",
    "TraceOverview",
    "compute_dashboard_metrics",
    "summarize",
    "trace_overviews",
    "SpanArena",
    "SpanNode",
    "WaterfallItem",
]
