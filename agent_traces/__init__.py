"""Agent Traces - synthetic OpenTelemetry-style traces for multi-agent AI workflows.

Generates sessions and their span trees (session -> agent task -> LLM/tool
call) with cascading failures, plus the summary and analysis views a trace
dashboard renders.
"""

from agent_traces.schema import DashboardData, OperationKind, Session, Span, Summary
from agent_traces.synthetic.generator import (
    TraceDataGenerator,
    generate_sample_trace_data,
)

__all__ = [
    "DashboardData",
    "OperationKind",
    "Session",
    "Span",
    "Summary",
    "TraceDataGenerator",
    "generate_sample_trace_data",
]
