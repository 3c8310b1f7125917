"""Multi-agent workflow scenario catalog.

Defines the static vocabulary the synthetic trace generator draws from:
agent types with their tool sets, LLM models with their average token usage,
session/task/request enumerations, the per-kind error vocabularies and the
task description phrase pools.  Everything here is read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Data Classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AgentTypeDef:
    """Definition of an agent type that can execute tasks."""

    type: str
    avg_task_duration: int  # ms
    tool_usage: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LLMModelDef:
    """Definition of an LLM model and its typical token footprint."""

    name: str
    avg_input_tokens: int
    avg_output_tokens: int


# ---------------------------------------------------------------------------
# Agent Types (6)
# ---------------------------------------------------------------------------
AGENT_TYPES: list[AgentTypeDef] = [
    AgentTypeDef(
        type="research-agent",
        avg_task_duration=5000,
        tool_usage=["web-search", "document-analyzer", "knowledge-base"],
    ),
    AgentTypeDef(
        type="code-agent",
        avg_task_duration=8000,
        tool_usage=["code-editor", "compiler", "debugger", "git"],
    ),
    AgentTypeDef(
        type="planning-agent",
        avg_task_duration=4000,
        tool_usage=["task-planner", "priority-analyzer", "resource-allocator"],
    ),
    AgentTypeDef(
        type="communication-agent",
        avg_task_duration=3000,
        tool_usage=["email-client", "slack-api", "notification-service"],
    ),
    AgentTypeDef(
        type="data-agent",
        avg_task_duration=6000,
        tool_usage=["database", "data-processor", "visualization-tool"],
    ),
    AgentTypeDef(
        type="monitoring-agent",
        avg_task_duration=2000,
        tool_usage=["metrics-collector", "alert-manager", "log-analyzer"],
    ),
]

# ---------------------------------------------------------------------------
# LLM Models (4)
# ---------------------------------------------------------------------------
LLM_MODELS: list[LLMModelDef] = [
    LLMModelDef(name="gpt-4", avg_input_tokens=1200, avg_output_tokens=400),
    LLMModelDef(name="gpt-3.5-turbo", avg_input_tokens=800, avg_output_tokens=300),
    LLMModelDef(name="claude-3", avg_input_tokens=1500, avg_output_tokens=500),
    LLMModelDef(name="gemini-pro", avg_input_tokens=1000, avg_output_tokens=350),
]

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------
SESSION_TYPES: list[str] = ["interactive", "batch", "automated", "collaborative"]
TASK_TYPES: list[str] = [
    "analysis",
    "generation",
    "processing",
    "communication",
    "planning",
]
LLM_REQUEST_TYPES: list[str] = ["completion", "chat", "embedding"]
TOOL_OPERATIONS: list[str] = ["read", "write", "process", "query"]

# ---------------------------------------------------------------------------
# Error Vocabulary
# ---------------------------------------------------------------------------
ERROR_TYPES: dict[str, list[str]] = {
    "llm": ["rate_limit", "context_length", "safety_filter", "timeout"],
    "tool": ["api_error", "timeout", "invalid_input", "rate_limit"],
    "task": ["timeout", "resource_limit", "validation_error", "dependency_failure"],
    "workflow": [
        "workflow_error",
        "dependency_failure",
        "timeout",
        "resource_exhaustion",
    ],
}

ERROR_MESSAGES: dict[str, str] = {
    "rate_limit": "API rate limit exceeded, retry after 60 seconds",
    "context_length": "Input text exceeds maximum context length of 4096 tokens",
    "safety_filter": "Content filtered due to safety policy violation",
    "timeout": "Operation timed out after 30 seconds",
    "api_error": "External API returned 500 Internal Server Error",
    "invalid_input": "Input validation failed: missing required parameters",
    "resource_limit": "Insufficient resources to complete operation",
    "validation_error": "Data validation failed: invalid format",
    "dependency_failure": "Dependent service is unavailable",
    "workflow_error": "Workflow execution failed at step 3",
    "resource_exhaustion": "System resources exhausted, operation cancelled",
}

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"

# ---------------------------------------------------------------------------
# Task Descriptions
# ---------------------------------------------------------------------------
DEFAULT_TASK_DESCRIPTION = "Perform agent task"

TASK_DESCRIPTIONS: dict[str, list[str]] = {
    "research-agent": [
        "Analyze market trends for Q4 planning",
        "Research competitor pricing strategies",
        "Gather customer feedback data",
        "Investigate new technology adoption",
    ],
    "code-agent": [
        "Implement user authentication system",
        "Optimize database query performance",
        "Fix memory leak in data processing",
        "Add unit tests for API endpoints",
    ],
    "planning-agent": [
        "Create project milestone schedule",
        "Allocate resources for sprint planning",
        "Prioritize feature backlog items",
        "Develop risk mitigation strategies",
    ],
    "communication-agent": [
        "Send project status update emails",
        "Schedule stakeholder meetings",
        "Post team announcements",
        "Coordinate with external partners",
    ],
    "data-agent": [
        "Process customer analytics data",
        "Generate monthly performance reports",
        "Clean and validate dataset",
        "Create data visualization dashboards",
    ],
    "monitoring-agent": [
        "Check system health metrics",
        "Monitor application performance",
        "Analyze error rate trends",
        "Generate alerts for anomalies",
    ],
}


def agent_type_names() -> list[str]:
    """Return the catalog's agent type names in declaration order."""
    return [a.type for a in AGENT_TYPES]


def error_message_for(error_type: str) -> str:
    """Return the fixed human-readable message for *error_type*."""
    return ERROR_MESSAGES.get(error_type, UNKNOWN_ERROR_MESSAGE)
