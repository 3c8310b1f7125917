"""Logging and OpenTelemetry helpers for the agent traces package.

Also defines the semantic-convention attribute keys stamped onto synthetic
spans, so the generator and the analysis views agree on one vocabulary.
"""

import json
import logging
import os
import sys

from opentelemetry import trace


class AgentTraceAttributes:
    """Semantic conventions for agentic AI spans."""

    # Agent
    AGENT_ID = "ai.agent.id"
    AGENT_TYPE = "ai.agent.type"
    AGENT_STATE = "ai.agent.state"

    # Session
    SESSION_ID = "ai.session.id"
    SESSION_TYPE = "ai.session.type"
    SESSION_NUM_TASKS = "session.num_tasks"
    SESSION_NUM_AGENTS = "session.num_agents"
    SESSION_TOTAL_TOKENS = "session.total_tokens"
    USER_ID = "user.id"

    # Task
    TASK_ID = "ai.task.id"
    TASK_TYPE = "task.type"
    TASK_DESCRIPTION = "task.description"

    # LLM
    LLM_MODEL = "ai.llm.model"
    LLM_REQUEST_TYPE = "llm.request.type"
    LLM_TEMPERATURE = "llm.temperature"
    TOKEN_COUNT_INPUT = "ai.token.count.input"
    TOKEN_COUNT_OUTPUT = "ai.token.count.output"

    # Tool
    TOOL_NAME = "ai.tool.name"
    TOOL_OPERATION = "tool.operation"
    TOOL_INPUT_SIZE = "tool.input_size"
    TOOL_OUTPUT_SIZE = "tool.output_size"

    # Error
    ERROR_TYPE = "error.type"
    ERROR_MESSAGE = "error.message"


def get_tracer(name: str) -> trace.Tracer:
    """Returns a tracer for the given module name."""
    return trace.get_tracer(name)


class JsonFormatter(logging.Formatter):
    """Basic JSON log formatter with OTel correlation."""

    def format(self, record: logging.LogRecord) -> str:
        """Render *record* as a single JSON line."""
        log_obj = {
            "timestamp": self.formatTime(record, self.datefmt),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "func": record.funcName,
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_obj["trace_id"] = format(span_context.trace_id, "032x")
            log_obj["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


def setup_logging(level: int = logging.INFO) -> None:
    """Configures logging for agent traces tooling.

    ``LOG_LEVEL`` overrides *level*; ``LOG_FORMAT=JSON`` switches to
    structured JSON lines, anything else keeps the text format. Both write
    to stderr so stdout stays free for generated payloads.

    Args:
        level: The logging level to use (default: INFO)
    """
    env_level = os.environ.get("LOG_LEVEL", "").upper()
    if env_level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        level = getattr(logging, env_level)

    log_format = os.environ.get("LOG_FORMAT", "TEXT").upper()

    if log_format == "JSON":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
        logging.getLogger().handlers = [handler]
        logging.getLogger().setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            stream=sys.stderr,
            force=True,
        )
