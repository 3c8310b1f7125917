"""Cascading failure decisions for synthetic spans.

Success is decided top-down: a session succeeds at its tier's rate, a task can
only succeed inside a successful session and is exposed to a late-session
cascade trigger, and an LLM/tool call can only succeed inside a successful
task.  Every failure carries an ``error.type`` drawn from the vocabulary of
its span kind, paired with the catalog's fixed message.
"""

from __future__ import annotations

import random
from typing import Any

from agent_traces.config import DEFAULT_FAILURE_POLICY, FailurePolicy
from agent_traces.schema import OperationKind
from agent_traces.synthetic.catalog import ERROR_TYPES, error_message_for
from agent_traces.telemetry import AgentTraceAttributes

_ERROR_VOCABULARY_KEYS: dict[OperationKind, str] = {
    OperationKind.SESSION: "workflow",
    OperationKind.AGENT_TASK: "task",
    OperationKind.LLM: "llm",
    OperationKind.TOOL: "tool",
}


class FailurePropagator:
    """Applies a ``FailurePolicy`` using an injected random source."""

    def __init__(
        self, rng: random.Random, policy: FailurePolicy = DEFAULT_FAILURE_POLICY
    ) -> None:
        self._rng = rng
        self.policy = policy

    def session_succeeds(self, success_rate: float) -> bool:
        """Bernoulli draw at the session tier's success rate."""
        return self._rng.random() < success_rate

    def cascade_fires(self, task_index: int, num_tasks: int) -> bool:
        """Whether the late-session degradation trigger hits this task.

        Only tasks past ``num_tasks * cascade_start_fraction`` are exposed.
        """
        if task_index <= num_tasks * self.policy.cascade_start_fraction:
            return False
        return self._rng.random() < self.policy.cascade_trigger_probability

    def task_succeeds(
        self, session_success: bool, task_index: int, num_tasks: int
    ) -> bool:
        """Decide task success: session success AND no cascade AND Bernoulli."""
        cascade = self.cascade_fires(task_index, num_tasks)
        independent = self._rng.random() < self.policy.task_success_probability
        return session_success and not cascade and independent

    def child_succeeds(self, kind: OperationKind, task_success: bool) -> bool:
        """Decide LLM/tool call success, conditioned on the parent task."""
        if kind == OperationKind.LLM:
            p = self.policy.llm_success_probability
        elif kind == OperationKind.TOOL:
            p = self.policy.tool_success_probability
        else:
            raise ValueError(f"Not a child span kind: {kind}")
        return task_success and self._rng.random() < p

    def should_attach(self, kind: OperationKind) -> bool:
        """Whether a task gets LLM (or tool) children at all."""
        if kind == OperationKind.LLM:
            p = self.policy.llm_attach_probability
        elif kind == OperationKind.TOOL:
            p = self.policy.tool_attach_probability
        else:
            raise ValueError(f"Not a child span kind: {kind}")
        return self._rng.random() < p

    def error_attributes(self, kind: OperationKind) -> dict[str, Any]:
        """Draw an error type for a failed span of *kind* with its message."""
        vocabulary = ERROR_TYPES[_ERROR_VOCABULARY_KEYS[kind]]
        error_type = self._rng.choice(vocabulary)
        return {
            AgentTraceAttributes.ERROR_TYPE: error_type,
            AgentTraceAttributes.ERROR_MESSAGE: error_message_for(error_type),
        }
