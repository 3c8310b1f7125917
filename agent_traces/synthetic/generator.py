"""Synthetic trace data generator for multi-agent AI workflows.

Produces a population of sessions, each the root of a trace holding a
sequential chain of agent-task spans with optional LLM-call and tool-call
children.  Uses an injected ``random.Random(seed)`` so a seeded run is a pure
function of ``(count, seed, now)``; without a seed every run differs.
"""

from __future__ import annotations

import logging
import math
import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from agent_traces.analysis.summary import summarize
from agent_traces.config import (
    AGENT_INSTANCE_RANGE,
    DEFAULT_FAILURE_POLICY,
    DEFAULT_SESSION_COUNT,
    DEFAULT_WINDOW_DAYS,
    LLM_CALLS_PER_TASK,
    LLM_DURATION_MS,
    LLM_GAP_MS,
    LLM_START_OFFSET_FRACTION,
    LLM_TEMPERATURE_RANGE,
    NUM_AGENTS_RANGE,
    TASK_DURATION_SPREAD,
    TASK_GAP_MS,
    TOKEN_SPREAD,
    TOOL_CALLS_PER_TASK,
    TOOL_DURATION_MS,
    TOOL_GAP_MS,
    TOOL_INPUT_SIZE,
    TOOL_OUTPUT_SIZE,
    TOOL_START_OFFSET_FRACTION,
    TOTAL_TOKENS_RANGE,
    USER_ID_RANGE,
    FailurePolicy,
    tier_for_score,
)
from agent_traces.schema import DashboardData, OperationKind, Session, Span
from agent_traces.synthetic.catalog import (
    AGENT_TYPES,
    DEFAULT_TASK_DESCRIPTION,
    LLM_MODELS,
    LLM_REQUEST_TYPES,
    SESSION_TYPES,
    TASK_DESCRIPTIONS,
    TASK_TYPES,
    TOOL_OPERATIONS,
    AgentTypeDef,
)
from agent_traces.synthetic.failure_policy import FailurePropagator
from agent_traces.telemetry import AgentTraceAttributes as Attr
from agent_traces.telemetry import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

_PROGRESS_EVERY = 10


class TraceDataGenerator:
    """Generates sessions and their span trees.

    Args:
        seed: Seed for the private random source. ``None`` seeds from the OS.
        now: Reference time; sessions start within ``window_days`` before it.
            Defaults to the current UTC time.
        policy: Failure/attach probabilities.
        window_days: Width of the window session start times are drawn from.
    """

    def __init__(
        self,
        seed: int | None = None,
        now: datetime | None = None,
        policy: FailurePolicy = DEFAULT_FAILURE_POLICY,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ) -> None:
        self._rng = random.Random(seed)
        self._now = now or datetime.now(timezone.utc)
        self._window_ms = window_days * 24 * 60 * 60 * 1000
        self._failures = FailurePropagator(self._rng, policy)

    # ------------------------------------------------------------------
    # Internal: deterministic ids and draws
    # ------------------------------------------------------------------

    def _hex_id(self, length: int) -> str:
        """Generate a deterministic hex string of *length* characters."""
        raw = self._rng.getrandbits(length * 4)
        return f"{raw:0{length}x}"

    def _uuid(self) -> str:
        """Generate a deterministic version-4 UUID string."""
        return str(uuid.UUID(int=self._rng.getrandbits(128), version=4))

    def _randint_scaled(self, base: float, low: float, high: float) -> int:
        """Uniform integer in ``[base * low, base * high]``, at least 1."""
        lo = max(1, math.ceil(base * low))
        hi = max(lo, math.floor(base * high))
        return self._rng.randint(lo, hi)

    def _offset_ms(self, duration: int, low: float, high: float) -> int:
        """Uniform integer offset in ``[duration * low, duration * high]``."""
        lo = math.ceil(duration * low)
        hi = max(lo, math.floor(duration * high))
        return self._rng.randint(lo, hi)

    def _task_description(self, agent_type: str) -> str:
        descriptions = TASK_DESCRIPTIONS.get(agent_type)
        if not descriptions:
            return DEFAULT_TASK_DESCRIPTION
        return self._rng.choice(descriptions)

    # ------------------------------------------------------------------
    # Session Synthesizer
    # ------------------------------------------------------------------

    def generate_session(self) -> Session:
        """Synthesize one session from the three-tier complexity distribution."""
        tier = tier_for_score(self._rng.random())
        duration = self._rng.randint(*tier.duration_range)
        num_tasks = self._rng.randint(*tier.num_tasks_range)

        session_id = self._uuid()
        start_time = self._now - timedelta(
            milliseconds=self._rng.randint(0, self._window_ms)
        )
        end_time = start_time + timedelta(milliseconds=duration)
        success = self._failures.session_succeeds(tier.success_rate)

        return Session(
            session_id=session_id,
            user_id=f"user-{self._rng.randint(*USER_ID_RANGE):03d}",
            session_type=self._rng.choice(SESSION_TYPES),
            complexity=tier.complexity,
            start_time=start_time,
            end_time=end_time,
            duration=duration,
            num_tasks=num_tasks,
            num_agents=self._rng.randint(*NUM_AGENTS_RANGE),
            success=success,
            total_tokens=self._rng.randint(*TOTAL_TOKENS_RANGE),
            trace_id=session_id,
        )

    # ------------------------------------------------------------------
    # Span Tree Builder
    # ------------------------------------------------------------------

    def generate_spans_for_session(self, session: Session) -> list[Span]:
        """Build the flat span list (root first) for *session*.

        Tasks run back to back from the session start; the clock cursor is not
        clamped, so late tasks may end after the session's nominal end.
        """
        root = self._session_span(session)
        spans: list[Span] = [root]

        cursor = session.start_time
        avg_task_duration = session.duration / session.num_tasks

        for task_index in range(session.num_tasks):
            task_spans = self._task_spans(
                session, root.span_id, task_index, cursor, avg_task_duration
            )
            spans.extend(task_spans)
            gap = self._rng.randint(*TASK_GAP_MS)
            cursor = cursor + timedelta(milliseconds=task_spans[0].duration + gap)

        return spans

    def _session_span(self, session: Session) -> Span:
        attributes: dict[str, Any] = {
            Attr.SESSION_ID: session.session_id,
            Attr.SESSION_TYPE: session.session_type,
            Attr.USER_ID: session.user_id,
            Attr.SESSION_NUM_TASKS: session.num_tasks,
            Attr.SESSION_NUM_AGENTS: session.num_agents,
            Attr.SESSION_TOTAL_TOKENS: session.total_tokens,
        }
        if not session.success:
            attributes.update(self._failures.error_attributes(OperationKind.SESSION))

        return Span(
            trace_id=session.trace_id,
            span_id=self._hex_id(16),
            parent_span_id=None,
            kind=OperationKind.SESSION,
            operation_name="session",
            start_time=session.start_time,
            end_time=session.end_time,
            duration=session.duration,
            success=session.success,
            attributes=attributes,
        )

    def _task_spans(
        self,
        session: Session,
        session_span_id: str,
        task_index: int,
        start_time: datetime,
        avg_task_duration: float,
    ) -> list[Span]:
        """Build a task span followed by its LLM and tool children."""
        agent_type = self._rng.choice(AGENT_TYPES)
        low, high = TASK_DURATION_SPREAD
        task_duration = self._randint_scaled(avg_task_duration, low, high)
        task_success = self._failures.task_succeeds(
            session.success, task_index, session.num_tasks
        )
        task_span_id = self._hex_id(16)
        task_id = f"task-{task_index + 1}"
        agent_id = f"{agent_type.type}-{self._rng.randint(*AGENT_INSTANCE_RANGE)}"
        task_type = self._rng.choice(TASK_TYPES)

        attributes: dict[str, Any] = {
            Attr.AGENT_ID: agent_id,
            Attr.AGENT_TYPE: agent_type.type,
            Attr.SESSION_ID: session.session_id,
            Attr.TASK_ID: task_id,
            Attr.TASK_TYPE: task_type,
            Attr.TASK_DESCRIPTION: self._task_description(agent_type.type),
            Attr.AGENT_STATE: "completed" if task_success else "failed",
        }
        if not task_success:
            attributes.update(self._failures.error_attributes(OperationKind.AGENT_TASK))

        task_span = Span(
            trace_id=session.trace_id,
            span_id=task_span_id,
            parent_span_id=session_span_id,
            kind=OperationKind.AGENT_TASK,
            operation_name=f"agent-task:{agent_type.type}",
            start_time=start_time,
            end_time=start_time + timedelta(milliseconds=task_duration),
            duration=task_duration,
            success=task_success,
            attributes=attributes,
            agent_id=agent_id,
            agent_type=agent_type.type,
            task_type=task_type,
        )

        spans = [task_span]
        if self._failures.should_attach(OperationKind.LLM):
            spans.extend(self._llm_spans(session, task_span, task_id))
        if self._failures.should_attach(OperationKind.TOOL):
            spans.extend(self._tool_spans(session, task_span, task_id, agent_type))
        return spans

    def _llm_spans(self, session: Session, task: Span, task_id: str) -> list[Span]:
        spans: list[Span] = []
        low, high = LLM_START_OFFSET_FRACTION
        cursor = task.start_time + timedelta(
            milliseconds=self._offset_ms(task.duration, low, high)
        )

        for _ in range(self._rng.randint(*LLM_CALLS_PER_TASK)):
            model = self._rng.choice(LLM_MODELS)
            duration = self._rng.randint(*LLM_DURATION_MS)
            success = self._failures.child_succeeds(OperationKind.LLM, task.success)
            input_tokens = self._randint_scaled(
                model.avg_input_tokens, 1 - TOKEN_SPREAD, 1 + TOKEN_SPREAD
            )
            output_tokens = self._randint_scaled(
                model.avg_output_tokens, 1 - TOKEN_SPREAD, 1 + TOKEN_SPREAD
            )

            attributes: dict[str, Any] = {
                Attr.LLM_MODEL: model.name,
                Attr.TOKEN_COUNT_INPUT: input_tokens,
                Attr.TOKEN_COUNT_OUTPUT: output_tokens,
                Attr.SESSION_ID: session.session_id,
                Attr.TASK_ID: task_id,
                Attr.LLM_REQUEST_TYPE: self._rng.choice(LLM_REQUEST_TYPES),
                Attr.LLM_TEMPERATURE: round(
                    self._rng.uniform(*LLM_TEMPERATURE_RANGE), 2
                ),
            }
            if not success:
                attributes.update(self._failures.error_attributes(OperationKind.LLM))

            spans.append(
                Span(
                    trace_id=session.trace_id,
                    span_id=self._hex_id(16),
                    parent_span_id=task.span_id,
                    kind=OperationKind.LLM,
                    operation_name=f"llm:{model.name}",
                    start_time=cursor,
                    end_time=cursor + timedelta(milliseconds=duration),
                    duration=duration,
                    success=success,
                    attributes=attributes,
                    model=model.name,
                    input_tokens=input_tokens,
                    output_tokens=output_tokens,
                )
            )
            cursor = cursor + timedelta(
                milliseconds=duration + self._rng.randint(*LLM_GAP_MS)
            )

        return spans

    def _tool_spans(
        self, session: Session, task: Span, task_id: str, agent_type: AgentTypeDef
    ) -> list[Span]:
        spans: list[Span] = []
        low, high = TOOL_START_OFFSET_FRACTION
        cursor = task.start_time + timedelta(
            milliseconds=self._offset_ms(task.duration, low, high)
        )

        for _ in range(self._rng.randint(*TOOL_CALLS_PER_TASK)):
            tool_name = self._rng.choice(agent_type.tool_usage)
            duration = self._rng.randint(*TOOL_DURATION_MS)
            success = self._failures.child_succeeds(OperationKind.TOOL, task.success)

            attributes: dict[str, Any] = {
                Attr.TOOL_NAME: tool_name,
                Attr.TOOL_INPUT_SIZE: self._rng.randint(*TOOL_INPUT_SIZE),
                Attr.TOOL_OUTPUT_SIZE: (
                    self._rng.randint(*TOOL_OUTPUT_SIZE) if success else 0
                ),
                Attr.SESSION_ID: session.session_id,
                Attr.TASK_ID: task_id,
                Attr.TOOL_OPERATION: self._rng.choice(TOOL_OPERATIONS),
            }
            if not success:
                attributes.update(self._failures.error_attributes(OperationKind.TOOL))

            spans.append(
                Span(
                    trace_id=session.trace_id,
                    span_id=self._hex_id(16),
                    parent_span_id=task.span_id,
                    kind=OperationKind.TOOL,
                    operation_name=f"tool:{tool_name}",
                    start_time=cursor,
                    end_time=cursor + timedelta(milliseconds=duration),
                    duration=duration,
                    success=success,
                    attributes=attributes,
                    tool_name=tool_name,
                )
            )
            cursor = cursor + timedelta(
                milliseconds=duration + self._rng.randint(*TOOL_GAP_MS)
            )

        return spans

    # ------------------------------------------------------------------
    # Public: full population
    # ------------------------------------------------------------------

    def generate(self, num_sessions: int = DEFAULT_SESSION_COUNT) -> DashboardData:
        """Generate *num_sessions* sessions, their spans, and the summary.

        A zero or negative count yields an empty but valid result.
        """
        if num_sessions <= 0:
            logger.warning(
                f"Requested {num_sessions} sessions; returning empty trace data"
            )
            num_sessions = 0

        sessions: list[Session] = []
        spans: list[Span] = []

        for i in range(num_sessions):
            session = self.generate_session()
            sessions.append(session)
            spans.extend(self.generate_spans_for_session(session))

            if i % _PROGRESS_EVERY == 0:
                logger.debug(f"Generated {i + 1}/{num_sessions} sessions...")

        logger.info(
            f"Generated {len(sessions)} sessions with {len(spans)} total spans"
        )
        return DashboardData(
            sessions=sessions, spans=spans, summary=summarize(sessions, spans)
        )


def generate_sample_trace_data(
    target_session_count: int = DEFAULT_SESSION_COUNT,
    seed: int | None = None,
    now: datetime | None = None,
    policy: FailurePolicy | None = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> DashboardData:
    """Generate a complete synthetic dashboard population.

    Args:
        target_session_count: Number of sessions to synthesize.
        seed: RNG seed for reproducible output.
        now: Reference time for session start times.
        policy: Failure policy override.
        window_days: How many days back session start times may reach.

    Returns:
        ``DashboardData`` with sessions, the flat span list and its summary.
    """
    with tracer.start_as_current_span("generate_sample_trace_data") as span:
        span.set_attribute("agent_traces.target_session_count", target_session_count)
        generator = TraceDataGenerator(
            seed=seed,
            now=now,
            policy=policy or DEFAULT_FAILURE_POLICY,
            window_days=window_days,
        )
        data = generator.generate(target_session_count)
        span.set_attribute("agent_traces.total_spans", data.summary.total_spans)
        return data
