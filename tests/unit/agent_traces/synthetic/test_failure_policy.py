"""Tests for cascading failure decisions."""

from __future__ import annotations

import random

import pytest

from agent_traces.config import FailurePolicy
from agent_traces.schema import OperationKind
from agent_traces.synthetic.catalog import ERROR_MESSAGES, ERROR_TYPES
from agent_traces.synthetic.failure_policy import FailurePropagator

TRIALS = 5000


@pytest.fixture()
def propagator() -> FailurePropagator:
    return FailurePropagator(random.Random(2024))


def _failure_rate(propagator: FailurePropagator, task_index: int, num_tasks: int) -> float:
    failures = sum(
        not propagator.task_succeeds(True, task_index, num_tasks) for _ in range(TRIALS)
    )
    return failures / TRIALS


class TestTaskSuccess:
    def test_failed_session_never_has_successful_tasks(
        self, propagator: FailurePropagator
    ) -> None:
        assert not any(propagator.task_succeeds(False, i, 10) for i in range(10))

    def test_first_task_fails_at_base_rate(self, propagator: FailurePropagator) -> None:
        assert _failure_rate(propagator, 0, 10) == pytest.approx(0.1, abs=0.02)

    def test_last_task_fails_more_often_than_first(
        self, propagator: FailurePropagator
    ) -> None:
        first = _failure_rate(propagator, 0, 10)
        last = _failure_rate(propagator, 9, 10)
        # 1 - 0.9 * 0.7 = 0.37 for tasks exposed to the cascade
        assert last == pytest.approx(0.37, abs=0.03)
        assert last > first + 0.15

    def test_cascade_only_exposes_last_forty_percent(
        self, propagator: FailurePropagator
    ) -> None:
        # index 6 of 10 is not > 6.0, index 7 is
        assert not any(propagator.cascade_fires(6, 10) for _ in range(200))
        assert any(propagator.cascade_fires(7, 10) for _ in range(200))

    def test_session_success_follows_rate(self, propagator: FailurePropagator) -> None:
        wins = sum(propagator.session_succeeds(0.75) for _ in range(TRIALS))
        assert wins / TRIALS == pytest.approx(0.75, abs=0.03)


class TestChildSuccess:
    @pytest.mark.parametrize("kind", [OperationKind.LLM, OperationKind.TOOL])
    def test_failed_task_never_has_successful_child(
        self, propagator: FailurePropagator, kind: OperationKind
    ) -> None:
        assert not any(propagator.child_succeeds(kind, False) for _ in range(100))

    @pytest.mark.parametrize(
        "kind,expected", [(OperationKind.LLM, 0.95), (OperationKind.TOOL, 0.92)]
    )
    def test_child_success_rate(
        self, propagator: FailurePropagator, kind: OperationKind, expected: float
    ) -> None:
        wins = sum(propagator.child_succeeds(kind, True) for _ in range(TRIALS))
        assert wins / TRIALS == pytest.approx(expected, abs=0.02)

    def test_rejects_non_child_kinds(self, propagator: FailurePropagator) -> None:
        with pytest.raises(ValueError):
            propagator.child_succeeds(OperationKind.AGENT_TASK, True)
        with pytest.raises(ValueError):
            propagator.should_attach(OperationKind.SESSION)

    def test_attach_probabilities(self, propagator: FailurePropagator) -> None:
        llm = sum(propagator.should_attach(OperationKind.LLM) for _ in range(TRIALS))
        tool = sum(propagator.should_attach(OperationKind.TOOL) for _ in range(TRIALS))
        assert llm / TRIALS == pytest.approx(0.7, abs=0.03)
        assert tool / TRIALS == pytest.approx(0.6, abs=0.03)


class TestErrorAttributes:
    @pytest.mark.parametrize(
        "kind,vocab",
        [
            (OperationKind.SESSION, "workflow"),
            (OperationKind.AGENT_TASK, "task"),
            (OperationKind.LLM, "llm"),
            (OperationKind.TOOL, "tool"),
        ],
    )
    def test_error_drawn_from_kind_vocabulary(
        self, propagator: FailurePropagator, kind: OperationKind, vocab: str
    ) -> None:
        for _ in range(50):
            attrs = propagator.error_attributes(kind)
            assert attrs["error.type"] in ERROR_TYPES[vocab]
            assert attrs["error.message"] == ERROR_MESSAGES[attrs["error.type"]]

    def test_custom_policy_is_used(self) -> None:
        policy = FailurePolicy(task_success_probability=0.0)
        propagator = FailurePropagator(random.Random(1), policy)
        assert not any(propagator.task_succeeds(True, 0, 10) for _ in range(100))
