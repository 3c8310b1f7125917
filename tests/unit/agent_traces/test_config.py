"""Tests for generator configuration."""

import os
from unittest import mock

import pytest

from agent_traces.config import (
    COMPLEXITY_TIERS,
    DEFAULT_SESSION_COUNT,
    DEFAULT_WINDOW_DAYS,
    Complexity,
    FailurePolicy,
    GeneratorSettings,
    load_settings,
    tier_for_score,
)
from agent_traces.exceptions import ConfigurationError


class TestComplexityTiers:
    @pytest.mark.parametrize(
        "score,expected",
        [
            (0.0, Complexity.SIMPLE),
            (0.3, Complexity.SIMPLE),
            (0.3001, Complexity.MEDIUM),
            (0.7, Complexity.MEDIUM),
            (0.7001, Complexity.COMPLEX),
            (0.9999, Complexity.COMPLEX),
        ],
    )
    def test_thresholds(self, score: float, expected: Complexity) -> None:
        assert tier_for_score(score).complexity == expected

    def test_success_rates(self) -> None:
        rates = {t.complexity: t.success_rate for t in COMPLEXITY_TIERS}
        assert rates == {
            Complexity.COMPLEX: 0.75,
            Complexity.MEDIUM: 0.85,
            Complexity.SIMPLE: 0.95,
        }


class TestFailurePolicy:
    def test_defaults(self) -> None:
        policy = FailurePolicy()
        assert policy.task_success_probability == 0.9
        assert policy.cascade_start_fraction == 0.6
        assert policy.cascade_trigger_probability == 0.3
        assert policy.llm_success_probability == 0.95
        assert policy.tool_success_probability == 0.92
        assert policy.llm_attach_probability == 0.7
        assert policy.tool_attach_probability == 0.6

    @pytest.mark.parametrize("value", [-0.1, 1.5])
    def test_out_of_range_probability_rejected(self, value: float) -> None:
        with pytest.raises(ConfigurationError, match="llm_success_probability"):
            FailurePolicy(llm_success_probability=value)


class TestLoadSettings:
    def test_defaults_without_environment(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = load_settings()
        assert settings == GeneratorSettings(
            session_count=DEFAULT_SESSION_COUNT,
            seed=None,
            window_days=DEFAULT_WINDOW_DAYS,
        )

    def test_environment_overrides(self) -> None:
        env = {
            "AGENT_TRACES_SESSION_COUNT": "25",
            "AGENT_TRACES_SEED": "7",
            "AGENT_TRACES_WINDOW_DAYS": "2",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_settings()
        assert settings == GeneratorSettings(session_count=25, seed=7, window_days=2)

    def test_non_integer_rejected(self) -> None:
        with mock.patch.dict(os.environ, {"AGENT_TRACES_SEED": "abc"}, clear=True):
            with pytest.raises(ConfigurationError, match="AGENT_TRACES_SEED"):
                load_settings()

    def test_non_positive_window_rejected(self) -> None:
        with mock.patch.dict(os.environ, {"AGENT_TRACES_WINDOW_DAYS": "0"}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                load_settings()
        assert exc_info.value.user_facing
