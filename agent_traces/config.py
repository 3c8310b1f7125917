"""Configuration for the synthetic trace generator.

Holds the tunable generation policy (complexity tiers, failure and attach
probabilities, timing ranges) as named constants, and the run settings that
can be overridden through environment variables:

- ``AGENT_TRACES_SESSION_COUNT``: sessions generated per run (default 150).
- ``AGENT_TRACES_SEED``: RNG seed; unset means a fresh random population.
- ``AGENT_TRACES_WINDOW_DAYS``: how far back session start times reach.
"""

import logging
import os
from dataclasses import dataclass, fields
from enum import Enum

from agent_traces.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SESSION_COUNT_ENV_VAR = "AGENT_TRACES_SESSION_COUNT"
SEED_ENV_VAR = "AGENT_TRACES_SEED"
WINDOW_DAYS_ENV_VAR = "AGENT_TRACES_WINDOW_DAYS"

DEFAULT_SESSION_COUNT = 150
DEFAULT_WINDOW_DAYS = 7


class Complexity(str, Enum):
    """Complexity tier of a simulated session."""

    COMPLEX = "complex"
    MEDIUM = "medium"
    SIMPLE = "simple"


@dataclass(frozen=True)
class ComplexityTier:
    """Duration/task-count envelope of one complexity tier.

    A session falls in this tier when its complexity score is strictly
    above ``min_score``.  Tiers are checked in descending ``min_score`` order.
    """

    complexity: Complexity
    min_score: float
    duration_range: tuple[int, int]  # ms, inclusive
    num_tasks_range: tuple[int, int]
    success_rate: float


COMPLEXITY_TIERS: tuple[ComplexityTier, ...] = (
    ComplexityTier(
        complexity=Complexity.COMPLEX,
        min_score=0.7,
        duration_range=(600_000, 1_800_000),  # 10-30 minutes
        num_tasks_range=(15, 40),
        success_rate=0.75,
    ),
    ComplexityTier(
        complexity=Complexity.MEDIUM,
        min_score=0.3,
        duration_range=(120_000, 600_000),  # 2-10 minutes
        num_tasks_range=(8, 20),
        success_rate=0.85,
    ),
    ComplexityTier(
        complexity=Complexity.SIMPLE,
        min_score=float("-inf"),
        duration_range=(30_000, 120_000),  # 30s-2 minutes
        num_tasks_range=(2, 8),
        success_rate=0.95,
    ),
)


def tier_for_score(score: float) -> ComplexityTier:
    """Map a complexity score in [0, 1) to its tier."""
    for tier in COMPLEXITY_TIERS:
        if score > tier.min_score:
            return tier
    return COMPLEXITY_TIERS[-1]


@dataclass(frozen=True)
class FailurePolicy:
    """Probabilities driving success, cascading failure and child attachment."""

    task_success_probability: float = 0.9
    # Tasks with index > num_tasks * cascade_start_fraction are exposed to
    # the cascade trigger.
    cascade_start_fraction: float = 0.6
    cascade_trigger_probability: float = 0.3
    llm_success_probability: float = 0.95
    tool_success_probability: float = 0.92
    llm_attach_probability: float = 0.7
    tool_attach_probability: float = 0.6

    def __post_init__(self) -> None:
        """Reject probabilities outside [0, 1]."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(
                    f"FailurePolicy.{f.name} must be within [0, 1], got {value}"
                )


DEFAULT_FAILURE_POLICY = FailurePolicy()

# ---------------------------------------------------------------------------
# Timing ranges (ms, inclusive)
# ---------------------------------------------------------------------------
TASK_DURATION_SPREAD = (0.5, 1.5)  # multiples of the average task duration
TASK_GAP_MS = (100, 1000)
LLM_CALLS_PER_TASK = (1, 3)
LLM_DURATION_MS = (800, 3000)
LLM_GAP_MS = (100, 500)
LLM_START_OFFSET_FRACTION = (0.0, 0.2)
TOOL_CALLS_PER_TASK = (1, 3)
TOOL_DURATION_MS = (200, 2000)
TOOL_GAP_MS = (50, 200)
TOOL_START_OFFSET_FRACTION = (0.1, 0.8)

# Token counts are perturbed by +/- this fraction of the model average.
TOKEN_SPREAD = 0.5
LLM_TEMPERATURE_RANGE = (0.1, 0.9)
TOOL_INPUT_SIZE = (100, 5000)
TOOL_OUTPUT_SIZE = (50, 3000)

# ---------------------------------------------------------------------------
# Session-level ranges
# ---------------------------------------------------------------------------
USER_ID_RANGE = (1, 50)
NUM_AGENTS_RANGE = (2, 6)
TOTAL_TOKENS_RANGE = (5000, 50000)
AGENT_INSTANCE_RANGE = (1, 5)


@dataclass(frozen=True)
class GeneratorSettings:
    """Run settings for a generation request."""

    session_count: int = DEFAULT_SESSION_COUNT
    seed: int | None = None
    window_days: int = DEFAULT_WINDOW_DAYS


def _int_from_env(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def load_settings() -> GeneratorSettings:
    """Build ``GeneratorSettings`` from the environment.

    Returns:
        Settings with environment overrides applied on top of the defaults.

    Raises:
        ConfigurationError: If a variable is set but not a valid integer, or
            the window is not positive.
    """
    session_count = _int_from_env(SESSION_COUNT_ENV_VAR)
    seed = _int_from_env(SEED_ENV_VAR)
    window_days = _int_from_env(WINDOW_DAYS_ENV_VAR)

    if window_days is not None and window_days <= 0:
        raise ConfigurationError(
            f"{WINDOW_DAYS_ENV_VAR} must be positive, got {window_days}"
        )

    settings = GeneratorSettings(
        session_count=DEFAULT_SESSION_COUNT if session_count is None else session_count,
        seed=seed,
        window_days=DEFAULT_WINDOW_DAYS if window_days is None else window_days,
    )
    logger.debug(f"Loaded generator settings: {settings}")
    return settings
