"""Simulated work: latency and outcome strategies.

The executor takes these as injectable callables so tests can replace
real randomness with deterministic stand-ins.
"""

from __future__ import annotations

import random
from typing import Callable, Collection, Optional

from ..models import Node
from ..settings import SIM_MAX_DELAY_SECS, SIM_MIN_DELAY_SECS, SIM_SUCCESS_RATE

# Returns the simulated work duration in seconds
DelayStrategy = Callable[[], float]

# Returns True if the node's simulated step succeeds
OutcomeStrategy = Callable[[Node], bool]


def uniform_delay(
    min_secs: float = SIM_MIN_DELAY_SECS,
    max_secs: float = SIM_MAX_DELAY_SECS,
    rng: Optional[random.Random] = None,
) -> DelayStrategy:
    """Delay drawn uniformly from [min_secs, max_secs]."""
    if min_secs < 0 or max_secs < min_secs:
        raise ValueError(f"invalid delay bounds: {min_secs}..{max_secs}")
    source = rng or random.Random()

    def delay() -> float:
        return source.uniform(min_secs, max_secs)

    return delay


def no_delay() -> float:
    return 0.0


def weighted_outcome(
    success_rate: float = SIM_SUCCESS_RATE,
    rng: Optional[random.Random] = None,
) -> OutcomeStrategy:
    """Each step succeeds with probability `success_rate`."""
    if not 0.0 <= success_rate <= 1.0:
        raise ValueError(f"success_rate must be within [0, 1], got {success_rate}")
    source = rng or random.Random()

    def outcome(node: Node) -> bool:
        return source.random() < success_rate

    return outcome


def always_succeed(node: Node) -> bool:
    return True


def fail_nodes(node_ids: Collection[str]) -> OutcomeStrategy:
    """Deterministic outcome: the listed nodes fail, every other node succeeds."""
    failing = frozenset(node_ids)

    def outcome(node: Node) -> bool:
        return node.id not in failing

    return outcome
