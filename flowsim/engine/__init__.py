"""Workflow Engine: graph traversal helpers and the simulated executor."""

from .executor import WorkflowExecutor
from .graph import build_adjacency, reachable_from, select_start_nodes
from .simulation import (
    DelayStrategy,
    OutcomeStrategy,
    always_succeed,
    fail_nodes,
    no_delay,
    uniform_delay,
    weighted_outcome,
)

__all__ = [
    "WorkflowExecutor",
    "build_adjacency",
    "reachable_from",
    "select_start_nodes",
    "DelayStrategy",
    "OutcomeStrategy",
    "always_succeed",
    "fail_nodes",
    "no_delay",
    "uniform_delay",
    "weighted_outcome",
]
