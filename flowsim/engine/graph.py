"""Graph helpers used by the executor: seed selection and adjacency."""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Sequence

from ..models import Edge, Node
from ..nodes import is_trigger


def select_start_nodes(nodes: Sequence[Node]) -> List[Node]:
    """Trigger nodes in node-list order.

    A graph with no triggers falls back to its first node so it can
    still be run for testing.
    """
    triggers = [node for node in nodes if is_trigger(node.type)]
    if triggers:
        return triggers
    return list(nodes[:1])


def build_adjacency(edges: Iterable[Edge]) -> Dict[str, List[str]]:
    """Forward adjacency source → targets, preserving edge-list order."""
    adjacency: Dict[str, List[str]] = {}
    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)
    return adjacency


def reachable_from(start_ids: Iterable[str], adjacency: Dict[str, List[str]]) -> List[str]:
    """Node ids reachable from `start_ids` in BFS order (start ids included)."""
    order: List[str] = []
    seen = set()
    frontier = deque(start_ids)
    while frontier:
        current = frontier.popleft()
        if current in seen:
            continue
        seen.add(current)
        order.append(current)
        frontier.extend(adjacency.get(current, []))
    return order
