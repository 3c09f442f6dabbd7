"""Workflow Data Model

Plain dataclasses for the graph the user edits and the engine executes.

Key Components:
- Node: A configured unit of work placed on the canvas
- Edge: Directed connection between two nodes
- LogEntry: Immutable execution log record
- WorkflowSnapshot: Read-only copy of the graph handed to the executor
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# Node id used for run-level log entries (summary, stop notice); reserved,
# the store and importer reject nodes that claim it
WORKFLOW_LOG_ID = "workflow"


class NodeStatus(str, Enum):
    """Lifecycle status of a node within the current run."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


class LogSeverity(str, Enum):
    """Severity of an execution log entry."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Position:
    """Canvas coordinate. Owned by the editor, opaque to the engine."""

    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class Node:
    """A vertex in the workflow graph.

    Attributes:
        id: Unique node identifier, stable for the node's lifetime
        type: Node type key (must be registered in the node registry)
        position: Canvas position
        config: Field name → value, validated against the type schema
        status: Current lifecycle status (written by the executor only)
        output: Mock result of the most recent successful execution
    """

    id: str
    type: str
    position: Position = field(default_factory=Position)
    config: Dict[str, Any] = field(default_factory=dict)
    status: NodeStatus = NodeStatus.IDLE
    output: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("node id cannot be empty")
        if not self.type:
            raise ValueError("node type cannot be empty")

    def copy(self) -> "Node":
        """Return a detached copy (config and output are deep-copied)."""
        return Node(
            id=self.id,
            type=self.type,
            position=Position(self.position.x, self.position.y),
            config=copy.deepcopy(self.config),
            status=self.status,
            output=copy.deepcopy(self.output),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "position": self.position.to_dict(),
            "config": self.config,
            "status": self.status.value,
            "output": self.output,
        }


@dataclass
class Edge:
    """Directed connection source → target.

    Self-loops and duplicate edges are allowed; the executor's
    executed-set makes them harmless.
    """

    id: str
    source: str
    target: str

    def __post_init__(self):
        if not self.id:
            raise ValueError("edge id cannot be empty")
        if not self.source:
            raise ValueError("source node cannot be empty")
        if not self.target:
            raise ValueError("target node cannot be empty")

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "source": self.source, "target": self.target}


@dataclass(frozen=True)
class LogEntry:
    """One execution log record."""

    node_id: str
    message: str
    severity: LogSeverity
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node_id": self.node_id,
            "message": self.message,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class WorkflowSnapshot:
    """Read-only view of the graph taken at run start."""

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]

    @classmethod
    def of(cls, nodes: List[Node], edges: List[Edge]) -> "WorkflowSnapshot":
        return cls(
            nodes=tuple(node.copy() for node in nodes),
            edges=tuple(Edge(id=e.id, source=e.source, target=e.target) for e in edges),
        )

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]
