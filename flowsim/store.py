"""Workflow Store

Injectable state container for one workflow: the graph, the selected node,
the run flag and the execution log. Its methods are the only sanctioned
mutation points; the editor (API routes) and the executor both go through
them.

Every mutation publishes a StoreEvent to subscribed listeners, so any
consumer (SSE bridge, logger, test harness) can observe state changes
without the store knowing about it.
"""

from __future__ import annotations

import copy
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional
from uuid import uuid4

from .errors import (
    ConfigValidationError,
    EdgeNotFoundError,
    NodeNotFoundError,
    UnknownNodeTypeError,
)
from .models import (
    WORKFLOW_LOG_ID,
    Edge,
    LogEntry,
    LogSeverity,
    Node,
    NodeStatus,
    Position,
    WorkflowSnapshot,
)
from .nodes import default_config, is_node_type_registered, validate_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreEvent:
    """Notification published after a store mutation.

    Attributes:
        kind: Event type (e.g. "node_added", "node_status", "log_appended")
        payload: JSON-serializable event data
    """

    kind: str
    payload: Dict[str, Any] = field(default_factory=dict)


StoreListener = Callable[[StoreEvent], None]


class WorkflowStore:
    """Mutable workflow state with change notifications."""

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self.selected_node_id: Optional[str] = None
        self.is_running: bool = False
        self.execution_log: List[LogEntry] = []
        self._listeners: List[StoreListener] = []
        self._node_seq = itertools.count(1)

    # --- Observation ---

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: str, **payload: Any) -> None:
        event = StoreEvent(kind=kind, payload=payload)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # Log error but don't fail the mutation
                logger.exception(f"Store listener failed on '{kind}' event")

    # --- Queries ---

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def require_node(self, node_id: str) -> Node:
        node = self.get_node(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    @property
    def selected_node(self) -> Optional[Node]:
        if self.selected_node_id is None:
            return None
        return self.get_node(self.selected_node_id)

    def snapshot(self) -> WorkflowSnapshot:
        """Detached copy of the graph for an execution run."""
        return WorkflowSnapshot.of(self.nodes, self.edges)

    # --- Node mutations ---

    def _next_node_id(self) -> str:
        while True:
            candidate = f"node_{next(self._node_seq)}"
            if self.get_node(candidate) is None:
                return candidate

    def add_node(
        self,
        node_type: str,
        position: Optional[Position] = None,
        config: Optional[Dict[str, Any]] = None,
        node_id: Optional[str] = None,
    ) -> Node:
        """Create a node with the type's default config merged with `config`.

        Raises:
            UnknownNodeTypeError: If the type is not registered
            ConfigValidationError: If supplied config values don't match the schema
            ValueError: If `node_id` is already in use or reserved
        """
        if not is_node_type_registered(node_type):
            raise UnknownNodeTypeError(node_type)

        overrides = config or {}
        errors = validate_config(node_type, overrides, check_required=False)
        if errors:
            raise ConfigValidationError(node_type, errors)

        if node_id is None:
            node_id = self._next_node_id()
        elif node_id == WORKFLOW_LOG_ID:
            raise ValueError(f"node id '{node_id}' is reserved for run-level log entries")
        elif self.get_node(node_id) is not None:
            raise ValueError(f"duplicate node id: {node_id}")

        node = Node(
            id=node_id,
            type=node_type,
            position=position or Position(),
            config={**default_config(node_type), **copy.deepcopy(overrides)},
        )
        self.nodes.append(node)
        logger.info(f"Node added: {node.id} (type={node_type})")
        self._emit("node_added", node=node.to_dict())
        return node

    def update_node_config(self, node_id: str, values: Dict[str, Any]) -> Node:
        """Merge `values` into the node's config; other fields keep their values."""
        node = self.require_node(node_id)
        errors = validate_config(node.type, values, check_required=False)
        if errors:
            raise ConfigValidationError(node.type, errors)

        node.config = {**node.config, **copy.deepcopy(values)}
        self._emit("node_config_updated", node_id=node_id, config=node.config)
        return node

    def update_node_position(self, node_id: str, position: Position) -> Node:
        node = self.require_node(node_id)
        node.position = position
        self._emit("node_moved", node_id=node_id, position=position.to_dict())
        return node

    def remove_node(self, node_id: str) -> None:
        """Remove a node and every edge that references it."""
        node = self.require_node(node_id)
        self.nodes.remove(node)

        removed_edges = [e for e in self.edges if node_id in (e.source, e.target)]
        self.edges = [e for e in self.edges if node_id not in (e.source, e.target)]

        logger.info(f"Node removed: {node_id} ({len(removed_edges)} edges dropped)")
        self._emit(
            "node_removed",
            node_id=node_id,
            edge_ids=[e.id for e in removed_edges],
        )

        if self.selected_node_id == node_id:
            self.set_selected_node(None)

    def update_node_status(
        self,
        node_id: str,
        status: NodeStatus,
        output: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Set status and output together. Written by the executor only.

        Unknown ids are ignored: the graph may change under a stale snapshot.
        """
        node = self.get_node(node_id)
        if node is None:
            logger.warning(f"Status update for missing node '{node_id}' ignored")
            return
        node.status = status
        node.output = output
        self._emit("node_status", node_id=node_id, status=status.value, output=output)

    def reset_node_statuses(self) -> None:
        """Every node back to idle with no output."""
        for node in self.nodes:
            node.status = NodeStatus.IDLE
            node.output = None
        self._emit("statuses_reset", node_ids=[n.id for n in self.nodes])

    # --- Edge mutations ---

    def add_edge(self, source: str, target: str, edge_id: Optional[str] = None) -> Edge:
        """Connect two existing nodes.

        Raises:
            NodeNotFoundError: If either endpoint does not exist
        """
        self.require_node(source)
        self.require_node(target)

        edge = Edge(id=edge_id or f"edge_{uuid4().hex[:8]}", source=source, target=target)
        self.edges.append(edge)
        self._emit("edge_added", edge=edge.to_dict())
        return edge

    def remove_edge(self, edge_id: str) -> None:
        for edge in self.edges:
            if edge.id == edge_id:
                self.edges.remove(edge)
                self._emit("edge_removed", edge_id=edge_id)
                return
        raise EdgeNotFoundError(edge_id)

    def replace_graph(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Swap in a whole graph (workflow import).

        Raises:
            UnknownNodeTypeError: If a node type is not registered
            NodeNotFoundError: If an edge references a node not in `nodes`
            ValueError: If node ids are duplicated or reserved
        """
        new_nodes = list(nodes)
        new_edges = list(edges)

        ids = [n.id for n in new_nodes]
        if len(ids) != len(set(ids)):
            duplicates = {nid for nid in ids if ids.count(nid) > 1}
            raise ValueError(f"duplicate node IDs found: {duplicates}")
        if WORKFLOW_LOG_ID in ids:
            raise ValueError(f"node id '{WORKFLOW_LOG_ID}' is reserved for run-level log entries")
        for node in new_nodes:
            if not is_node_type_registered(node.type):
                raise UnknownNodeTypeError(node.type)
        known = set(ids)
        for edge in new_edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in known:
                    raise NodeNotFoundError(endpoint)

        self.nodes = new_nodes
        self.edges = new_edges
        self.selected_node_id = None
        logger.info(f"Graph replaced: {len(new_nodes)} nodes, {len(new_edges)} edges")
        self._emit(
            "graph_replaced",
            nodes=[n.to_dict() for n in new_nodes],
            edges=[e.to_dict() for e in new_edges],
        )

    # --- Selection / run state / log ---

    def set_selected_node(self, node_id: Optional[str]) -> None:
        if node_id is not None:
            self.require_node(node_id)
        self.selected_node_id = node_id
        self._emit("selection_changed", node_id=node_id)

    def set_running(self, running: bool) -> None:
        self.is_running = running
        self._emit("run_started" if running else "run_finished", is_running=running)

    def append_log(self, node_id: str, message: str, severity: LogSeverity) -> LogEntry:
        entry = LogEntry(node_id=node_id, message=message, severity=severity)
        self.execution_log.append(entry)
        self._emit("log_appended", **entry.to_dict())
        return entry

    def clear_log(self) -> None:
        self.execution_log = []
        self._emit("log_cleared")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "selected_node_id": self.selected_node_id,
            "is_running": self.is_running,
        }
