"""Workflow export / import.

Document format:
    {
      "name": "<workflow name>",
      "nodes": [{"id", "type", "position": {"x", "y"}, "config"}],
      "edges": [{"source", "target"}],
      "exportedAt": "<ISO 8601>"
    }

Statuses, outputs and the log are runtime state and are not exported.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .config import DEFAULT_WORKFLOW_NAME
from .errors import WorkflowImportError
from .models import WORKFLOW_LOG_ID, Edge, Node, Position
from .nodes import is_node_type_registered
from .store import WorkflowStore


def export_workflow(store: WorkflowStore, name: Optional[str] = None) -> Dict[str, Any]:
    """Build the export document for the store's current graph."""
    return {
        "name": name or DEFAULT_WORKFLOW_NAME,
        "nodes": [
            {
                "id": node.id,
                "type": node.type,
                "position": node.position.to_dict(),
                "config": node.config,
            }
            for node in store.nodes
        ],
        "edges": [{"source": e.source, "target": e.target} for e in store.edges],
        "exportedAt": datetime.now(timezone.utc).isoformat(),
    }


def export_filename(name: str) -> str:
    """Suggested download filename: 'My Flow' → 'my-flow.json'."""
    slug = re.sub(r"\s+", "-", name.lower())
    return f"{slug}.json"


def dumps(document: Dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def import_workflow(document: Any) -> Tuple[str, List[Node], List[Edge]]:
    """Parse an export document into nodes and edges.

    Edges get fresh sequential ids since the format does not carry them.

    Raises:
        WorkflowImportError: If the document shape is wrong, a node type is
            unknown, or an edge references a node not in the document
    """
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            raise WorkflowImportError(f"invalid JSON: {e.msg}") from e

    if not isinstance(document, dict):
        raise WorkflowImportError("workflow document must be an object")

    raw_nodes = document.get("nodes")
    raw_edges = document.get("edges", [])
    if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
        raise WorkflowImportError("'nodes' and 'edges' must be lists")

    nodes: List[Node] = []
    seen_ids = set()
    for index, raw in enumerate(raw_nodes):
        if not isinstance(raw, dict):
            raise WorkflowImportError(f"nodes[{index}] must be an object")
        node_id = raw.get("id")
        node_type = raw.get("type")
        if not node_id or not node_type:
            raise WorkflowImportError(f"nodes[{index}] needs 'id' and 'type'")
        if node_id in seen_ids:
            raise WorkflowImportError(f"duplicate node id '{node_id}'")
        if node_id == WORKFLOW_LOG_ID:
            raise WorkflowImportError(f"node id '{node_id}' is reserved")
        if not is_node_type_registered(node_type):
            raise WorkflowImportError(f"node '{node_id}': unknown type '{node_type}'")

        position = raw.get("position") or {}
        config = raw.get("config") or {}
        if not isinstance(config, dict):
            raise WorkflowImportError(f"node '{node_id}': config must be an object")
        try:
            pos = Position(x=float(position.get("x", 0)), y=float(position.get("y", 0)))
        except (TypeError, ValueError, AttributeError) as e:
            raise WorkflowImportError(f"node '{node_id}': invalid position") from e

        seen_ids.add(node_id)
        nodes.append(Node(id=node_id, type=node_type, position=pos, config=dict(config)))

    edges: List[Edge] = []
    for index, raw in enumerate(raw_edges):
        if not isinstance(raw, dict):
            raise WorkflowImportError(f"edges[{index}] must be an object")
        source, target = raw.get("source"), raw.get("target")
        if source not in seen_ids or target not in seen_ids:
            raise WorkflowImportError(
                f"edges[{index}]: {source} -> {target} references a missing node"
            )
        edges.append(Edge(id=raw.get("id") or f"edge_{index + 1}", source=source, target=target))

    name = document.get("name") or DEFAULT_WORKFLOW_NAME
    return name, nodes, edges


def load_workflow(store: WorkflowStore, document: Any) -> str:
    """Replace the store's graph with an imported document; returns its name."""
    name, nodes, edges = import_workflow(document)
    store.replace_graph(nodes, edges)
    return name
