"""Exceptions raised by graph editing operations.

The execution engine never raises these to its caller; they surface from
store mutations and workflow import, and the API maps them to HTTP errors.
"""

from __future__ import annotations

from typing import Dict, List


class WorkflowError(Exception):
    """Base class for workflow editing errors."""


class UnknownNodeTypeError(WorkflowError):
    """Raised when a node type key is not in the registry."""

    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f"Unknown node type: {node_type}")


class NodeNotFoundError(WorkflowError):
    """Raised when a node id does not exist in the store."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' not found")


class EdgeNotFoundError(WorkflowError):
    """Raised when an edge id does not exist in the store."""

    def __init__(self, edge_id: str):
        self.edge_id = edge_id
        super().__init__(f"Edge '{edge_id}' not found")


class ConfigValidationError(WorkflowError):
    """Raised when config values do not match the node type schema."""

    def __init__(self, node_type: str, errors: List[Dict[str, str]]):
        self.node_type = node_type
        self.errors = errors
        details = "; ".join(f"{e['field']}: {e['error']}" for e in errors)
        super().__init__(f"Invalid config for '{node_type}': {details}")


class WorkflowImportError(WorkflowError):
    """Raised when an exported workflow document cannot be loaded."""
