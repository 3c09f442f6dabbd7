"""Workflow graph simulator package.

Subpackages:
- nodes: Node type registry and the built-in node catalog (with mock outputs)
- engine: Graph traversal helpers and the simulated workflow executor

Modules:
- models: Node / edge / log entry data model
- store: Injectable workflow state container with change notifications
- export: JSON workflow export / import
"""
