"""Pydantic request/response models for the workflow simulator API."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class PositionModel(BaseModel):
    """Canvas coordinate."""
    x: float = 0.0
    y: float = 0.0


# --- Node types ---


class FieldOptionResponse(BaseModel):
    value: str
    label: str


class ConfigFieldResponse(BaseModel):
    """One config field schema for the property panel."""
    name: str
    label: str
    kind: str
    required: bool = False
    options: List[FieldOptionResponse] = Field(default_factory=list)
    placeholder: Optional[str] = None


class NodeTypeResponse(BaseModel):
    """Node type definition for the editor palette."""
    node_type: str
    display_name: str
    description: str
    category: str
    trigger: bool
    icon: Optional[str] = None
    color: Optional[str] = None
    config_fields: List[ConfigFieldResponse]
    default_config: dict


class NodeCategoryResponse(BaseModel):
    """Palette section: one category and its node types in display order."""
    category: str
    node_types: List[NodeTypeResponse]


# --- Graph editing ---


class CreateNodeRequest(BaseModel):
    """Request to add a node; config values override the type defaults."""
    type: str
    position: Optional[PositionModel] = None
    config: dict = Field(default_factory=dict)


class UpdateNodeConfigRequest(BaseModel):
    """Field-level config update; omitted fields keep their values."""
    config: dict


class NodeResponse(BaseModel):
    id: str
    type: str
    position: PositionModel
    config: dict
    status: str
    output: Optional[Any] = None


class CreateEdgeRequest(BaseModel):
    source: str
    target: str


class EdgeResponse(BaseModel):
    id: str
    source: str
    target: str


class SelectionRequest(BaseModel):
    """Select a node, or clear the selection with null."""
    node_id: Optional[str] = None


class WorkflowStateResponse(BaseModel):
    """Current graph, selection and run flag."""
    nodes: List[NodeResponse]
    edges: List[EdgeResponse]
    selected_node_id: Optional[str] = None
    is_running: bool


class FieldErrorResponse(BaseModel):
    field: str
    error: str


class ValidationResponse(BaseModel):
    """Config validation result for one node."""
    node_id: str
    valid: bool
    errors: List[FieldErrorResponse]


# --- Export / import ---


class ExportedNode(BaseModel):
    id: str
    type: str
    position: PositionModel = Field(default_factory=PositionModel)
    config: dict = Field(default_factory=dict)


class ExportedEdge(BaseModel):
    source: str
    target: str


class WorkflowDocument(BaseModel):
    """Workflow export format (field names match the exported JSON)."""
    name: str
    nodes: List[ExportedNode]
    edges: List[ExportedEdge] = Field(default_factory=list)
    exportedAt: Optional[str] = None


# --- Execution ---


class LogEntryResponse(BaseModel):
    node_id: str
    message: str
    severity: str
    timestamp: str


class RunStatusResponse(BaseModel):
    """Response after a start/stop command."""
    is_running: bool
    message: str


class ExecutionPlanResponse(BaseModel):
    """Nodes a run would start from and could reach if every step succeeds."""
    start_node_ids: List[str]
    reachable_node_ids: List[str]
    unreachable_node_ids: List[str]
