"""Graph editing endpoints: nodes, edges, selection, export/import."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from flowsim.errors import (
    ConfigValidationError,
    EdgeNotFoundError,
    NodeNotFoundError,
    UnknownNodeTypeError,
    WorkflowImportError,
)
from flowsim.export import export_filename, export_workflow, load_workflow
from flowsim.logging_config import get_api_logger
from flowsim.models import Edge, Node, Position
from flowsim.nodes import validate_config
from flowsim.store import WorkflowStore

from ..dependencies import ensure_editable, get_store
from ..schemas import (
    CreateEdgeRequest,
    CreateNodeRequest,
    EdgeResponse,
    NodeResponse,
    PositionModel,
    SelectionRequest,
    UpdateNodeConfigRequest,
    ValidationResponse,
    WorkflowDocument,
    WorkflowStateResponse,
)

logger = get_api_logger()

router = APIRouter(prefix="/api/workflow", tags=["workflow"])


# --- Helper functions ---


def _node_to_response(node: Node) -> NodeResponse:
    return NodeResponse(**node.to_dict())


def _edge_to_response(edge: Edge) -> EdgeResponse:
    return EdgeResponse(**edge.to_dict())


def _state_to_response(store: WorkflowStore) -> WorkflowStateResponse:
    return WorkflowStateResponse(**store.to_dict())


def _require_node(store: WorkflowStore, node_id: str) -> Node:
    try:
        return store.require_node(node_id)
    except NodeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# --- Graph ---


@router.get("", response_model=WorkflowStateResponse)
async def get_workflow(store: WorkflowStore = Depends(get_store)):
    """Current graph with node statuses, selection and run flag."""
    return _state_to_response(store)


@router.post(
    "/nodes",
    response_model=NodeResponse,
    status_code=201,
    dependencies=[Depends(ensure_editable)],
)
async def create_node(payload: CreateNodeRequest, store: WorkflowStore = Depends(get_store)):
    position = Position(**payload.position.model_dump()) if payload.position else None
    try:
        node = store.add_node(payload.type, position=position, config=payload.config)
    except UnknownNodeTypeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConfigValidationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "errors": e.errors})
    return _node_to_response(node)


@router.patch(
    "/nodes/{node_id}/config",
    response_model=NodeResponse,
    dependencies=[Depends(ensure_editable)],
)
async def update_node_config(
    node_id: str,
    payload: UpdateNodeConfigRequest,
    store: WorkflowStore = Depends(get_store),
):
    """Merge config fields into a node; unspecified fields are kept."""
    _require_node(store, node_id)
    try:
        node = store.update_node_config(node_id, payload.config)
    except ConfigValidationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "errors": e.errors})
    return _node_to_response(node)


@router.patch(
    "/nodes/{node_id}/position",
    response_model=NodeResponse,
    dependencies=[Depends(ensure_editable)],
)
async def move_node(
    node_id: str,
    payload: PositionModel,
    store: WorkflowStore = Depends(get_store),
):
    _require_node(store, node_id)
    return _node_to_response(store.update_node_position(node_id, Position(x=payload.x, y=payload.y)))


@router.delete(
    "/nodes/{node_id}",
    status_code=204,
    dependencies=[Depends(ensure_editable)],
)
async def delete_node(node_id: str, store: WorkflowStore = Depends(get_store)):
    """Delete a node and every edge connected to it."""
    _require_node(store, node_id)
    store.remove_node(node_id)
    return Response(status_code=204)


@router.get("/nodes/{node_id}/validation", response_model=ValidationResponse)
async def validate_node(node_id: str, store: WorkflowStore = Depends(get_store)):
    """Report config problems, including empty required fields."""
    node = _require_node(store, node_id)
    errors = validate_config(node.type, node.config)
    return ValidationResponse(node_id=node_id, valid=not errors, errors=errors)


@router.post(
    "/edges",
    response_model=EdgeResponse,
    status_code=201,
    dependencies=[Depends(ensure_editable)],
)
async def create_edge(payload: CreateEdgeRequest, store: WorkflowStore = Depends(get_store)):
    try:
        edge = store.add_edge(payload.source, payload.target)
    except NodeNotFoundError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _edge_to_response(edge)


@router.delete(
    "/edges/{edge_id}",
    status_code=204,
    dependencies=[Depends(ensure_editable)],
)
async def delete_edge(edge_id: str, store: WorkflowStore = Depends(get_store)):
    try:
        store.remove_edge(edge_id)
    except EdgeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.put("/selection", response_model=WorkflowStateResponse)
async def set_selection(payload: SelectionRequest, store: WorkflowStore = Depends(get_store)):
    if payload.node_id is not None:
        _require_node(store, payload.node_id)
    store.set_selected_node(payload.node_id)
    return _state_to_response(store)


# --- Export / import ---


@router.get("/export", response_model=WorkflowDocument)
async def export_current_workflow(
    name: Optional[str] = Query(None, description="Workflow name"),
    store: WorkflowStore = Depends(get_store),
):
    """Download the graph as a workflow document."""
    document = export_workflow(store, name)
    filename = export_filename(document["name"])
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/import",
    response_model=WorkflowStateResponse,
    dependencies=[Depends(ensure_editable)],
)
async def import_workflow_document(
    payload: WorkflowDocument,
    store: WorkflowStore = Depends(get_store),
):
    """Replace the current graph with an exported workflow document."""
    try:
        name = load_workflow(store, payload.model_dump())
    except WorkflowImportError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info(f"Imported workflow '{name}'")
    return _state_to_response(store)
