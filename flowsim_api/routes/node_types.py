"""Node type catalog endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException

from flowsim.nodes import (
    NodeDefinition,
    get_node_definition,
    list_categories,
    list_node_types_by_category,
)

from ..schemas import NodeCategoryResponse, NodeTypeResponse

router = APIRouter(prefix="/api/node-types", tags=["node-types"])


def _definition_to_response(definition: NodeDefinition) -> NodeTypeResponse:
    return NodeTypeResponse(**definition.to_dict())


@router.get("", response_model=List[NodeCategoryResponse])
async def list_node_type_catalog():
    """All node types grouped by category, in palette order."""
    return [
        NodeCategoryResponse(
            category=category,
            node_types=[_definition_to_response(d) for d in list_node_types_by_category(category)],
        )
        for category in list_categories()
    ]


@router.get("/{node_type}", response_model=NodeTypeResponse)
async def get_node_type(node_type: str):
    definition = get_node_definition(node_type)
    if definition is None:
        raise HTTPException(status_code=404, detail=f"Unknown node type: {node_type}")
    return _definition_to_response(definition)
