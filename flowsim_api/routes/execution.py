"""Workflow execution, log and SSE streaming endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import StreamingResponse

from flowsim.engine import WorkflowExecutor, build_adjacency, reachable_from, select_start_nodes
from flowsim.logging_config import get_api_logger
from flowsim.store import WorkflowStore

from ..dependencies import get_event_bus, get_executor, get_store, run_in_progress
from ..event_bus import RUN_END_EVENTS, EventBus
from ..schemas import ExecutionPlanResponse, LogEntryResponse, RunStatusResponse

logger = get_api_logger()

router = APIRouter(prefix="/api/execution", tags=["execution"])


@router.post("/start", response_model=RunStatusResponse, status_code=202)
async def start_execution(
    request: Request,
    store: WorkflowStore = Depends(get_store),
    executor: WorkflowExecutor = Depends(get_executor),
):
    """Start a simulated run in the background; progress arrives via the stream."""
    if not store.nodes:
        raise HTTPException(status_code=400, detail="Workflow has no nodes")
    if run_in_progress(request):
        raise HTTPException(status_code=409, detail="A run is already in progress")

    task = executor.schedule(store.snapshot())
    request.app.state.run_task = task
    logger.info(f"Run started for {len(store.nodes)} nodes")

    return RunStatusResponse(is_running=True, message="Execution started")


@router.post("/stop", response_model=RunStatusResponse, status_code=202)
async def stop_execution(
    request: Request,
    executor: WorkflowExecutor = Depends(get_executor),
):
    """Request cooperative cancellation; takes effect before the next node."""
    if not run_in_progress(request):
        raise HTTPException(status_code=409, detail="No run is in progress")
    executor.stop()
    return RunStatusResponse(is_running=True, message="Stop requested")


@router.get("/plan", response_model=ExecutionPlanResponse)
async def get_execution_plan(store: WorkflowStore = Depends(get_store)):
    """Start nodes and the nodes reachable from them if every step succeeds."""
    start_ids = [node.id for node in select_start_nodes(store.nodes)]
    node_ids = {node.id for node in store.nodes}
    reachable = [
        nid for nid in reachable_from(start_ids, build_adjacency(store.edges))
        if nid in node_ids
    ]
    reached = set(reachable)
    return ExecutionPlanResponse(
        start_node_ids=start_ids,
        reachable_node_ids=reachable,
        unreachable_node_ids=[n.id for n in store.nodes if n.id not in reached],
    )


@router.get("/log", response_model=List[LogEntryResponse])
async def get_execution_log(store: WorkflowStore = Depends(get_store)):
    return [LogEntryResponse(**entry.to_dict()) for entry in store.execution_log]


@router.delete("/log", status_code=204)
async def clear_execution_log(store: WorkflowStore = Depends(get_store)):
    store.clear_log()
    return Response(status_code=204)


@router.get("/stream")
async def stream_execution(
    until_finished: bool = Query(False, description="Close the stream when the run finishes"),
    event_bus: EventBus = Depends(get_event_bus),
):
    """SSE endpoint for real-time node status and log updates."""
    stop_events = RUN_END_EVENTS if until_finished else None
    return StreamingResponse(
        event_bus.subscribe(stop_events=stop_events),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
