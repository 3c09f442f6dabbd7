"""FastAPI dependencies resolving the per-app store, executor and event bus."""

from __future__ import annotations

from fastapi import HTTPException, Request

from flowsim.engine import WorkflowExecutor
from flowsim.store import WorkflowStore

from .event_bus import EventBus


def get_store(request: Request) -> WorkflowStore:
    return request.app.state.store


def get_executor(request: Request) -> WorkflowExecutor:
    return request.app.state.executor


def get_event_bus(request: Request) -> EventBus:
    return request.app.state.event_bus


def run_in_progress(request: Request) -> bool:
    """True while a run is active or its task has not finished yet."""
    task = request.app.state.run_task
    return request.app.state.executor.is_running or (task is not None and not task.done())


def ensure_editable(request: Request) -> None:
    """Graph edits are refused while a run is active."""
    if run_in_progress(request):
        raise HTTPException(status_code=409, detail="Workflow is running; stop it before editing")
