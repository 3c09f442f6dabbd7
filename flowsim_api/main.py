"""FastAPI Application Entry Point.

Composes one WorkflowStore, one WorkflowExecutor and one EventBus per app,
configures CORS, and includes all route modules.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flowsim.config import CORS_ORIGINS
from flowsim.engine import WorkflowExecutor
from flowsim.logging_config import get_api_logger, get_engine_logger
from flowsim.store import WorkflowStore

from .event_bus import EventBus
from .routes.execution import router as execution_router
from .routes.node_types import router as node_types_router
from .routes.workflow import router as workflow_router

logger = get_api_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cancel any in-flight run and close open streams on shutdown."""
    get_engine_logger()
    yield
    task = app.state.run_task
    if task is not None and not task.done():
        logger.info("Shutting down: cancelling active run")
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
    app.state.event_bus.close()
    app.state.detach_event_bus()


def create_app(
    store: Optional[WorkflowStore] = None,
    executor: Optional[WorkflowExecutor] = None,
    event_bus: Optional[EventBus] = None,
) -> FastAPI:
    """Build an app around a (possibly injected) store, executor and event bus."""
    store = store or WorkflowStore()
    executor = executor or WorkflowExecutor(store)
    if executor.store is not store:
        raise ValueError("executor must report into the app's store")
    event_bus = event_bus or EventBus()

    app = FastAPI(title="Workflow Simulator API", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.state.executor = executor
    app.state.event_bus = event_bus
    app.state.run_task = None
    app.state.detach_event_bus = event_bus.attach(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(node_types_router)
    app.include_router(workflow_router)
    app.include_router(execution_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for container orchestration."""
        return {"status": "ok"}

    return app


app = create_app()
