"""Shared fixtures.

Provides:
- A fresh WorkflowStore per test
- Executors with zero delay and deterministic outcomes
- A graph builder for terse node/edge setup
- An httpx AsyncClient bound to an app composed around the test store
"""

from __future__ import annotations

import asyncio
from typing import AsyncGenerator, Iterable, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from flowsim.engine import WorkflowExecutor, always_succeed, no_delay
from flowsim.store import WorkflowStore
from flowsim_api.main import create_app


async def instant_sleep(_delay: float) -> None:
    """Yield to the loop once instead of simulating latency."""
    await asyncio.sleep(0)


@pytest.fixture
def store() -> WorkflowStore:
    return WorkflowStore()


@pytest.fixture
def make_executor(store: WorkflowStore):
    """Factory for executors on the test store; success + no delay by default."""

    def factory(**kwargs) -> WorkflowExecutor:
        kwargs.setdefault("delay_strategy", no_delay)
        kwargs.setdefault("outcome_strategy", always_succeed)
        kwargs.setdefault("sleep", instant_sleep)
        return WorkflowExecutor(store, **kwargs)

    return factory


@pytest.fixture
def executor(make_executor) -> WorkflowExecutor:
    return make_executor()


@pytest.fixture
def build_graph(store: WorkflowStore):
    """Add nodes given as (id, type) and edges given as (source, target)."""

    def build(
        nodes: Iterable[Tuple[str, str]],
        edges: Iterable[Tuple[str, str]] = (),
    ) -> WorkflowStore:
        for node_id, node_type in nodes:
            store.add_node(node_type, node_id=node_id)
        for source, target in edges:
            store.add_edge(source, target)
        return store

    return build


@pytest.fixture
def app(store: WorkflowStore, executor: WorkflowExecutor):
    return create_app(store=store, executor=executor)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI routes."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
