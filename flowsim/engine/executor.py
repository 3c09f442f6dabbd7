"""Simulated Workflow Executor

Walks a workflow snapshot breadth-first from its trigger nodes and "runs"
each reachable node once, reporting progress only through WorkflowStore
mutations (status, output, log entries).

Execution model:
- One node step in flight at a time; the simulated delay is the only
  await point.
- An executed-set filters duplicates at dequeue time, so cycles, diamonds,
  self-loops and repeated edges never run a node twice.
- A failed node does not enqueue its successors; other queued branches
  keep going.
- stop() is cooperative: the loop checks the abort flag before each
  dequeue, so an in-flight step always finishes. A stop aimed at a run
  scheduled but not yet begun ends that run before its first node.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Awaitable, Callable, Deque, Dict, List, Optional, Set

from ..models import (
    WORKFLOW_LOG_ID,
    LogSeverity,
    Node,
    NodeStatus,
    WorkflowSnapshot,
)
from ..nodes import produce_mock_output
from ..store import WorkflowStore
from .graph import build_adjacency, select_start_nodes
from .simulation import DelayStrategy, OutcomeStrategy, uniform_delay, weighted_outcome

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]

MSG_STARTING = "Starting execution..."
MSG_FAILED = "Execution failed: Simulated error"
MSG_STOPPED = "Execution stopped by user"


class WorkflowExecutor:
    """Runs simulated executions against a WorkflowStore.

    Args:
        store: State container the executor reports into
        delay_strategy: Returns the simulated work duration per node (seconds)
        outcome_strategy: Decides whether a node's simulated step succeeds
        sleep: Awaitable used for the simulated delay (asyncio.sleep by default)
    """

    def __init__(
        self,
        store: WorkflowStore,
        *,
        delay_strategy: Optional[DelayStrategy] = None,
        outcome_strategy: Optional[OutcomeStrategy] = None,
        sleep: Optional[Sleep] = None,
    ):
        self.store = store
        self.delay_strategy = delay_strategy or uniform_delay()
        self.outcome_strategy = outcome_strategy or weighted_outcome()
        self._sleep = sleep or asyncio.sleep
        self._abort_requested = False
        self._start_pending = False

    @property
    def is_running(self) -> bool:
        return self.store.is_running

    def stop(self) -> None:
        """Request cooperative cancellation of the active or scheduled run.

        Takes effect before the next node is dequeued. A run scheduled with
        schedule() but not yet begun ends as stopped before its first node.
        No-op when idle.
        """
        if not (self.store.is_running or self._start_pending):
            return
        logger.info("Stop requested")
        self._abort_requested = True

    def schedule(self, snapshot: Optional[WorkflowSnapshot] = None) -> "asyncio.Task[None]":
        """Run start() as a background task on the current event loop."""
        self._start_pending = True
        task = asyncio.create_task(self.start(snapshot))
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: "asyncio.Task[None]") -> None:
        # Cancelled before start() ever ran: drop its pending state
        if self._start_pending and not self.store.is_running:
            self._start_pending = False
            self._abort_requested = False

    async def start(self, snapshot: Optional[WorkflowSnapshot] = None) -> None:
        """Run one simulated execution.

        Progress is reported through store mutations; nothing is returned.
        Simulated node failures never propagate to the caller.

        Args:
            snapshot: Graph to execute; defaults to a fresh store snapshot
        """
        if snapshot is None:
            snapshot = self.store.snapshot()

        if self.store.is_running:
            logger.warning("Execution skipped: a run is already active")
            self._start_pending = False
            return

        self._start_pending = False
        if not snapshot.nodes:
            logger.info("Execution skipped: workflow has no nodes")
            self._abort_requested = False
            return

        self.store.set_running(True)
        self.store.clear_log()
        self.store.reset_node_statuses()

        start_nodes = select_start_nodes(snapshot.nodes)
        adjacency = build_adjacency(snapshot.edges)
        nodes_by_id = {node.id: node for node in snapshot.nodes}

        logger.info(
            f"Executing workflow with {len(snapshot.nodes)} nodes, "
            f"start nodes: {[n.id for n in start_nodes]}"
        )

        executed: Set[str] = set()
        queue: Deque[str] = deque(node.id for node in start_nodes)
        stopped = False

        try:
            while queue:
                if self._abort_requested:
                    stopped = True
                    break

                current_id = queue.popleft()
                if current_id in executed:
                    continue

                node = nodes_by_id.get(current_id)
                if node is None:
                    # Dangling edge target: treated as unreachable
                    logger.warning(f"Skipping unknown node '{current_id}'")
                    continue

                await self._execute_node(node, adjacency, queue)
                executed.add(current_id)
        except asyncio.CancelledError:
            logger.warning(f"Execution task cancelled after {len(executed)} nodes")
            self.store.set_running(False)
            raise
        finally:
            self._abort_requested = False

        if stopped:
            logger.info(f"Execution stopped by user after {len(executed)} nodes")
            self.store.append_log(WORKFLOW_LOG_ID, MSG_STOPPED, LogSeverity.INFO)
        else:
            logger.info(f"Execution completed: {len(executed)} nodes processed")
            self.store.append_log(
                WORKFLOW_LOG_ID,
                f"Workflow execution completed. {len(executed)} nodes processed.",
                LogSeverity.INFO,
            )
        self.store.set_running(False)

    async def _execute_node(
        self,
        node: Node,
        adjacency: Dict[str, List[str]],
        queue: Deque[str],
    ) -> None:
        """Run one node's simulated step and enqueue successors on success."""
        self.store.update_node_status(node.id, NodeStatus.RUNNING)
        self.store.append_log(node.id, MSG_STARTING, LogSeverity.INFO)

        try:
            await self._sleep(self.delay_strategy())
            succeeded = self.outcome_strategy(node)
            output = produce_mock_output(node.type, node.config) if succeeded else None
        except Exception as e:
            # A broken behaviour fails its node, not the run
            logger.exception(f"Node '{node.id}' ({node.type}) raised during execution")
            self.store.update_node_status(node.id, NodeStatus.ERROR)
            self.store.append_log(node.id, f"Execution failed: {e}", LogSeverity.ERROR)
            return

        if not succeeded:
            self.store.update_node_status(node.id, NodeStatus.ERROR)
            self.store.append_log(node.id, MSG_FAILED, LogSeverity.ERROR)
            logger.info(f"Node '{node.id}' failed (simulated)")
            return

        self.store.update_node_status(node.id, NodeStatus.SUCCESS, output)
        message = output.get("message", "") if isinstance(output, dict) else ""
        self.store.append_log(
            node.id,
            f"Completed successfully. {message}".strip(),
            LogSeverity.SUCCESS,
        )
        logger.info(f"Node '{node.id}' completed")

        queue.extend(adjacency.get(node.id, []))
