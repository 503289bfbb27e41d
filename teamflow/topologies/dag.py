"""DAG topology: dependency-ordered scheduling over agent-bound nodes."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any

from .base import AgentInvoker, AgentPool, BaseTopology, TopologyResult, join_trace

if TYPE_CHECKING:
    from teamflow.workflow.state import WorkflowState


NO_DEPENDENCIES = "No dependencies"


@dataclass(slots=True)
class DAGNode:
    """Unit of work bound to one agent."""

    id: str
    agent: str
    task: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "DAGNode":
        if not isinstance(raw, dict) or "id" not in raw or "agent" not in raw:
            raise ValueError(f"DAG node requires 'id' and 'agent': {raw!r}")
        return cls(id=str(raw["id"]), agent=str(raw["agent"]), task=str(raw.get("task", "")))


@dataclass(slots=True)
class DAGEdge:
    """``to_node`` may not run until ``from_node`` has completed."""

    from_node: str
    to_node: str
    condition: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "DAGEdge":
        if not isinstance(raw, dict) or "from" not in raw or "to" not in raw:
            raise ValueError(f"DAG edge requires 'from' and 'to': {raw!r}")
        condition = raw.get("condition")
        return cls(
            from_node=str(raw["from"]),
            to_node=str(raw["to"]),
            condition=None if condition is None else str(condition),
        )


def build_context(dependencies: list[str], outputs: dict[str, str]) -> str:
    """Concatenate predecessor outputs for a node prompt."""
    if not dependencies:
        return NO_DEPENDENCIES
    return " | ".join(f"{dep}: {outputs[dep]}" for dep in dependencies if dep in outputs)


@dataclass(slots=True)
class DAGTopology(BaseTopology):
    """FIFO ready-queue scheduler.

    A node is enqueued once every edge ending at it starts from a completed
    node. Nodes whose agent is missing still count as completed so their
    dependents can run. Nodes that never become ready (cycles, dangling
    dependencies) are listed in a closing diagnostic.
    """

    name = "dag"

    nodes: list[DAGNode] = field(default_factory=list)
    edges: list[DAGEdge] = field(default_factory=list)

    async def execute(
        self,
        *,
        task: str,
        pool: AgentPool,
        invoke_agent: AgentInvoker,
        state: WorkflowState,
        logger: logging.Logger,
    ) -> TopologyResult:
        by_id: dict[str, DAGNode] = {}
        for node in self.nodes:
            if node.id in by_id:
                logger.warning("DAG: duplicate node id '%s' ignored", node.id)
                continue
            by_id[node.id] = node

        incoming: dict[str, list[str]] = {node_id: [] for node_id in by_id}
        outgoing: dict[str, list[str]] = {node_id: [] for node_id in by_id}
        for edge in self.edges:
            if edge.from_node not in by_id or edge.to_node not in by_id:
                logger.warning("DAG: edge %s -> %s references an unknown node, ignored", edge.from_node, edge.to_node)
                continue
            if edge.from_node not in incoming[edge.to_node]:
                incoming[edge.to_node].append(edge.from_node)
            outgoing[edge.from_node].append(edge.to_node)

        ready = deque(node for node_id, node in by_id.items() if not incoming[node_id])
        enqueued = {node.id for node in ready}
        completed: set[str] = set()
        outputs: dict[str, str] = {}
        trace: list[str] = []
        order: list[str] = []

        logger.info("DAG: starting with %d ready nodes", len(ready))

        while ready:
            node = ready.popleft()
            context = build_context(incoming[node.id], outputs)

            if node.agent in pool:
                logger.info("DAG node: %s (agent: %s)", node.id, node.agent)
                output = await invoke_agent(node.agent, f"Task: {node.task}. Context: {context}. Original: {task}")
                trace.append(f"Node {node.id} ({node.agent}): {output}")
                outputs[node.id] = output
            else:
                trace.append(f"DAG: Agent '{node.agent}' not found for node {node.id}")

            completed.add(node.id)
            order.append(node.id)

            for target in outgoing[node.id]:
                if target in enqueued:
                    continue
                if all(dep in completed for dep in incoming[target]):
                    ready.append(by_id[target])
                    enqueued.add(target)
                    logger.debug("DAG: node %s is now ready (dependencies: %s)", target, incoming[target])

        stranded = [node_id for node_id in by_id if node_id not in completed]
        if stranded:
            listed = ", ".join(f'"{node_id}"' for node_id in stranded)
            trace.append(f"DAG: Some nodes could not be completed: [{listed}]")

        state.set_metadata("dag_completed", str(len(completed)))
        return TopologyResult(
            trace=trace,
            result=join_trace(trace),
            metadata={"execution_order": order, "stranded": stranded},
        )
