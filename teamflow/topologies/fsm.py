"""Finite-state-machine topology.

Each state is handled by the first pool agent whose name contains the state
name or is contained in it. After the agent runs, the outgoing transitions of
the current state are checked in declaration order against keyword
heuristics on the agent's output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any

from .base import AgentInvoker, AgentPool, BaseTopology, TopologyResult, join_trace

if TYPE_CHECKING:
    from teamflow.workflow.state import WorkflowState


UNCONDITIONAL_CONDITIONS = frozenset({"issue_received", "analysis_complete", "resolution_attempted"})
SATISFIED_MARKERS = ("satisfied", "resolved", "happy")
UNSATISFIED_MARKERS = ("unsatisfied", "not resolved", "still has issue")


@dataclass(slots=True)
class StateTransition:
    """Edge of the state machine."""

    from_state: str
    to_state: str
    condition: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "StateTransition":
        if not isinstance(raw, dict) or "from" not in raw or "to" not in raw:
            raise ValueError(f"FSM transition requires 'from' and 'to': {raw!r}")
        return cls(
            from_state=str(raw["from"]),
            to_state=str(raw["to"]),
            condition=str(raw.get("condition", "")),
        )


def condition_fires(condition: str, output: str) -> bool:
    """Evaluate a transition condition against an agent's output."""
    if condition in UNCONDITIONAL_CONDITIONS:
        return True
    lowered = output.lower()
    if condition == "customer_satisfied":
        return any(marker in lowered for marker in SATISFIED_MARKERS)
    if condition == "customer_unsatisfied":
        return any(marker in lowered for marker in UNSATISFIED_MARKERS)
    # Unrecognized tags fire immediately.
    return True


def resolve_transition(current_state: str, transitions: list[StateTransition], output: str) -> str | None:
    """Return the next state, or ``None`` when the state has no outgoing edge."""
    candidates = [t for t in transitions if t.from_state == current_state]
    for transition in candidates:
        if condition_fires(transition.condition, output):
            return transition.to_state
    if candidates:
        return candidates[0].to_state
    return None


def match_agent(state_name: str, pool: AgentPool) -> str | None:
    """First agent, in pool order, whose name and the state name overlap."""
    for agent_name in pool:
        if agent_name in state_name or state_name in agent_name:
            return agent_name
    return None


@dataclass(slots=True)
class FSMTopology(BaseTopology):
    """Single-visit walk over a declared state machine."""

    name = "fsm"

    states: list[str] = field(default_factory=list)
    transitions: list[StateTransition] = field(default_factory=list)
    initial_state: str = "start"

    async def execute(
        self,
        *,
        task: str,
        pool: AgentPool,
        invoke_agent: AgentInvoker,
        state: WorkflowState,
        logger: logging.Logger,
    ) -> TopologyResult:
        current_state = self.initial_state
        trace: list[str] = []
        visited: list[str] = []
        max_iterations = len(self.states) * 2
        iteration = 0

        while True:
            if current_state not in self.states:
                trace.append(f"FSM: State '{current_state}' is not declared, stopping")
                break

            iteration += 1
            if iteration > max_iterations:
                trace.append("FSM: Maximum iterations reached, stopping to prevent infinite loop")
                break

            if current_state in visited:
                trace.append(f"FSM: State '{current_state}' already visited, stopping loop")
                break
            visited.append(current_state)
            state.set_variable("fsm_state", current_state)

            agent_name = match_agent(current_state, pool)
            if agent_name is None:
                trace.append(f"FSM: No agent found for state: {current_state}")
                break

            logger.info("FSM state: %s -> %s (iteration %d)", current_state, agent_name, iteration)
            output = await invoke_agent(agent_name, f"State: {current_state}. Task: {task}")
            trace.append(f"State {current_state} ({agent_name}): {output}")

            next_state = resolve_transition(current_state, self.transitions, output)
            if next_state is None:
                trace.append(f"FSM: No more transitions from state '{current_state}', workflow complete")
                break
            current_state = next_state

        state.set_metadata("fsm_final_state", current_state)
        return TopologyResult(
            trace=trace,
            result=join_trace(trace),
            metadata={"visited_states": visited, "final_state": current_state},
        )
