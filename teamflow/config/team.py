"""Team configuration loading and topology descriptor parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any

import yaml

from ..topologies import (
    ChainOfThoughtTopology,
    DAGEdge,
    DAGNode,
    DAGTopology,
    FSMTopology,
    ParallelTopology,
    RoundRobinTopology,
    StateTransition,
    Topology,
)


logger = logging.getLogger(__name__)

_TAG_ALIASES = {
    "roundrobin": "round_robin",
    "round_robin": "round_robin",
    "chainofthought": "chain_of_thought",
    "chain_of_thought": "chain_of_thought",
    "cot": "chain_of_thought",
    "parallel": "parallel",
    "fsm": "fsm",
    "dag": "dag",
}


@dataclass(slots=True)
class AgentSpec:
    """Declarative description of one team member."""

    name: str
    role: str = ""
    instructions: str = ""
    tools: list[str] = field(default_factory=list)
    model: str = ""
    memory: str | None = None


@dataclass(slots=True)
class TeamConfig:
    """Parsed team YAML."""

    name: str
    agents: list[AgentSpec]
    workflow: Topology
    shared_memory: str | None = None
    memory_dir: Path = Path("memory")


def normalize_tag(tag: str | None) -> str:
    """Map a workflow tag to its canonical name; unknown tags become round-robin."""
    key = str(tag or "").strip().lower()
    canonical = _TAG_ALIASES.get(key)
    if canonical is None:
        logger.warning("Unknown workflow tag '%s', defaulting to round_robin", tag)
        return "round_robin"
    return canonical


def _section(key: str, raw: Any) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"'{key}' section must be a mapping: {raw!r}")
    return raw


def parse_topology(
    tag: str | None,
    *,
    fsm: dict[str, Any] | None = None,
    dag: dict[str, Any] | None = None,
) -> Topology:
    """Build a topology descriptor from a tag plus optional FSM/DAG sections."""
    canonical = normalize_tag(tag)
    if canonical == "chain_of_thought":
        return ChainOfThoughtTopology()
    if canonical == "parallel":
        return ParallelTopology()
    if canonical == "fsm":
        section = _section("fsm", fsm)
        return FSMTopology(
            states=[str(s) for s in section.get("states") or []],
            transitions=[StateTransition.from_dict(t) for t in section.get("transitions") or []],
            initial_state=str(section.get("initial_state", "start")),
        )
    if canonical == "dag":
        section = _section("dag", dag)
        return DAGTopology(
            nodes=[DAGNode.from_dict(n) for n in section.get("nodes") or []],
            edges=[DAGEdge.from_dict(e) for e in section.get("edges") or []],
        )
    return RoundRobinTopology()


def _parse_workflow(raw: dict[str, Any]) -> Topology:
    workflow = raw.get("workflow", "round_robin")
    if isinstance(workflow, dict):
        # Inline form: {type: fsm, states: [...], ...}
        tag = workflow.get("type")
        return parse_topology(
            tag,
            fsm=raw.get("fsm") or workflow,
            dag=raw.get("dag") or workflow,
        )
    return parse_topology(str(workflow), fsm=raw.get("fsm"), dag=raw.get("dag"))


def _parse_agent(item: Any) -> AgentSpec:
    if not isinstance(item, dict) or not item.get("name"):
        raise ValueError(f"Agent entry must be a mapping with a name: {item!r}")
    return AgentSpec(
        name=str(item["name"]),
        role=str(item.get("role", "")),
        instructions=str(item.get("instructions", "")),
        tools=[str(t) for t in item.get("tools", []) or []],
        model=str(item.get("model", "")),
        memory=None if item.get("memory") is None else str(item["memory"]),
    )


def team_config_from_dict(raw: Any) -> TeamConfig:
    """Validate and normalize an already-parsed team document."""
    if not isinstance(raw, dict):
        raise ValueError("Team config must be a mapping")
    if not raw.get("name"):
        raise ValueError("Team config requires a name")

    agents = [_parse_agent(item) for item in raw.get("agents") or []]
    if not agents:
        raise ValueError(f"Team '{raw['name']}' declares no agents")

    names = [agent.name for agent in agents]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Duplicate agent names: {duplicates}")

    return TeamConfig(
        name=str(raw["name"]),
        agents=agents,
        workflow=_parse_workflow(raw),
        shared_memory=None if raw.get("shared_memory") is None else str(raw["shared_memory"]),
        memory_dir=Path(str(raw.get("memory_dir", "memory"))),
    )


def load_team_config(path: Path) -> TeamConfig:
    """Load a team YAML file."""
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return team_config_from_dict(raw)
