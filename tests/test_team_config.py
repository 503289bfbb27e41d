"""Tests for team config loading and workflow tag parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from teamflow.config import load_team_config, normalize_tag, parse_topology, team_config_from_dict
from teamflow.topologies import (
    ChainOfThoughtTopology,
    DAGTopology,
    FSMTopology,
    ParallelTopology,
    RoundRobinTopology,
)

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("roundrobin", RoundRobinTopology),
        ("round_robin", RoundRobinTopology),
        ("ChainOfThought", ChainOfThoughtTopology),
        ("chain_of_thought", ChainOfThoughtTopology),
        ("cot", ChainOfThoughtTopology),
        ("parallel", ParallelTopology),
        ("FSM", FSMTopology),
        ("dag", DAGTopology),
        ("swarm", RoundRobinTopology),
        (None, RoundRobinTopology),
    ],
)
def test_parse_topology_tags(tag, expected) -> None:
    assert isinstance(parse_topology(tag), expected)


def test_unknown_tag_defaults_to_round_robin() -> None:
    assert normalize_tag("hierarchical") == "round_robin"


def test_fsm_defaults() -> None:
    topology = parse_topology("fsm")
    assert topology == FSMTopology(states=[], transitions=[], initial_state="start")


def test_load_fsm_team() -> None:
    team = load_team_config(CONFIG_DIR / "team.yaml")

    assert team.name == "support_team"
    assert [a.name for a in team.agents] == ["intake", "analysis", "resolution"]
    assert isinstance(team.workflow, FSMTopology)
    assert team.workflow.initial_state == "intake"
    assert team.workflow.transitions[0].from_state == "intake"
    assert team.workflow.transitions[0].to_state == "analysis"
    assert team.workflow.transitions[0].condition == "issue_received"


def test_load_dag_team() -> None:
    team = load_team_config(CONFIG_DIR / "research_dag.yaml")

    assert isinstance(team.workflow, DAGTopology)
    assert [n.id for n in team.workflow.nodes] == ["gather", "numbers", "report"]
    assert [(e.from_node, e.to_node) for e in team.workflow.edges] == [("gather", "report"), ("numbers", "report")]
    assert team.workflow.edges[0].condition is None


def test_inline_workflow_mapping() -> None:
    team = team_config_from_dict(
        {
            "name": "inline",
            "agents": [{"name": "a"}],
            "workflow": {
                "type": "dag",
                "nodes": [{"id": "n1", "agent": "a", "task": "t"}],
                "edges": [],
            },
        }
    )
    assert isinstance(team.workflow, DAGTopology)
    assert team.workflow.nodes[0].agent == "a"


@pytest.mark.parametrize(
    "raw",
    [
        ["not", "a", "mapping"],
        {"agents": [{"name": "a"}]},
        {"name": "empty", "agents": []},
        {"name": "dupes", "agents": [{"name": "a"}, {"name": "a"}]},
        {"name": "nameless", "agents": [{"role": "x"}]},
    ],
)
def test_invalid_team_configs_raise(raw) -> None:
    with pytest.raises(ValueError):
        team_config_from_dict(raw)


@pytest.mark.parametrize(
    "extra",
    [
        {"workflow": "fsm", "fsm": {"transitions": [{"to": "a"}]}},
        {"workflow": "fsm", "fsm": {"transitions": ["intake->analysis"]}},
        {"workflow": "fsm", "fsm": ["intake", "analysis"]},
        {"workflow": "dag", "dag": {"nodes": [{"agent": "a", "task": "t"}]}},
        {"workflow": "dag", "dag": {"nodes": [{"id": "n1", "agent": "a"}], "edges": [{"from": "n1"}]}},
        {"workflow": "dag", "dag": {"nodes": [None]}},
    ],
)
def test_malformed_workflow_sections_raise_value_error(extra) -> None:
    with pytest.raises(ValueError):
        team_config_from_dict({"name": "broken", "agents": [{"name": "a"}], **extra})


def test_empty_workflow_lists_are_allowed() -> None:
    team = team_config_from_dict(
        {"name": "sparse", "agents": [{"name": "a"}], "workflow": "dag", "dag": {"nodes": None, "edges": None}}
    )
    assert team.workflow == DAGTopology(nodes=[], edges=[])
