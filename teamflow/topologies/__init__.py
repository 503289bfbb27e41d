"""Topology implementations."""

from typing import Union

from .base import AgentInvoker, AgentPool, BaseTopology, TopologyResult
from .chain_of_thought import ChainOfThoughtTopology
from .dag import DAGEdge, DAGNode, DAGTopology
from .fsm import FSMTopology, StateTransition
from .parallel import ParallelTopology
from .round_robin import RoundRobinTopology

Topology = Union[
    RoundRobinTopology,
    ChainOfThoughtTopology,
    ParallelTopology,
    FSMTopology,
    DAGTopology,
]

__all__ = [
    "AgentInvoker",
    "AgentPool",
    "BaseTopology",
    "TopologyResult",
    "Topology",
    "RoundRobinTopology",
    "ChainOfThoughtTopology",
    "ParallelTopology",
    "FSMTopology",
    "StateTransition",
    "DAGTopology",
    "DAGNode",
    "DAGEdge",
]
