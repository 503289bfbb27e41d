"""teamflow: multi-agent workflow dispatch."""

from .agents import Agent, build_agent_pool
from .config import TeamConfig, load_team_config, parse_topology
from .workflow import WorkflowExecutor, WorkflowResult, WorkflowState

__all__ = [
    "Agent",
    "build_agent_pool",
    "TeamConfig",
    "load_team_config",
    "parse_topology",
    "WorkflowExecutor",
    "WorkflowResult",
    "WorkflowState",
]
