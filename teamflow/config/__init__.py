"""Team configuration."""

from .team import (
    AgentSpec,
    TeamConfig,
    load_team_config,
    normalize_tag,
    parse_topology,
    team_config_from_dict,
)

__all__ = [
    "AgentSpec",
    "TeamConfig",
    "load_team_config",
    "normalize_tag",
    "parse_topology",
    "team_config_from_dict",
]
