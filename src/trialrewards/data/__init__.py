"""Data layer utilities for reading reward configuration."""

from .config_tree import ConfigNode, ListNode, MappingNode, ScalarNode, to_node
from .errors import DataError, DataValidationError
from .reward_config_loader import load_reward_config, parse_reward_section

__all__ = [
    "ConfigNode",
    "DataError",
    "DataValidationError",
    "ListNode",
    "MappingNode",
    "ScalarNode",
    "load_reward_config",
    "parse_reward_section",
    "to_node",
]
