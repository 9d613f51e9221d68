"""Configuration loading: type-tagged agent files and built-in topologies."""

from .loader import GenericConfig, IConfig, MathExampleConfig, parse_config
from .spec import AgentSpec, ConfigError

__all__ = [
    "AgentSpec",
    "ConfigError",
    "GenericConfig",
    "IConfig",
    "MathExampleConfig",
    "parse_config",
]
