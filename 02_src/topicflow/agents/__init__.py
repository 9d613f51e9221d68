"""Agents module."""

from .base import IAgent
from .factory import AGENT_TYPES, AgentFactory, AgentType, get_agent_type, register_agent_type
from .operators import BINARY_OPERATORS, UNARY_OPERATORS, BinOpAgent, UnaryOpAgent
from .parallel import ParallelAgent
from .probes import SinkAgent, SourceAgent

__all__ = [
    # Capability
    "IAgent",
    # Operators
    "BINARY_OPERATORS",
    "UNARY_OPERATORS",
    "BinOpAgent",
    "UnaryOpAgent",
    # Wrappers and probes
    "ParallelAgent",
    "SinkAgent",
    "SourceAgent",
    # Factories
    "AGENT_TYPES",
    "AgentFactory",
    "AgentType",
    "get_agent_type",
    "register_agent_type",
]
