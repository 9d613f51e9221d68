"""Agent type registry: maps a configuration type tag to a factory."""

from dataclasses import dataclass
from typing import Callable, Sequence

from ..topics import ITopicRegistry
from .base import IAgent
from .operators import BINARY_OPERATORS, UNARY_OPERATORS, BinOpAgent, UnaryOpAgent

AgentFactory = Callable[[str, ITopicRegistry, Sequence[str], Sequence[str]], IAgent]


@dataclass(frozen=True)
class AgentType:
    """A buildable agent kind and the topic arity it expects."""

    tag: str
    inputs: int
    outputs: int
    factory: AgentFactory


AGENT_TYPES: dict[str, AgentType] = {}


def register_agent_type(
    tag: str,
    factory: AgentFactory,
    inputs: int,
    outputs: int = 1,
) -> AgentType:
    """Register (or replace) the factory for a type tag."""
    if not tag:
        raise ValueError("Agent type tag cannot be empty")
    agent_type = AgentType(tag=tag.lower(), inputs=inputs, outputs=outputs, factory=factory)
    AGENT_TYPES[agent_type.tag] = agent_type
    return agent_type


def get_agent_type(tag: str) -> AgentType | None:
    return AGENT_TYPES.get(tag.strip().lower())


def _binary_factory(operator_name: str) -> AgentFactory:
    operator = BINARY_OPERATORS[operator_name]

    def build(name, registry, subs, pubs):
        return BinOpAgent(name, registry, subs[0], subs[1], pubs[0], operator)

    return build


def _unary_factory(operator_name: str) -> AgentFactory:
    operator = UNARY_OPERATORS[operator_name]

    def build(name, registry, subs, pubs):
        return UnaryOpAgent(name, registry, subs[0], pubs[0], operator)

    return build


for _tag in BINARY_OPERATORS:
    register_agent_type(_tag, _binary_factory(_tag), inputs=2)

for _tag in UNARY_OPERATORS:
    register_agent_type(_tag, _unary_factory(_tag), inputs=1)
