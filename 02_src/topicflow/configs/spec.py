"""Validated description of one configured agent."""

from pydantic import BaseModel, field_validator, model_validator

from ..agents import AGENT_TYPES, get_agent_type


class ConfigError(ValueError):
    """Raised when a configuration cannot be turned into agents."""


def _split_topics(value: object) -> list[str]:
    if isinstance(value, str):
        if not value.strip():
            return []
        value = value.split(",")
    return [str(name).strip() for name in value]


class AgentSpec(BaseModel):
    """One agent entry: type tag, input topics, output topics."""

    tag: str
    subs: list[str]
    pubs: list[str]

    @field_validator("tag")
    @classmethod
    def _known_tag(cls, tag: str) -> str:
        tag = tag.strip().lower()
        if get_agent_type(tag) is None:
            known = ", ".join(sorted(AGENT_TYPES))
            raise ValueError(f"unknown agent type {tag!r} (known: {known})")
        return tag

    @field_validator("subs", "pubs", mode="before")
    @classmethod
    def _parse_topics(cls, value: object) -> list[str]:
        names = [name for name in _split_topics(value) if name]
        if len(names) != len(_split_topics(value)):
            raise ValueError("topic names cannot be empty")
        return names

    @model_validator(mode="after")
    def _check_arity(self) -> "AgentSpec":
        agent_type = get_agent_type(self.tag)
        if len(self.subs) != agent_type.inputs:
            raise ValueError(
                f"{self.tag} expects {agent_type.inputs} input topic(s), got {len(self.subs)}"
            )
        if len(self.pubs) != agent_type.outputs:
            raise ValueError(
                f"{self.tag} expects {agent_type.outputs} output topic(s), got {len(self.pubs)}"
            )
        return self
