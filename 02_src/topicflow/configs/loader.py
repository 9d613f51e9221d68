"""Configurations that build agents into a TopicRegistry."""

from collections import Counter
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from ..agents import BINARY_OPERATORS, BinOpAgent, IAgent, ParallelAgent, get_agent_type
from ..config import DEFAULT_QUEUE_SIZE, PathLike
from ..logging_config import get_logger
from ..topics import ITopicRegistry
from .spec import AgentSpec, ConfigError

logger = get_logger(__name__)


class IConfig(Protocol):
    """Builds and tears down a set of agents."""

    @property
    def name(self) -> str:
        """Configuration name."""
        ...

    @property
    def version(self) -> int:
        """Configuration version."""
        ...

    @property
    def agents(self) -> list[IAgent]:
        """Agents created by create()."""
        ...

    def create(self) -> None:
        """Build the agents and wire them to their topics."""
        ...

    def close(self) -> None:
        """Close every agent created by create()."""
        ...


def parse_config(text: str) -> list[AgentSpec]:
    """
    Parse configuration text into validated AgentSpecs.

    Blank lines and lines starting with '#' are ignored. The remaining lines
    come in triples: type tag, comma-separated input topics, comma-separated
    output topics.

    Raises:
        ConfigError: if the line count is not a multiple of three or an
                     entry fails validation.
    """
    lines = [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]
    if len(lines) % 3 != 0:
        raise ConfigError(
            f"Expected groups of 3 lines (type, inputs, outputs), got {len(lines)} lines"
        )

    specs = []
    for index in range(0, len(lines), 3):
        tag, subs, pubs = lines[index : index + 3]
        try:
            specs.append(AgentSpec(tag=tag, subs=subs, pubs=pubs))
        except ValidationError as e:
            errors = "; ".join(error["msg"] for error in e.errors())
            raise ConfigError(f"Invalid agent entry #{index // 3 + 1} ({tag}): {errors}") from e
    return specs


def _agent_names(specs: list[AgentSpec]) -> list[str]:
    """Tag alone when it appears once, tag + running index otherwise."""
    counts = Counter(spec.tag for spec in specs)
    seen: Counter = Counter()
    names = []
    for spec in specs:
        seen[spec.tag] += 1
        names.append(spec.tag if counts[spec.tag] == 1 else f"{spec.tag}{seen[spec.tag]}")
    return names


class GenericConfig:
    """Text-file configuration; every agent runs on its own thread."""

    def __init__(
        self,
        registry: ITopicRegistry,
        path: PathLike,
        queue_size: int = DEFAULT_QUEUE_SIZE,
    ):
        self._registry = registry
        self._path = Path(path)
        self._queue_size = queue_size
        self._agents: list[ParallelAgent] = []

    @property
    def name(self) -> str:
        return f"Generic Config ({self._path.name})"

    @property
    def version(self) -> int:
        return 1

    @property
    def agents(self) -> list[IAgent]:
        return list(self._agents)

    def create(self) -> None:
        """Load, validate and build every agent of the file."""
        if self._agents:
            raise RuntimeError(f"{self.name} already created")

        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read config file {self._path}: {e}") from e

        # Validate the whole file before touching the registry
        specs = parse_config(text)

        try:
            for name, spec in zip(_agent_names(specs), specs):
                agent = get_agent_type(spec.tag).factory(
                    name, self._registry, spec.subs, spec.pubs
                )
                self._agents.append(ParallelAgent(agent, self._queue_size, self._registry))
                logger.info(
                    "Created agent %s: %s -> %s",
                    name,
                    ",".join(spec.subs),
                    ",".join(spec.pubs),
                )
        except Exception:
            logger.exception(
                "Failed building agents from %s, closing %s already built",
                self._path,
                len(self._agents),
            )
            self.close()
            raise

        logger.info("Loaded %s agents from %s", len(self._agents), self._path)

    def close(self) -> None:
        for agent in self._agents:
            agent.close()
        self._agents = []


class MathExampleConfig:
    """Built-in synchronous topology computing R3 = (A + B) * (A - B)."""

    def __init__(self, registry: ITopicRegistry):
        self._registry = registry
        self._agents: list[IAgent] = []

    @property
    def name(self) -> str:
        return "Math Example"

    @property
    def version(self) -> int:
        return 1

    @property
    def agents(self) -> list[IAgent]:
        return list(self._agents)

    def create(self) -> None:
        registry = self._registry
        self._agents = [
            BinOpAgent("plus", registry, "A", "B", "R1", BINARY_OPERATORS["plus"]),
            BinOpAgent("minus", registry, "A", "B", "R2", BINARY_OPERATORS["minus"]),
            BinOpAgent("mul", registry, "R1", "R2", "R3", BINARY_OPERATORS["mul"]),
        ]
        logger.info("Created %s", self.name)

    def close(self) -> None:
        for agent in self._agents:
            agent.close()
        self._agents = []
