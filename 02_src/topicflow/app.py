"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol

from .config import PathLike, resolve_config_path, resolve_queue_size
from .configs import GenericConfig, IConfig, MathExampleConfig
from .graph import Graph
from .logging_config import get_logger
from .models import Message
from .topics import Topic, TopicRegistry

logger = get_logger(__name__)


class CycleError(RuntimeError):
    """The configured topology contains a cycle."""

    def __init__(self, graph: Graph):
        super().__init__(f"Configured topology has a cycle ({len(graph)} nodes)")
        self.graph = graph


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    def start(self) -> None:
        """Build the registry and agents, reject cyclic topologies."""
        ...

    def stop(self) -> None:
        """Close agents and shut down the registry."""
        ...

    def reset(self) -> None:
        """Reset agent state between runs."""
        ...


class Application:
    """Owns the TopicRegistry and the configured agents."""

    def __init__(
        self,
        config_path: PathLike | None = None,
        queue_size: int | None = None,
    ):
        env_config = os.getenv("CONFIG_FILE") if config_path is None else config_path
        self._config_path = resolve_config_path(env_config)
        self._queue_size = (
            resolve_queue_size(os.getenv("QUEUE_SIZE")) if queue_size is None else queue_size
        )

        # Components (will be initialized in start())
        self._registry: TopicRegistry | None = None
        self._config: IConfig | None = None

    def start(self) -> None:
        """Initialize components in dependency order."""
        if self._registry is not None:
            raise RuntimeError("Application already started")
        logger.info("Starting application")

        # 1. Registry (no dependencies)
        registry = TopicRegistry()

        # 2. Agents (depend on the registry)
        if self._config_path is None:
            config: IConfig = MathExampleConfig(registry)
        else:
            config = GenericConfig(registry, self._config_path, self._queue_size)
        config.create()
        logger.info("%s created %s agents", config.name, len(config.agents))

        # 3. Pre-flight topology check
        graph = Graph.from_registry(registry)
        if graph.has_cycles():
            logger.error("Rejecting cyclic topology: %s", graph.edges())
            config.close()
            registry.shutdown()
            raise CycleError(graph)

        self._registry = registry
        self._config = config
        logger.info("Application started with %s topics", len(registry))

    def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._config is not None:
            self._config.close()
            self._config = None
        if self._registry is not None:
            self._registry.shutdown()
            self._registry = None
            logger.info("Application stopped")

    def reset(self) -> None:
        """Reset every configured agent back to its initial state."""
        for agent in self.config.agents:
            agent.reset()
        logger.info("Reset %s agents", len(self.config.agents))

    def topic(self, name: str) -> Topic:
        return self.registry.get_or_create(name)

    def publish(self, topic: str, payload: "str | bytes | float | Message") -> Message:
        """Publish payload on the named topic."""
        message = Message.of(payload)
        self.topic(topic).publish(message)
        return message

    def graph(self) -> Graph:
        """Fresh graph snapshot of the current topology."""
        return Graph.from_registry(self.registry)

    @property
    def registry(self) -> TopicRegistry:
        """Get registry instance."""
        if self._registry is None:
            raise RuntimeError("Application not started")
        return self._registry

    @property
    def config(self) -> IConfig:
        """Get configuration instance."""
        if self._config is None:
            raise RuntimeError("Application not started")
        return self._config
