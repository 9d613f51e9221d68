"""TopicRegistry: process-wide lookup from topic name to Topic."""

import threading
from typing import Protocol

from ..logging_config import get_logger
from .topic import Topic

logger = get_logger(__name__)


class ITopicRegistry(Protocol):
    """Creates and holds Topics by name."""

    def get_or_create(self, name: str) -> Topic:
        """Return the Topic for name, creating it on first reference."""
        ...

    def all(self) -> list[Topic]:
        """Snapshot of current Topics."""
        ...

    def clear(self) -> None:
        """Remove all Topics."""
        ...


class TopicRegistry:
    """
    Thread-safe name -> Topic map, constructed explicitly and passed around.

    At most one Topic instance is ever created per name. clear() drops every
    Topic without closing the agents attached to them; callers close their
    agents first.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._topics: dict[str, Topic] = {}
        self._shut_down = False

    def __len__(self) -> int:
        return len(self._topics)

    def __contains__(self, name: object) -> bool:
        return name in self._topics

    def get_or_create(self, name: str) -> Topic:
        """Return the Topic for name, creating it on first reference."""
        topic = self._topics.get(name)
        if topic is not None:
            return topic

        with self._lock:
            if self._shut_down:
                raise RuntimeError("TopicRegistry is shut down")
            topic = self._topics.get(name)
            if topic is None:
                topic = Topic(name)
                self._topics[name] = topic
                logger.debug("Created topic %s", name)
            return topic

    def get(self, name: str) -> Topic | None:
        """Return the Topic for name without creating it."""
        return self._topics.get(name)

    def all(self) -> list[Topic]:
        """Snapshot of current Topics in creation order."""
        with self._lock:
            return list(self._topics.values())

    def names(self) -> list[str]:
        """Snapshot of current topic names in creation order."""
        with self._lock:
            return list(self._topics)

    def clear(self) -> None:
        """Remove all Topics."""
        with self._lock:
            count = len(self._topics)
            self._topics = {}
        logger.info("Cleared %s topics", count)

    def shutdown(self) -> None:
        """Clear and refuse to create further Topics."""
        with self._lock:
            self._shut_down = True
        self.clear()

    @property
    def is_shut_down(self) -> bool:
        return self._shut_down
