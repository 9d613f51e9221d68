"""Topic implementation: a named channel with synchronous fan-out."""

import threading
from typing import TYPE_CHECKING

from ..logging_config import get_logger
from ..models import Message

if TYPE_CHECKING:
    from ..agents import IAgent

logger = get_logger(__name__)


def _validate_name(name: str) -> str:
    if not name or not isinstance(name, str):
        raise ValueError("Topic name cannot be empty")
    return name


class Topic:
    """
    Named channel holding subscribers, publishers and the last published Message.

    Subscriber and publisher sets are copy-on-write tuples, replaced under a
    short lock. publish() iterates the tuple it read at call start, so agents
    may subscribe, unsubscribe or publish again from inside a callback.
    """

    def __init__(self, name: str):
        self._name = _validate_name(name)
        self._lock = threading.Lock()
        self._subscribers: tuple["IAgent", ...] = ()
        self._publishers: tuple["IAgent", ...] = ()
        self._last_message: Message | None = None

    def __repr__(self) -> str:
        return (
            f"Topic(name={self._name!r}, subscribers={len(self._subscribers)}, "
            f"publishers={len(self._publishers)})"
        )

    @property
    def name(self) -> str:
        """Topic name."""
        return self._name

    @property
    def subscribers(self) -> tuple["IAgent", ...]:
        """Snapshot of current subscribers in subscription order."""
        return self._subscribers

    @property
    def publishers(self) -> tuple["IAgent", ...]:
        """Snapshot of agents declared as publishers."""
        return self._publishers

    @property
    def last_message(self) -> Message | None:
        """Last published Message, None before the first publish."""
        return self._last_message

    def get_last_message(self) -> Message | None:
        return self._last_message

    def subscribe(self, agent: "IAgent") -> None:
        """Subscribe an agent (no-op if already subscribed)."""
        with self._lock:
            if any(existing is agent for existing in self._subscribers):
                return
            self._subscribers = self._subscribers + (agent,)
        logger.debug("Agent %s subscribed to %s", agent.name, self._name)

    def unsubscribe(self, agent: "IAgent") -> None:
        """Unsubscribe an agent (no-op if not subscribed)."""
        with self._lock:
            self._subscribers = tuple(a for a in self._subscribers if a is not agent)

    def add_publisher(self, agent: "IAgent") -> None:
        """Declare an agent as publisher. Bookkeeping only, nothing is delivered."""
        with self._lock:
            if any(existing is agent for existing in self._publishers):
                return
            self._publishers = self._publishers + (agent,)
        logger.debug("Agent %s publishes to %s", agent.name, self._name)

    def remove_publisher(self, agent: "IAgent") -> None:
        """Remove an agent from the publishers (no-op if absent)."""
        with self._lock:
            self._publishers = tuple(a for a in self._publishers if a is not agent)

    def publish(self, message: Message) -> None:
        """Record message as last value, then call every subscriber in order."""
        self._last_message = message
        subscribers = self._subscribers

        logger.debug(
            "Publishing %r on %s to %s subscribers",
            message.text,
            self._name,
            len(subscribers),
        )

        for agent in subscribers:
            try:
                agent.callback(self._name, message)
            except Exception:
                logger.exception(
                    "Error in callback of agent %s on topic %s",
                    agent.name,
                    self._name,
                )
