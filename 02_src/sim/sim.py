"""SIM implementation - random stimulus for the input topics."""

import random
import threading
from typing import Protocol, Sequence

from topicflow.logging_config import get_logger
from topicflow.models import Message
from topicflow.topics import ITopicRegistry

logger = get_logger(__name__)


class ISim(Protocol):
    """Generate test data for a running topology."""

    def start(self) -> None:
        """Start publishing."""
        ...

    def stop(self) -> None:
        """Stop publishing."""
        ...


class Sim:
    """Publishes random integers to each input topic on a background thread."""

    def __init__(
        self,
        registry: ITopicRegistry,
        topics: Sequence[str] = ("A", "B"),
        interval: float = 0.1,
        seed: int | None = None,
    ):
        self._registry = registry
        self._topics = list(topics)
        self._interval = interval
        self._random = random.Random(seed)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._published = 0

    @property
    def published(self) -> int:
        """Number of messages published so far."""
        return self._published

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the scenario thread."""
        if self.running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_scenario, name="sim", daemon=True)
        self._thread.start()
        logger.info("SIM started on topics %s", self._topics)

    def stop(self) -> None:
        """Stop the scenario thread and wait for it."""
        self._stop_event.set()
        if self._thread:
            self._thread.join()
            self._thread = None
            logger.info("SIM stopped after %s messages", self._published)

    def step(self) -> dict[str, int]:
        """Publish one random value to every topic."""
        values = {}
        for name in self._topics:
            value = self._random.randint(1, 1000)
            self._registry.get_or_create(name).publish(Message.from_number(value))
            self._published += 1
            values[name] = value
        logger.debug("SIM published %s", values)
        return values

    def _run_scenario(self) -> None:
        while not self._stop_event.is_set():
            self.step()
            self._stop_event.wait(self._interval)
