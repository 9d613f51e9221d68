"""Source and sink agents used to drive and observe a topology."""

import threading

from ..models import Message
from ..topics import ITopicRegistry


class SinkAgent:
    """Records every Message received on the topics it subscribes to."""

    def __init__(self, name: str, registry: ITopicRegistry, *topics: str):
        self._name = name
        self._lock = threading.Lock()
        self._received: list[tuple[str, Message]] = []
        self._topics = [registry.get_or_create(topic) for topic in topics]
        self._event = threading.Event()
        for topic in self._topics:
            topic.subscribe(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def received(self) -> list[tuple[str, Message]]:
        """(topic, message) pairs in arrival order."""
        with self._lock:
            return list(self._received)

    @property
    def last(self) -> Message | None:
        """Most recent Message, None if nothing arrived yet."""
        with self._lock:
            return self._received[-1][1] if self._received else None

    @property
    def values(self) -> list[float]:
        return [message.value for _, message in self.received]

    def callback(self, topic: str, message: Message) -> None:
        with self._lock:
            self._received.append((topic, message))
        self._event.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until a Message arrives after the last wait/reset."""
        arrived = self._event.wait(timeout)
        self._event.clear()
        return arrived

    def reset(self) -> None:
        with self._lock:
            self._received.clear()
        self._event.clear()

    def close(self) -> None:
        for topic in self._topics:
            topic.unsubscribe(self)


class SourceAgent:
    """Declared publisher of one topic; emit() pushes values into it."""

    def __init__(self, name: str, registry: ITopicRegistry, output: str):
        self._name = name
        self._output = registry.get_or_create(output)
        self._output.add_publisher(self)

    @property
    def name(self) -> str:
        return self._name

    def emit(self, payload: "str | bytes | float | Message") -> Message:
        """Publish payload as a Message on the output topic."""
        message = Message.of(payload)
        self._output.publish(message)
        return message

    def callback(self, topic: str, message: Message) -> None:
        """Sources do not subscribe to anything."""
        return

    def reset(self) -> None:
        return

    def close(self) -> None:
        self._output.remove_publisher(self)
