"""ParallelAgent: runs a wrapped agent's callbacks on its own worker thread."""

import queue
import threading

from ..logging_config import get_logger
from ..models import Message
from ..topics import ITopicRegistry, Topic
from .base import IAgent

logger = get_logger(__name__)

_STOP = object()


class ParallelAgent:
    """
    Decorator moving an agent onto a dedicated thread fed by a bounded queue.

    callback() only enqueues (blocking while the queue is full), so the
    publishing thread is released as soon as the message is queued. The
    worker delivers messages to the wrapped agent in arrival order.

    Given a registry, the wrapper replaces the wrapped agent as subscriber
    and publisher on every topic the agent is attached to.
    """

    def __init__(
        self,
        agent: IAgent,
        capacity: int = 10,
        registry: ITopicRegistry | None = None,
    ):
        if capacity < 1:
            raise ValueError(f"Queue capacity must be positive, got {capacity}")

        self._agent = agent
        self._queue: queue.Queue = queue.Queue(maxsize=capacity)
        self._lock = threading.Lock()
        self._closed = False
        self._stopping = threading.Event()
        self._topics: list[Topic] = []
        self._thread = threading.Thread(
            target=self._run,
            name=f"agent-{agent.name}",
            daemon=True,
        )
        self._thread.start()

        if registry is not None:
            self._take_over(registry)

    def __repr__(self) -> str:
        return f"ParallelAgent({self._agent!r})"

    @property
    def name(self) -> str:
        return self._agent.name

    @property
    def agent(self) -> IAgent:
        """The wrapped agent."""
        return self._agent

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def callback(self, topic: str, message: Message) -> None:
        """Queue the message for the worker thread."""
        if self._closed:
            logger.warning(
                "Dropping message on %s for closed agent %s", topic, self.name
            )
            return
        self._queue.put((topic, message))

    def reset(self) -> None:
        self._agent.reset()

    def join(self, timeout: float | None = None) -> bool:
        """Wait until every queued message has been delivered. False on timeout."""
        pending = self._queue
        with pending.all_tasks_done:
            return pending.all_tasks_done.wait_for(
                lambda: not pending.unfinished_tasks, timeout
            )

    def close(self) -> None:
        """
        Stop the worker, then close the wrapped agent.

        From another thread the queue is drained first. From the worker itself
        (an agent closing inside its own callback) the worker stops after the
        current message and discards whatever is still queued.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True

        for topic in self._topics:
            topic.unsubscribe(self)
            topic.remove_publisher(self)

        if threading.current_thread() is self._thread:
            # Called from a callback: the queue may be full and nothing else drains it
            self._stopping.set()
        else:
            self._queue.put(_STOP)
            self._thread.join()
        self._agent.close()
        logger.info("Agent %s closed", self.name)

    def _take_over(self, registry: ITopicRegistry) -> None:
        """Stand in for the wrapped agent on every topic it is attached to."""
        agent = self._agent
        for topic in registry.all():
            attached = False
            if any(a is agent for a in topic.subscribers):
                topic.unsubscribe(agent)
                topic.subscribe(self)
                attached = True
            if any(a is agent for a in topic.publishers):
                topic.remove_publisher(agent)
                topic.add_publisher(self)
                attached = True
            if attached:
                self._topics.append(topic)

    def _discard_pending(self) -> None:
        dropped = 0
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
            self._queue.task_done()
            dropped += 1
        if dropped:
            logger.warning("Discarded %s queued messages for agent %s", dropped, self.name)

    def _run(self) -> None:
        while not self._stopping.is_set():
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                topic, message = item
                self._agent.callback(topic, message)
            except Exception:
                logger.exception("Error in agent %s handling %s", self.name, item[0])
            finally:
                self._queue.task_done()
        self._discard_pending()
