"""Agent capability shared by everything that reacts to Topics."""

from typing import Protocol, runtime_checkable

from ..models import Message


@runtime_checkable
class IAgent(Protocol):
    """A named, resettable, closeable unit of computation."""

    @property
    def name(self) -> str:
        """Agent name."""
        ...

    def callback(self, topic: str, message: Message) -> None:
        """Handle a Message published on a subscribed Topic."""
        ...

    def reset(self) -> None:
        """Clear accumulated state back to the initial condition."""
        ...

    def close(self) -> None:
        """Release resources. Idempotent."""
        ...
