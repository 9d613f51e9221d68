"""Message data model."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone


def _parse_float(text: str) -> float:
    """Parse text as a float, NaN when it is not numeric."""
    # float() accepts digit grouping ("1_000"); plain decimal text only
    if "_" in text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


@dataclass(frozen=True)
class Message:
    """
    Immutable unit of data carried on a Topic.

    The text view is canonical: bytes and numeric views are derived from it
    once, at construction, together with the creation timestamp.
    """

    text: str
    data: bytes = field(init=False, repr=False)
    value: float = field(init=False)
    created_at: datetime = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if self.text is None:
            raise ValueError("Message text cannot be None")
        if not isinstance(self.text, str):
            raise TypeError(f"Message text must be str, got {type(self.text).__name__}")

        object.__setattr__(self, "data", self.text.encode("utf-8"))
        object.__setattr__(self, "value", _parse_float(self.text))
        object.__setattr__(self, "created_at", datetime.now(timezone.utc))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Message":
        """Create a message from raw bytes (UTF-8, undecodable bytes replaced)."""
        if data is None:
            raise ValueError("Message data cannot be None")
        return cls(bytes(data).decode("utf-8", errors="replace"))

    @classmethod
    def from_number(cls, value: float) -> "Message":
        """Create a message from a number; text is the float repr (7 -> "7.0")."""
        return cls(str(float(value)))

    @classmethod
    def of(cls, payload: "str | bytes | float | Message") -> "Message":
        """Create a message from whatever payload type is given."""
        if isinstance(payload, Message):
            return payload
        if isinstance(payload, (bytes, bytearray)):
            return cls.from_bytes(payload)
        if isinstance(payload, (int, float)) and not isinstance(payload, bool):
            return cls.from_number(payload)
        return cls(payload)

    @property
    def is_numeric(self) -> bool:
        """Whether the text parsed as a number."""
        return not math.isnan(self.value)
