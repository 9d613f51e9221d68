"""Operator agents: recompute and republish whenever an operand arrives."""

import math
import operator as _op
from typing import Callable

from ..logging_config import get_logger
from ..models import Message
from ..topics import ITopicRegistry

BinaryOperator = Callable[[float, float], float]
UnaryOperator = Callable[[float], float]


def _divide(left: float, right: float) -> float:
    """IEEE division: x/0 is +-inf, 0/0 is NaN."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


BINARY_OPERATORS: dict[str, BinaryOperator] = {
    "plus": _op.add,
    "minus": _op.sub,
    "mul": _op.mul,
    "div": _divide,
}

UNARY_OPERATORS: dict[str, UnaryOperator] = {
    "inc": lambda x: x + 1,
    "dec": lambda x: x - 1,
    "neg": _op.neg,
}


class BinOpAgent:
    """
    Agent applying a binary operator to the latest values of two input topics.

    Nothing is published until both inputs have been seen at least once;
    after that every arrival on either input republishes operator(left, right)
    to the output topic.
    """

    def __init__(
        self,
        name: str,
        registry: ITopicRegistry,
        left: str,
        right: str,
        output: str,
        operator: BinaryOperator,
    ):
        self._name = name
        self._left_topic = registry.get_or_create(left)
        self._right_topic = registry.get_or_create(right)
        self._output_topic = registry.get_or_create(output)
        self._operator = operator
        self._left: float | None = None
        self._right: float | None = None
        self._closed = False
        self._logger = get_logger(__name__, agent=name)

        self._left_topic.subscribe(self)
        self._right_topic.subscribe(self)
        self._output_topic.add_publisher(self)

    def __repr__(self) -> str:
        return (
            f"BinOpAgent({self._name!r}, {self._left_topic.name!r}, "
            f"{self._right_topic.name!r} -> {self._output_topic.name!r})"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def operands(self) -> tuple[float | None, float | None]:
        """Last seen (left, right) values, None while unset."""
        return self._left, self._right

    def callback(self, topic: str, message: Message) -> None:
        """Update the matching operand and republish once both are known."""
        matched = False
        if topic == self._left_topic.name:
            self._left = message.value
            matched = True
        if topic == self._right_topic.name:
            self._right = message.value
            matched = True
        if not matched:
            return

        left, right = self._left, self._right
        if left is None or right is None:
            return

        result = self._operator(left, right)
        self._logger.debug("%s(%s, %s) = %s", self._name, left, right, result)
        self._output_topic.publish(Message.from_number(result))

    def reset(self) -> None:
        self._left = None
        self._right = None

    def close(self) -> None:
        """Detach from the input and output topics."""
        if self._closed:
            return
        self._closed = True
        self._left_topic.unsubscribe(self)
        self._right_topic.unsubscribe(self)
        self._output_topic.remove_publisher(self)


class UnaryOpAgent:
    """Agent applying a unary operator to every value of one input topic."""

    def __init__(
        self,
        name: str,
        registry: ITopicRegistry,
        input: str,
        output: str,
        operator: UnaryOperator,
    ):
        self._name = name
        self._input_topic = registry.get_or_create(input)
        self._output_topic = registry.get_or_create(output)
        self._operator = operator
        self._value: float | None = None
        self._closed = False
        self._logger = get_logger(__name__, agent=name)

        self._input_topic.subscribe(self)
        self._output_topic.add_publisher(self)

    def __repr__(self) -> str:
        return (
            f"UnaryOpAgent({self._name!r}, {self._input_topic.name!r} "
            f"-> {self._output_topic.name!r})"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def operand(self) -> float | None:
        return self._value

    def callback(self, topic: str, message: Message) -> None:
        if topic != self._input_topic.name:
            return
        self._value = message.value
        result = self._operator(self._value)
        self._logger.debug("%s(%s) = %s", self._name, self._value, result)
        self._output_topic.publish(Message.from_number(result))

    def reset(self) -> None:
        self._value = None

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._input_topic.unsubscribe(self)
        self._output_topic.remove_publisher(self)
