"""Graph node and cycle detection."""

from enum import Enum
from typing import Iterable

TOPIC = "topic"
AGENT = "agent"


class _Color(Enum):
    WHITE = 0  # unvisited
    GREY = 1  # on the current DFS path
    BLACK = 2  # fully explored


class Node:
    """A topic or agent vertex with ordered outgoing edges."""

    def __init__(self, name: str, kind: str = TOPIC):
        self.name = name
        self.kind = kind
        self.edges: list["Node"] = []

    def __repr__(self) -> str:
        return f"Node({self.name!r}, {self.kind}, edges={[n.name for n in self.edges]})"

    def add_edge(self, node: "Node") -> None:
        """Add an outgoing edge (duplicates are ignored)."""
        if not any(existing is node for existing in self.edges):
            self.edges.append(node)

    def has_cycles(self) -> bool:
        """Whether a cycle is reachable from this node."""
        return _find_cycle([self], {})


def _find_cycle(roots: Iterable[Node], colors: dict[int, _Color]) -> bool:
    """
    Iterative three-colour DFS from every unvisited root.

    colors is keyed by id(node) and shared across roots so each node is
    explored once. A back edge to a GREY node is a cycle; self-loops included.
    """
    for root in roots:
        if colors.get(id(root), _Color.WHITE) is not _Color.WHITE:
            continue

        colors[id(root)] = _Color.GREY
        stack = [(root, iter(root.edges))]

        while stack:
            node, children = stack[-1]
            for child in children:
                color = colors.get(id(child), _Color.WHITE)
                if color is _Color.GREY:
                    return True
                if color is _Color.WHITE:
                    colors[id(child)] = _Color.GREY
                    stack.append((child, iter(child.edges)))
                    break
            else:
                colors[id(node)] = _Color.BLACK
                stack.pop()

    return False
