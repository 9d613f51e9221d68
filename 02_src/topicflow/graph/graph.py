"""Computation graph derived from a TopicRegistry."""

from typing import Iterable, Iterator

from ..logging_config import get_logger
from ..topics import ITopicRegistry
from .node import AGENT, TOPIC, Node, _find_cycle

logger = get_logger(__name__)


class Graph:
    """
    Directed snapshot of topics and agents.

    Topic nodes are named "T<topic>", agent nodes "A<agent>". Edges run
    topic -> subscriber and publisher -> topic, so every agent sits as a hub
    between its input and output topics.
    """

    def __init__(self, nodes: Iterable[Node] = ()):
        self._nodes: list[Node] = list(nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self.edges())})"

    @classmethod
    def from_registry(cls, registry: ITopicRegistry) -> "Graph":
        graph = cls()
        graph.create_from_topics(registry)
        return graph

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes)

    def size(self) -> int:
        return len(self._nodes)

    def add(self, node: Node) -> None:
        self._nodes.append(node)

    def create_from_topics(self, registry: ITopicRegistry) -> None:
        """Rebuild this graph from the registry's current topics."""
        nodes: list[Node] = []
        agent_nodes: dict[int, Node] = {}

        def agent_node(agent) -> Node:
            node = agent_nodes.get(id(agent))
            if node is None:
                node = Node("A" + agent.name, AGENT)
                agent_nodes[id(agent)] = node
                nodes.append(node)
            return node

        for topic in registry.all():
            topic_node = Node("T" + topic.name, TOPIC)
            nodes.append(topic_node)

            for agent in topic.subscribers:
                topic_node.add_edge(agent_node(agent))
            for agent in topic.publishers:
                agent_node(agent).add_edge(topic_node)

        self._nodes = nodes
        logger.debug("Built graph with %s nodes", len(nodes))

    def find(self, name: str) -> Node | None:
        """First node with the given name."""
        for node in self._nodes:
            if node.name == name:
                return node
        return None

    def edges(self) -> list[tuple[str, str]]:
        """All edges as (source name, target name) pairs."""
        return [(node.name, target.name) for node in self._nodes for target in node.edges]

    def has_cycles(self) -> bool:
        """Whether any directed cycle exists in the graph."""
        return _find_cycle(self._nodes, {})

    def to_dict(self) -> dict:
        """Plain representation for logging."""
        return {
            "nodes": [{"name": node.name, "kind": node.kind} for node in self._nodes],
            "edges": [list(edge) for edge in self.edges()],
            "has_cycles": self.has_cycles(),
        }
