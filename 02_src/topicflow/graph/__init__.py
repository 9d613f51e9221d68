"""Computation graph module."""

from .graph import Graph
from .node import AGENT, TOPIC, Node

__all__ = ["AGENT", "Graph", "Node", "TOPIC"]
