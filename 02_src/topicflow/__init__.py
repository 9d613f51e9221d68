"""topicflow: in-process publish/subscribe computation graph."""

from .agents import (
    IAgent,
    BinOpAgent,
    ParallelAgent,
    SinkAgent,
    SourceAgent,
    UnaryOpAgent,
    register_agent_type,
)
from .app import Application, CycleError, IApplication
from .configs import ConfigError, GenericConfig, IConfig, MathExampleConfig
from .graph import Graph, Node
from .models import Message
from .topics import ITopicRegistry, Topic, TopicRegistry

__all__ = [
    # Application
    "Application",
    "IApplication",
    "CycleError",
    # Models
    "Message",
    # Components
    "Topic",
    "ITopicRegistry",
    "TopicRegistry",
    "Graph",
    "Node",
    # Agents
    "IAgent",
    "BinOpAgent",
    "UnaryOpAgent",
    "ParallelAgent",
    "SinkAgent",
    "SourceAgent",
    "register_agent_type",
    # Configuration
    "IConfig",
    "ConfigError",
    "GenericConfig",
    "MathExampleConfig",
]
