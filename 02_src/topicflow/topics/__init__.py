"""Topics module."""

from .registry import ITopicRegistry, TopicRegistry
from .topic import Topic

__all__ = ["ITopicRegistry", "Topic", "TopicRegistry"]
