"""Core data models for topicflow."""

from .message import Message

__all__ = ["Message"]
