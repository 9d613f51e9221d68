"""Pytest configuration and fixtures."""

import sys
import threading
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class RecordingAgent:
    """Agent that records callbacks and optionally runs a hook."""

    def __init__(self, name: str, calls: list | None = None, on_message=None):
        self._name = name
        self.calls = calls if calls is not None else []
        self.on_message = on_message
        self.reset_count = 0
        self.close_count = 0
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    def callback(self, topic, message):
        with self._lock:
            self.calls.append((self._name, topic, message))
        if self.on_message:
            self.on_message(topic, message)

    def reset(self):
        self.reset_count += 1

    def close(self):
        self.close_count += 1


@pytest.fixture
def registry():
    """Create an empty TopicRegistry."""
    from topicflow.topics import TopicRegistry

    reg = TopicRegistry()
    yield reg
    reg.clear()


@pytest.fixture
def make_agent():
    """Factory for RecordingAgents sharing one call log."""
    calls: list = []

    def factory(name: str, on_message=None) -> RecordingAgent:
        return RecordingAgent(name, calls=calls, on_message=on_message)

    factory.calls = calls
    return factory


@pytest.fixture
def config_file(tmp_path):
    """Write configuration text to a temporary file and return its path."""

    def write(text: str, name: str = "test.conf") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write
