"""Tests for Topic."""

import threading

import pytest

from topicflow.models import Message
from topicflow.topics import Topic


class TestTopicCreate:
    """Tests for Topic construction."""

    def test_name(self):
        """Test that the name is kept."""
        assert Topic("A").name == "A"

    def test_empty_name_rejected(self):
        """Test that an empty name raises ValueError."""
        with pytest.raises(ValueError):
            Topic("")

    def test_none_name_rejected(self):
        """Test that a None name raises ValueError."""
        with pytest.raises(ValueError):
            Topic(None)  # type: ignore

    def test_no_last_message(self):
        """Test that a new topic has no last message."""
        topic = Topic("A")
        assert topic.get_last_message() is None
        assert topic.last_message is None


class TestTopicSubscribe:
    """Tests for subscribe/unsubscribe."""

    def test_subscribe_twice_keeps_one(self, make_agent):
        """Test that subscribe is idempotent."""
        topic = Topic("A")
        agent = make_agent("a1")
        topic.subscribe(agent)
        topic.subscribe(agent)
        assert topic.subscribers == (agent,)

    def test_subscribe_keeps_order(self, make_agent):
        """Test that subscribers keep insertion order."""
        topic = Topic("A")
        a1, a2, a3 = make_agent("a1"), make_agent("a2"), make_agent("a3")
        for agent in (a2, a1, a3):
            topic.subscribe(agent)
        assert topic.subscribers == (a2, a1, a3)

    def test_identity_not_name(self, make_agent):
        """Test that two agents with the same name are both kept."""
        topic = Topic("A")
        first, second = make_agent("same"), make_agent("same")
        topic.subscribe(first)
        topic.subscribe(second)
        assert len(topic.subscribers) == 2

    def test_unsubscribe(self, make_agent):
        """Test removing a subscriber."""
        topic = Topic("A")
        agent = make_agent("a1")
        topic.subscribe(agent)
        topic.unsubscribe(agent)
        assert topic.subscribers == ()

    def test_unsubscribe_unknown_is_noop(self, make_agent):
        """Test that unsubscribing a non-subscriber does nothing."""
        topic = Topic("A")
        a1 = make_agent("a1")
        topic.subscribe(a1)
        topic.unsubscribe(make_agent("a2"))
        assert topic.subscribers == (a1,)


class TestTopicPublishers:
    """Tests for publisher bookkeeping."""

    def test_add_publisher_idempotent(self, make_agent):
        """Test that add_publisher ignores duplicates."""
        topic = Topic("A")
        agent = make_agent("p")
        topic.add_publisher(agent)
        topic.add_publisher(agent)
        assert topic.publishers == (agent,)

    def test_remove_publisher(self, make_agent):
        """Test removing a publisher, twice."""
        topic = Topic("A")
        agent = make_agent("p")
        topic.add_publisher(agent)
        topic.remove_publisher(agent)
        topic.remove_publisher(agent)
        assert topic.publishers == ()

    def test_publisher_gets_no_delivery(self, make_agent):
        """Test that declared publishers are not called on publish."""
        topic = Topic("A")
        agent = make_agent("p")
        topic.add_publisher(agent)
        topic.publish(Message("1"))
        assert agent.calls == []


class TestTopicPublish:
    """Tests for publish fan-out."""

    def test_publish_in_order(self, make_agent):
        """Test that subscribers are called in order with (topic, message)."""
        topic = Topic("A")
        a1, a2 = make_agent("a1"), make_agent("a2")
        topic.subscribe(a1)
        topic.subscribe(a2)

        msg = Message("5")
        topic.publish(msg)

        assert make_agent.calls == [("a1", "A", msg), ("a2", "A", msg)]
        assert topic.get_last_message() is msg

    def test_publish_without_subscribers(self):
        """Test that publishing with no subscribers only records the message."""
        topic = Topic("A")
        msg = Message("x")
        topic.publish(msg)
        assert topic.last_message is msg

    def test_last_message_replaced(self):
        """Test that last_message follows the latest publish."""
        topic = Topic("A")
        topic.publish(Message("1"))
        second = Message("2")
        topic.publish(second)
        assert topic.last_message is second

    def test_failing_callback_does_not_stop_fanout(self, make_agent):
        """Test that an error in one subscriber does not affect the others."""
        topic = Topic("A")

        def fail(topic_name, message):
            raise RuntimeError("Test error")

        failing = make_agent("failing", on_message=fail)
        normal = make_agent("normal")
        topic.subscribe(failing)
        topic.subscribe(normal)

        topic.publish(Message("1"))

        assert [call[0] for call in make_agent.calls] == ["failing", "normal"]

    def test_unsubscribe_during_fanout(self, make_agent):
        """Test that mutation inside a callback does not affect the current publish."""
        topic = Topic("A")
        a2 = make_agent("a2")
        a3 = make_agent("a3")
        a1 = make_agent("a1", on_message=lambda t, m: (topic.unsubscribe(a2), topic.subscribe(a3)))
        topic.subscribe(a1)
        topic.subscribe(a2)

        topic.publish(Message("1"))
        assert [call[0] for call in make_agent.calls] == ["a1", "a2"]

        make_agent.calls.clear()
        topic.publish(Message("2"))
        assert [call[0] for call in make_agent.calls] == ["a1", "a3"]

    def test_reentrant_publish_same_topic(self, make_agent):
        """Test that a callback may publish to its own topic without deadlock."""
        topic = Topic("A")
        depth = []

        def republish(topic_name, message):
            if len(depth) < 3:
                depth.append(message.value)
                topic.publish(Message.from_number(message.value + 1))

        topic.subscribe(make_agent("loop", on_message=republish))
        topic.publish(Message("0"))

        assert depth == [0.0, 1.0, 2.0]
        assert topic.last_message.value == 3.0


class TestTopicConcurrency:
    """Tests for concurrent subscribe/unsubscribe/publish."""

    def test_concurrent_subscribe_no_lost_updates(self, make_agent):
        """Test that concurrent subscribes are all kept while publishing."""
        topic = Topic("A")
        agents = [make_agent(f"a{i}") for i in range(200)]
        stop = threading.Event()

        def publisher():
            while not stop.is_set():
                topic.publish(Message("1"))

        def subscriber(chunk):
            for agent in chunk:
                topic.subscribe(agent)

        pub_thread = threading.Thread(target=publisher)
        pub_thread.start()
        threads = [
            threading.Thread(target=subscriber, args=(agents[i::8],)) for i in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        stop.set()
        pub_thread.join()

        assert len(topic.subscribers) == 200
        assert set(map(id, topic.subscribers)) == set(map(id, agents))

    def test_concurrent_subscribe_unsubscribe(self, make_agent):
        """Test that interleaved subscribe/unsubscribe leaves the expected set."""
        topic = Topic("A")
        keep = [make_agent(f"keep{i}") for i in range(50)]
        churn = [make_agent(f"churn{i}") for i in range(50)]
        for agent in churn:
            topic.subscribe(agent)

        def add():
            for agent in keep:
                topic.subscribe(agent)
                topic.publish(Message("1"))

        def remove():
            for agent in churn:
                topic.unsubscribe(agent)
                topic.publish(Message("2"))

        threads = [threading.Thread(target=add), threading.Thread(target=remove)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert set(map(id, topic.subscribers)) == set(map(id, keep))
