"""
Unit tests for the in-process event stream.
"""

from livenotes.core.events import EventStream


class TestEventStream:
    def test_delivers_to_matching_kind_only(self):
        stream = EventStream()
        created, deleted = [], []
        stream.subscribe("create", created.append)
        stream.subscribe("delete", deleted.append)

        assert stream.publish("create", 1) == 1
        assert created == [1]
        assert deleted == []

    def test_publish_order_and_subscription_order(self):
        stream = EventStream()
        seen = []
        stream.subscribe("create", lambda p: seen.append(("first", p)))
        stream.subscribe("create", lambda p: seen.append(("second", p)))

        stream.publish("create", "a")
        stream.publish("create", "b")

        assert seen == [("first", "a"), ("second", "a"), ("first", "b"), ("second", "b")]

    def test_unsubscribe_stops_delivery(self):
        stream = EventStream()
        seen = []
        subscription = stream.subscribe("update", seen.append)
        subscription.unsubscribe()

        assert stream.publish("update", 1) == 0
        assert seen == []
        assert subscription.active is False
        assert stream.subscriber_count("update") == 0

    def test_unsubscribe_twice_is_safe(self):
        stream = EventStream()
        subscription = stream.subscribe("update", lambda p: None)
        subscription.unsubscribe()
        subscription.unsubscribe()
        assert stream.subscriber_count("update") == 0

    def test_failing_handler_does_not_block_others(self):
        stream = EventStream()
        seen = []

        def broken(payload):
            raise RuntimeError("boom")

        stream.subscribe("create", broken)
        stream.subscribe("create", seen.append)

        assert stream.publish("create", 7) == 1
        assert seen == [7]

    def test_handler_may_unsubscribe_during_delivery(self):
        stream = EventStream()
        seen = []
        holder = {}

        def once(payload):
            seen.append(payload)
            holder["sub"].unsubscribe()

        holder["sub"] = stream.subscribe("create", once)
        stream.publish("create", 1)
        stream.publish("create", 2)
        assert seen == [1]

    def test_publish_without_subscribers(self):
        assert EventStream().publish("delete", None) == 0
