"""
In-process event stream used to fan out server-pushed events.

DELIVERY:
  - publish() delivers synchronously, in publish order.
  - Handlers of one kind run in the order they subscribed.
  - A failing handler is logged; the remaining handlers still run.
  - Producers may redeliver (at-least-once), so consumers must tolerate
    duplicates.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Hashable

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class Subscription:
    """Handle returned by EventStream.subscribe()."""

    def __init__(self, stream: "EventStream", kind: Hashable, handler: Handler):
        self._stream = stream
        self.kind = kind
        self.handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        if not self.active:
            return
        self.active = False
        self._stream._remove(self)


class EventStream:
    """Typed publish/subscribe channel keyed by event kind."""

    def __init__(self):
        self._subscriptions: dict[Hashable, list[Subscription]] = defaultdict(list)

    def subscribe(self, kind: Hashable, handler: Handler) -> Subscription:
        subscription = Subscription(self, kind, handler)
        self._subscriptions[kind].append(subscription)
        return subscription

    def publish(self, kind: Hashable, payload: Any) -> int:
        """Deliver payload to every handler of kind. Returns how many ran."""
        delivered = 0
        # Copy: handlers may unsubscribe while we iterate.
        for subscription in list(self._subscriptions.get(kind, ())):
            if not subscription.active:
                continue
            try:
                subscription.handler(payload)
                delivered += 1
            except Exception as e:
                logger.error(f"Event handler for '{kind}' failed: {e}", exc_info=True)
        return delivered

    def subscriber_count(self, kind: Hashable) -> int:
        return len(self._subscriptions.get(kind, ()))

    def _remove(self, subscription: Subscription) -> None:
        handlers = self._subscriptions.get(subscription.kind)
        if handlers and subscription in handlers:
            handlers.remove(subscription)
