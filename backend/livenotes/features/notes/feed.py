"""
Notes feature: Producer side of the note event stream.

One asyncio task per subscribed kind reads the GraphQL subscription and
publishes NoteEvent objects. There is no reconnect: when a stream fails or
completes, its task logs and ends.
"""

import asyncio
import logging

from pydantic import ValidationError

from livenotes.core.events import EventStream
from livenotes.core.exceptions import GraphQLRequestError
from livenotes.features.notes.schemas import Note, NoteEvent, NoteEventKind
from livenotes.features.notes.service import NotesService

logger = logging.getLogger(__name__)


class SubscriptionFeed:
    """Pumps server-pushed note events into an EventStream."""

    def __init__(
        self,
        service: NotesService,
        stream: EventStream,
        kinds: tuple[NoteEventKind, ...],
    ):
        self.service = service
        self.stream = stream
        self.kinds = kinds
        self._tasks: list[asyncio.Task] = []

    def start(self) -> None:
        for kind in self.kinds:
            task = asyncio.create_task(self.pump(kind), name=f"note-feed-{kind.value}")
            self._tasks.append(task)

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    async def pump(self, kind: NoteEventKind) -> int:
        """Publish every event of one kind until the stream ends.

        Returns the number of events published.
        """
        published = 0
        try:
            async for payload in self.service.subscribe(kind):
                try:
                    note = Note.model_validate(payload)
                except ValidationError as e:
                    # e.g. an update event that carries only an id
                    logger.warning(f"Skipping malformed {kind.value} event {payload}: {e.error_count()} error(s)")
                    continue
                self.stream.publish(kind, NoteEvent(kind=kind, note=note))
                published += 1
        except GraphQLRequestError as e:
            logger.error(f"Subscription '{kind.value}' failed: {e.message} ({e.detail})")
            return published

        logger.info(f"Subscription '{kind.value}' completed after {published} event(s)")
        return published
