"""
Unit tests for SubscriptionFeed (producer side of the note event stream).
"""

import asyncio
import json

import httpx

from livenotes.core.events import EventStream
from livenotes.core.exceptions import GraphQLRequestError
from livenotes.core.graphql_client import GraphQLClient
from livenotes.features.notes.feed import SubscriptionFeed
from livenotes.features.notes.schemas import NoteEvent, NoteEventKind
from livenotes.features.notes.service import NotesService

NOTE = {"id": "n1", "clientId": "c1", "name": "A", "description": "B", "completed": False}


class ScriptedService:
    """subscribe() replays a fixed payload list per kind, then optionally fails."""

    def __init__(self, payloads: dict, fail_after: set | None = None, block: bool = False):
        self.payloads = payloads
        self.fail_after = fail_after or set()
        self.block = block

    async def subscribe(self, kind):
        for payload in self.payloads.get(kind, []):
            yield payload
        if kind in self.fail_after:
            raise GraphQLRequestError("GraphQL subscription dropped", detail="reset by peer")
        if self.block:
            await asyncio.Event().wait()


def _record(stream: EventStream, kind) -> list:
    seen = []
    stream.subscribe(kind, seen.append)
    return seen


class TestPump:
    def test_publishes_parsed_events(self):
        stream = EventStream()
        seen = _record(stream, NoteEventKind.CREATE)
        service = ScriptedService({NoteEventKind.CREATE: [NOTE, {**NOTE, "id": "n2"}]})

        count = asyncio.run(SubscriptionFeed(service, stream, (NoteEventKind.CREATE,)).pump(NoteEventKind.CREATE))

        assert count == 2
        assert all(isinstance(event, NoteEvent) for event in seen)
        assert [event.note.id for event in seen] == ["n1", "n2"]
        assert seen[0].kind == NoteEventKind.CREATE

    def test_update_event_with_only_id_is_skipped(self):
        stream = EventStream()
        seen = _record(stream, NoteEventKind.UPDATE)
        service = ScriptedService({NoteEventKind.UPDATE: [{"id": "n1"}, {**NOTE, "completed": True}]})

        count = asyncio.run(SubscriptionFeed(service, stream, (NoteEventKind.UPDATE,)).pump(NoteEventKind.UPDATE))

        assert count == 1
        assert seen[0].note.completed is True

    def test_failure_ends_pump_without_raising(self):
        stream = EventStream()
        seen = _record(stream, NoteEventKind.DELETE)
        service = ScriptedService({NoteEventKind.DELETE: [NOTE]}, fail_after={NoteEventKind.DELETE})

        count = asyncio.run(SubscriptionFeed(service, stream, (NoteEventKind.DELETE,)).pump(NoteEventKind.DELETE))

        assert count == 1
        assert len(seen) == 1


class TestLifecycle:
    def test_start_and_stop(self):
        stream = EventStream()
        seen = _record(stream, NoteEventKind.CREATE)
        kinds = (NoteEventKind.CREATE, NoteEventKind.DELETE)
        service = ScriptedService({NoteEventKind.CREATE: [NOTE]}, block=True)

        async def scenario():
            feed = SubscriptionFeed(service, stream, kinds)
            feed.start()
            await asyncio.sleep(0.05)
            running = feed.running
            await feed.stop()
            return running, feed.running

        running_before, running_after = asyncio.run(scenario())

        assert running_before is True
        assert running_after is False
        assert [event.note.id for event in seen] == ["n1"]


class TestPumpOverHttp:
    def test_bad_events_skipped_and_stream_kept_alive(self):
        def handler(request):
            body = (
                b"event: next\ndata: null\n\n"
                b"event: next\ndata: {\"errors\": [{\"message\": \"boom\"}]}\n\n"
                b"event: next\ndata: {\"data\": {\"onCreateNote\": [1]}}\n\n"
                b"event: next\ndata: " + json.dumps({"data": {"onCreateNote": NOTE}}).encode() + b"\n\n"
                b"event: complete\ndata:\n\n"
            )
            return httpx.Response(200, content=body)

        client = GraphQLClient(url="https://api.example.com/graphql", timeout=5, transport=httpx.MockTransport(handler))
        stream = EventStream()
        seen = _record(stream, NoteEventKind.CREATE)
        feed = SubscriptionFeed(NotesService(client), stream, (NoteEventKind.CREATE,))

        count = asyncio.run(feed.pump(NoteEventKind.CREATE))

        assert count == 1
        assert [event.note.id for event in seen] == ["n1"]
