"""Shared fixtures: an in-memory stand-in for NotesService."""

import pytest

from livenotes.core.events import EventStream
from livenotes.core.exceptions import GraphQLRequestError
from livenotes.features.notes.controller import NoteListController
from livenotes.features.notes.schemas import ControllerVersion, Note


def make_note(note_id: str, name: str = "Note", completed: bool = False, client_id: str = "other") -> Note:
    return Note(
        id=note_id,
        client_id=client_id,
        name=name,
        description=f"about {name}",
        completed=completed,
    )


class FakeNotesService:
    """Records calls; snapshots controller state when a mutation starts."""

    def __init__(self, notes: list[Note] | None = None, fail: bool = False):
        self.notes = list(notes or [])
        self.fail = fail
        self.calls: list[tuple] = []
        self.controller: NoteListController | None = None
        self.states_at_call = []

    def _enter(self, *call):
        self.calls.append(call)
        if self.controller is not None:
            self.states_at_call.append(self.controller.state)
        if self.fail:
            raise GraphQLRequestError("GraphQL API unreachable", detail="connection refused")

    def _find(self, note_id: str) -> Note:
        return next(note for note in self.notes if note.id == note_id)

    async def list_notes(self) -> list[Note]:
        self._enter("list_notes")
        return list(self.notes)

    async def create_note(self, note: Note) -> Note:
        self._enter("create_note", note)
        self.notes.insert(0, note)
        return note

    async def delete_note(self, note_id: str) -> Note:
        self._enter("delete_note", note_id)
        note = self._find(note_id)
        self.notes.remove(note)
        return note

    async def update_note(self, note_id: str, update_data: dict) -> Note:
        self._enter("update_note", note_id, update_data)
        note = self._find(note_id)
        updated = note.model_copy(update=update_data)
        self.notes[self.notes.index(note)] = updated
        return updated

    def mutation_calls(self) -> list[tuple]:
        return [call for call in self.calls if call[0] != "list_notes"]


@pytest.fixture
def stream():
    return EventStream()


@pytest.fixture
def make_controller(stream):
    """Build a controller (plus its fake service) for a given version."""

    def _make(version=ControllerVersion.LIVE, notes=None, fail=False):
        service = FakeNotesService(notes=notes, fail=fail)
        ids = iter(f"new-{i}" for i in range(1, 100))
        controller = NoteListController(
            service,
            stream,
            client_id="me",
            version=version,
            id_factory=lambda: next(ids),
        )
        service.controller = controller
        return controller, service

    return _make
