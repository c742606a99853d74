"""
Notes feature: NoteListController.

Owns the view state of the note list, turns user actions into reducer
actions plus GraphQL mutations, and applies server-pushed events.

Optimistic versions dispatch the local action first and then call the API;
the round-trip version waits for the API and dispatches what it returned.
Remote failures are logged only: no retry and no rollback.
"""

import logging
import uuid
from typing import Awaitable, Callable

from pydantic import ValidationError

from livenotes.core.events import EventStream, Subscription
from livenotes.core.exceptions import (
    GraphQLRequestError,
    NoteNotFoundError,
    NoteValidationError,
    UnsupportedActionError,
)
from livenotes.features.notes.actions import (
    Action,
    AddExclamation,
    AddNote,
    DeleteNote,
    Error,
    RemoveExclamation,
    ResetForm,
    SetInput,
    SetNotes,
    UpdateNote,
)
from livenotes.features.notes.reducer import INITIAL_STATE, add_exclamation, reduce, remove_exclamation
from livenotes.features.notes.schemas import (
    ControllerVersion,
    Note,
    NoteEvent,
    NoteEventKind,
    ViewState,
)
from livenotes.features.notes.service import NotesService

logger = logging.getLogger(__name__)

_REMOTE_ERRORS = (GraphQLRequestError, ValidationError, KeyError)


class NoteListController:
    """View state + remote operations + live updates for one session."""

    def __init__(
        self,
        service: NotesService,
        stream: EventStream,
        client_id: str,
        version: ControllerVersion = ControllerVersion.LIVE,
        id_factory: Callable[[], str] | None = None,
    ):
        self.service = service
        self.stream = stream
        self.client_id = client_id
        self.version = version
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))
        self.state: ViewState = INITIAL_STATE
        self._subscriptions: list[Subscription] = []

    # ── State ────────────────────────────────────────────

    def dispatch(self, action: Action) -> ViewState:
        self.state = reduce(self.state, action)
        return self.state

    def set_input(self, name: str, value: str) -> ViewState:
        return self.dispatch(SetInput(name=name, value=value))

    def get_note(self, note_id: str) -> Note:
        note = self.state.find(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note

    # ── Lifecycle ────────────────────────────────────────

    @property
    def mounted(self) -> bool:
        return bool(self._subscriptions)

    async def mount(self) -> None:
        """Subscribe to the version's event kinds, then load the list."""
        if not self.mounted:
            handlers = {
                NoteEventKind.CREATE: self._on_create,
                NoteEventKind.DELETE: self._on_delete,
                NoteEventKind.UPDATE: self._on_update,
            }
            for kind in self.version.subscriptions:
                self._subscriptions.append(self.stream.subscribe(kind, handlers[kind]))
        await self.fetch_notes()

    def unmount(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()

    # ── Remote operations ────────────────────────────────

    async def fetch_notes(self) -> None:
        try:
            notes = await self.service.list_notes()
        except _REMOTE_ERRORS as e:
            logger.error(f"error fetching notes: {e}")
            self.dispatch(Error())
            return
        self.dispatch(SetNotes(notes=tuple(notes)))

    async def create_note(self) -> Note:
        """Create a note from the form contents.

        Returns the server's note, or the locally built one if the mutation
        failed. In that case the note is unsaved; with round_trip it is not
        in the list either.

        Raises:
            NoteValidationError: If name or description is empty. Nothing is
                dispatched and the API is not called.
        """
        form = self.state.form
        if not form.name or not form.description:
            logger.warning("Refusing to create a note without name and description")
            raise NoteValidationError()

        note = Note(
            id=self._new_id(),
            client_id=self.client_id,
            name=form.name,
            description=form.description,
            completed=False,
        )

        if self.version.optimistic:
            self.dispatch(AddNote(note=note))
        self.dispatch(ResetForm())

        try:
            created = await self.service.create_note(note)
        except _REMOTE_ERRORS as e:
            logger.error(f"error creating note {note.id}: {e}")
            return note

        logger.info(f"successfully created note {created.id}")
        if not self.version.optimistic and self.state.find(created.id) is None:
            self.dispatch(AddNote(note=created))
        return created

    async def delete_note(self, note: Note) -> Note | None:
        self._require("delete")
        return await self._mutate(
            DeleteNote(note_id=note.id),
            lambda: self.service.delete_note(note.id),
            f"successfully deleted note {note.id}",
        )

    async def update_note(self, note: Note) -> Note | None:
        """Toggle the completed flag of a note."""
        self._require("toggle")
        completed = not note.completed
        return await self._mutate(
            UpdateNote(note=note.model_copy(update={"completed": completed})),
            lambda: self.service.update_note(note.id, {"completed": completed}),
            f"successfully updated note {note.id}",
            confirm=lambda updated: UpdateNote(note=updated),
        )

    async def add_exclamation_to_name(self, note: Note) -> Note | None:
        self._require("exclaim")
        name = add_exclamation(note.name)
        return await self._mutate(
            AddExclamation(note_id=note.id),
            lambda: self.service.update_note(note.id, {"name": name}),
            f"successfully added a ! to the name of note {note.id}",
            confirm=lambda updated: UpdateNote(note=updated),
        )

    async def remove_exclamation_from_name(self, note: Note) -> Note | None:
        self._require("unexclaim")
        name = remove_exclamation(note.name)
        if name == note.name:
            logger.info(f"Note {note.id} has no trailing ! to remove")
            return None
        return await self._mutate(
            RemoveExclamation(note_id=note.id),
            lambda: self.service.update_note(note.id, {"name": name}),
            f"successfully removed a ! from the name of note {note.id}",
            confirm=lambda updated: UpdateNote(note=updated),
        )

    async def _mutate(
        self,
        local: Action,
        remote: Callable[[], Awaitable[Note]],
        success_message: str,
        confirm: Callable[[Note], Action] | None = None,
    ) -> Note | None:
        if self.version.optimistic:
            self.dispatch(local)

        try:
            result = await remote()
        except _REMOTE_ERRORS as e:
            logger.error(f"{type(local).__name__} failed: {e}")
            return None

        logger.info(success_message)
        if not self.version.optimistic:
            self.dispatch(confirm(result) if confirm else local)
        return result

    def _require(self, action: str) -> None:
        if action not in self.version.actions:
            raise UnsupportedActionError(action, self.version.value)

    # ── Event handlers ───────────────────────────────────

    def _on_create(self, event: NoteEvent) -> None:
        if self.state.find(event.note.id) is not None:
            origin = "own" if event.note.client_id == self.client_id else "repeated"
            logger.debug(f"Ignoring {origin} create event for note {event.note.id}")
            return
        self.dispatch(AddNote(note=event.note))

    def _on_delete(self, event: NoteEvent) -> None:
        self.dispatch(DeleteNote(note_id=event.note.id))

    def _on_update(self, event: NoteEvent) -> None:
        self.dispatch(UpdateNote(note=event.note))
