"""
Notes feature: Schemas for notes, view state and request models.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Note(BaseModel):
    """A titled, described, completable item as stored by the GraphQL API."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    client_id: str = Field(default="", alias="clientId")  # writer of the note
    name: str
    description: str
    completed: bool = False

    def to_input(self) -> dict:
        """GraphQL input object (camelCase keys)."""
        return self.model_dump(by_alias=True)


class NoteForm(BaseModel):
    """Contents of the two form inputs."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""


class ViewState(BaseModel):
    """Everything the list page renders."""
    model_config = ConfigDict(frozen=True)

    notes: tuple[Note, ...] = ()
    loading: bool = True
    error: bool = False
    form: NoteForm = NoteForm()

    @property
    def completed_count(self) -> int:
        return sum(1 for note in self.notes if note.completed)

    def find(self, note_id: str) -> Note | None:
        return next((note for note in self.notes if note.id == note_id), None)


class NoteEventKind(str, Enum):
    """Kinds of server-pushed note events."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class NoteEvent(BaseModel):
    """A server-pushed change to one note."""
    model_config = ConfigDict(frozen=True)

    kind: NoteEventKind
    note: Note


class ControllerVersion(str, Enum):
    """Incremental behaviors of the note list controller.

    round_trip: local state changes after the server answers;
                only create events are subscribed.
    optimistic: local state changes before the server answers;
                create and delete events are subscribed.
    live:       optimistic, all events subscribed, name emphasis actions
                and the error banner are enabled.
    """
    ROUND_TRIP = "round_trip"
    OPTIMISTIC = "optimistic"
    LIVE = "live"

    @property
    def optimistic(self) -> bool:
        return self is not ControllerVersion.ROUND_TRIP

    @property
    def subscriptions(self) -> tuple[NoteEventKind, ...]:
        if self is ControllerVersion.ROUND_TRIP:
            return (NoteEventKind.CREATE,)
        if self is ControllerVersion.OPTIMISTIC:
            return (NoteEventKind.CREATE, NoteEventKind.DELETE)
        return (NoteEventKind.CREATE, NoteEventKind.DELETE, NoteEventKind.UPDATE)

    @property
    def actions(self) -> tuple[str, ...]:
        if self is ControllerVersion.LIVE:
            return ("delete", "toggle", "exclaim", "unexclaim")
        return ("delete", "toggle")

    @property
    def shows_error(self) -> bool:
        return self is ControllerVersion.LIVE


# ── Requests ─────────────────────────────────────────────

class SetInputRequest(BaseModel):
    """Request to change one form field."""
    name: Literal["name", "description"]
    value: str


class NoteCreateRequest(BaseModel):
    """Request to create a note; omitted fields keep the current form values."""
    name: str | None = None
    description: str | None = None
