"""
Notes feature: State transitions understood by the reducer.

Each action is a small immutable model tagged by a literal `type`.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from livenotes.features.notes.schemas import Note


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class SetNotes(_Action):
    type: Literal["SET_NOTES"] = "SET_NOTES"
    notes: tuple[Note, ...]


class Error(_Action):
    type: Literal["ERROR"] = "ERROR"


class AddNote(_Action):
    type: Literal["ADD_NOTE"] = "ADD_NOTE"
    note: Note


class ResetForm(_Action):
    type: Literal["RESET_FORM"] = "RESET_FORM"


class SetInput(_Action):
    type: Literal["SET_INPUT"] = "SET_INPUT"
    name: Literal["name", "description"]
    value: str


class DeleteNote(_Action):
    type: Literal["DELETE_NOTE"] = "DELETE_NOTE"
    note_id: str


class UpdateNote(_Action):
    """Replace name and completed of the note with the same id."""
    type: Literal["UPDATE_NOTE"] = "UPDATE_NOTE"
    note: Note


class AddExclamation(_Action):
    type: Literal["ADD_EXCLAMATION"] = "ADD_EXCLAMATION"
    note_id: str


class RemoveExclamation(_Action):
    type: Literal["REMOVE_EXCLAMATION"] = "REMOVE_EXCLAMATION"
    note_id: str


Action = Annotated[
    Union[
        SetNotes,
        Error,
        AddNote,
        ResetForm,
        SetInput,
        DeleteNote,
        UpdateNote,
        AddExclamation,
        RemoveExclamation,
    ],
    Field(discriminator="type"),
]

ACTION_TYPES: tuple[type[_Action], ...] = (
    SetNotes,
    Error,
    AddNote,
    ResetForm,
    SetInput,
    DeleteNote,
    UpdateNote,
    AddExclamation,
    RemoveExclamation,
)
