"""
Notes feature: the single pure function that changes view state.
"""

from typing import Callable

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
from livenotes.features.notes.schemas import Note, NoteForm, ViewState

INITIAL_STATE = ViewState()


def _set_notes(state: ViewState, action: SetNotes) -> ViewState:
    return state.model_copy(update={"notes": tuple(action.notes), "loading": False})


def _error(state: ViewState, action: Error) -> ViewState:
    return state.model_copy(update={"loading": False, "error": True})


def _add_note(state: ViewState, action: AddNote) -> ViewState:
    return state.model_copy(update={"notes": (action.note, *state.notes)})


def _reset_form(state: ViewState, action: ResetForm) -> ViewState:
    return state.model_copy(update={"form": NoteForm()})


def _set_input(state: ViewState, action: SetInput) -> ViewState:
    form = state.form.model_copy(update={action.name: action.value})
    return state.model_copy(update={"form": form})


def _delete_note(state: ViewState, action: DeleteNote) -> ViewState:
    notes = tuple(note for note in state.notes if note.id != action.note_id)
    return state.model_copy(update={"notes": notes})


def _update_note(state: ViewState, action: UpdateNote) -> ViewState:
    target = action.note
    return _map_note(
        state,
        target.id,
        lambda note: note.model_copy(update={"name": target.name, "completed": target.completed}),
    )


def _add_exclamation(state: ViewState, action: AddExclamation) -> ViewState:
    return _map_note(state, action.note_id, lambda note: note.model_copy(update={"name": add_exclamation(note.name)}))


def _remove_exclamation(state: ViewState, action: RemoveExclamation) -> ViewState:
    return _map_note(state, action.note_id, lambda note: note.model_copy(update={"name": remove_exclamation(note.name)}))


def _map_note(state: ViewState, note_id: str, change: Callable[[Note], Note]) -> ViewState:
    notes = tuple(change(note) if note.id == note_id else note for note in state.notes)
    return state.model_copy(update={"notes": notes})


def add_exclamation(name: str) -> str:
    return name + "!"


def remove_exclamation(name: str) -> str:
    """Drop one trailing "!" (names without one are returned as-is)."""
    return name[:-1] if name.endswith("!") else name


# Every variant of Action must have an entry here.
_HANDLERS: dict[type, Callable[[ViewState, Action], ViewState]] = {
    SetNotes: _set_notes,
    Error: _error,
    AddNote: _add_note,
    ResetForm: _reset_form,
    SetInput: _set_input,
    DeleteNote: _delete_note,
    UpdateNote: _update_note,
    AddExclamation: _add_exclamation,
    RemoveExclamation: _remove_exclamation,
}


def reduce(state: ViewState, action: Action) -> ViewState:
    """Return the state after applying action. Unknown actions change nothing."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)
