"""
Notes feature: HTTP surface of the note list (page + user actions).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from livenotes.core.dependencies import get_controller
from livenotes.core.exceptions import (
    NoteNotFoundError,
    NoteValidationError,
    UnsupportedActionError,
    app_error_to_http,
)
from livenotes.features.notes.controller import NoteListController
from livenotes.features.notes.schemas import Note, NoteCreateRequest, SetInputRequest
from livenotes.features.notes.view import render_page

router = APIRouter()


def _note_or_404(controller: NoteListController, note_id: str) -> Note:
    try:
        return controller.get_note(note_id)
    except NoteNotFoundError as e:
        raise app_error_to_http(e, status_code=404)


def _dump(note: Note | None) -> dict | None:
    return note.model_dump(by_alias=True) if note else None


@router.get("/", response_class=HTMLResponse)
async def list_page(controller: NoteListController = Depends(get_controller)):
    """Render the note list page."""
    return render_page(controller.state, controller.version)


@router.get("/state")
async def get_state(controller: NoteListController = Depends(get_controller)):
    """Current view state as JSON."""
    return {"data": controller.state.model_dump(by_alias=True)}


@router.post("/notes/form")
async def set_input(
    data: SetInputRequest,
    controller: NoteListController = Depends(get_controller),
):
    """Change one form field."""
    state = controller.set_input(data.name, data.value)
    return {"data": state.form.model_dump()}


@router.post("/notes")
async def create_note(
    data: NoteCreateRequest | None = None,
    controller: NoteListController = Depends(get_controller),
):
    """Create a note from the form (fields in the body overwrite it first)."""
    if data is not None:
        if data.name is not None:
            controller.set_input("name", data.name)
        if data.description is not None:
            controller.set_input("description", data.description)

    try:
        note = await controller.create_note()
    except NoteValidationError as e:
        raise app_error_to_http(e, status_code=400)
    return {"data": _dump(note)}


async def _run(controller: NoteListController, operation, note_id: str) -> dict:
    note = _note_or_404(controller, note_id)
    try:
        result = await operation(note)
    except UnsupportedActionError as e:
        raise app_error_to_http(e, status_code=400)
    return {"data": _dump(result)}


@router.post("/notes/{note_id}/delete")
async def delete_note(note_id: str, controller: NoteListController = Depends(get_controller)):
    return await _run(controller, controller.delete_note, note_id)


@router.post("/notes/{note_id}/toggle")
async def toggle_note(note_id: str, controller: NoteListController = Depends(get_controller)):
    """Mark a note complete / incomplete."""
    return await _run(controller, controller.update_note, note_id)


@router.post("/notes/{note_id}/exclaim")
async def add_exclamation(note_id: str, controller: NoteListController = Depends(get_controller)):
    return await _run(controller, controller.add_exclamation_to_name, note_id)


@router.post("/notes/{note_id}/unexclaim")
async def remove_exclamation(note_id: str, controller: NoteListController = Depends(get_controller)):
    return await _run(controller, controller.remove_exclamation_from_name, note_id)
