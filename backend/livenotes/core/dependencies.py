"""
FastAPI dependency injection functions.
"""

from fastapi import HTTPException, Request, status

from livenotes.features.notes.controller import NoteListController


def get_controller(request: Request) -> NoteListController:
    """Dependency: the session's note list controller (set up in lifespan)."""
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notes controller is not ready",
        )
    return controller
