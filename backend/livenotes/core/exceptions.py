"""
Custom exception classes for unified error handling.
"""

from fastapi import HTTPException


class AppBaseError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NoteValidationError(AppBaseError):
    """Raised when the note form is missing a name or a description."""
    def __init__(self, message: str = "please enter a name and description"):
        super().__init__(
            message=message,
            detail="Both the name and the description fields are required.",
        )


class NoteNotFoundError(AppBaseError):
    """Raised when an action targets a note that is not in the list."""
    def __init__(self, note_id: str):
        super().__init__(
            message=f"Note '{note_id}' not found",
            detail="The note may have been deleted by another client.",
        )


class UnsupportedActionError(AppBaseError):
    """Raised when the running controller version does not offer an action."""
    def __init__(self, action: str, version: str):
        super().__init__(
            message=f"Action '{action}' is not available",
            detail=f"Controller version '{version}' does not offer it.",
        )


class GraphQLRequestError(AppBaseError):
    """Raised when the GraphQL API is unreachable or answers with errors."""
    def __init__(self, message: str = "GraphQL request failed", detail: str | None = None):
        super().__init__(message=message, detail=detail)


# ── Utility: convert to HTTPException ────────────────────

def app_error_to_http(error: AppBaseError, status_code: int = 400) -> HTTPException:
    """Convert an AppBaseError to an HTTPException with consistent JSON body."""
    return HTTPException(
        status_code=status_code,
        detail={
            "error": error.message,
            "detail": error.detail,
            "type": type(error).__name__,
        },
    )
