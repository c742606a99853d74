"""
Notes feature: Service layer over the GraphQL notes API.
"""

from typing import AsyncIterator

from livenotes.core.graphql_client import GraphQLClient
from livenotes.features.notes import operations
from livenotes.features.notes.schemas import Note, NoteEventKind


class NotesService:
    """Remote note operations (queries, mutations, subscriptions)."""

    def __init__(self, client: GraphQLClient):
        self.client = client

    async def list_notes(self) -> list[Note]:
        """List every note known to the API."""
        data = await self.client.execute(operations.LIST_NOTES)
        listing = data.get("listNotes") or {}
        items = (listing.get("items") if isinstance(listing, dict) else None) or []
        return [Note.model_validate(item) for item in items]

    async def create_note(self, note: Note) -> Note:
        """Create a note with a client-generated id."""
        data = await self.client.execute(
            operations.CREATE_NOTE,
            {"input": note.to_input()},
        )
        return Note.model_validate(data["createNote"])

    async def delete_note(self, note_id: str) -> Note:
        data = await self.client.execute(
            operations.DELETE_NOTE,
            {"input": {"id": note_id}},
        )
        return Note.model_validate(data["deleteNote"])

    async def update_note(self, note_id: str, update_data: dict) -> Note:
        """Update the given fields (e.g. completed, name) of a note."""
        data = await self.client.execute(
            operations.UPDATE_NOTE,
            {"input": {"id": note_id, **update_data}},
        )
        return Note.model_validate(data["updateNote"])

    async def subscribe(self, kind: NoteEventKind) -> AsyncIterator[dict]:
        """Yield the raw note payload of every pushed event of one kind."""
        document, field = operations.SUBSCRIPTIONS[kind]
        async for data in self.client.subscribe(document):
            yield data.get(field) or {}
