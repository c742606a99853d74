"""
Notes feature: GraphQL documents for the notes API.
"""

from livenotes.features.notes.schemas import NoteEventKind

NOTE_FIELDS = """
    id
    clientId
    name
    description
    completed
"""

LIST_NOTES = f"""
query ListNotes {{
  listNotes {{
    items {{{NOTE_FIELDS}}}
  }}
}}
"""

CREATE_NOTE = f"""
mutation CreateNote($input: CreateNoteInput!) {{
  createNote(input: $input) {{{NOTE_FIELDS}}}
}}
"""

DELETE_NOTE = f"""
mutation DeleteNote($input: DeleteNoteInput!) {{
  deleteNote(input: $input) {{{NOTE_FIELDS}}}
}}
"""

UPDATE_NOTE = f"""
mutation UpdateNote($input: UpdateNoteInput!) {{
  updateNote(input: $input) {{{NOTE_FIELDS}}}
}}
"""

ON_CREATE_NOTE = f"""
subscription OnCreateNote {{
  onCreateNote {{{NOTE_FIELDS}}}
}}
"""

ON_DELETE_NOTE = f"""
subscription OnDeleteNote {{
  onDeleteNote {{{NOTE_FIELDS}}}
}}
"""

ON_UPDATE_NOTE = f"""
subscription OnUpdateNote {{
  onUpdateNote {{{NOTE_FIELDS}}}
}}
"""

# kind -> (document, root field of the event payload)
SUBSCRIPTIONS: dict[NoteEventKind, tuple[str, str]] = {
    NoteEventKind.CREATE: (ON_CREATE_NOTE, "onCreateNote"),
    NoteEventKind.DELETE: (ON_DELETE_NOTE, "onDeleteNote"),
    NoteEventKind.UPDATE: (ON_UPDATE_NOTE, "onUpdateNote"),
}
