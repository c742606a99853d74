"""
Notes feature: HTML rendering of the note list page.

The page posts user actions back to the notes router with fetch() and
reloads itself afterwards.
"""

from html import escape

from livenotes.features.notes.schemas import ControllerVersion, Note, ViewState

ACTION_LABELS = {
    "delete": "Delete",
    "exclaim": "+!",
    "unexclaim": "-!",
}

_SCRIPT = """
async function post(url, body) {
  const res = await fetch(url, {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: body ? JSON.stringify(body) : null,
  });
  if (!res.ok) {
    const err = await res.json();
    alert(err.detail.error);
  }
  location.reload();
}
function noteAction(link) {
  post("/notes/" + encodeURIComponent(link.dataset.id) + "/" + link.dataset.action);
}
function createNote() {
  post("/notes", {
    name: document.getElementsByName("name")[0].value,
    description: document.getElementsByName("description")[0].value,
  });
}
"""


def note_title(note: Note) -> str:
    return f"{note.name} (completed)" if note.completed else note.name


def action_label(action: str, note: Note) -> str:
    if action == "toggle":
        return "Mark incomplete" if note.completed else "Mark complete"
    return ACTION_LABELS[action]


def render_item(note: Note, version: ControllerVersion) -> str:
    # The id only ever reaches the script through a data attribute.
    links = "".join(
        f'<a class="action" href="#" data-id="{escape(note.id, quote=True)}" data-action="{action}" '
        'onclick="noteAction(this); return false;">'
        f"{escape(action_label(action, note))}</a> "
        for action in version.actions
    )
    return (
        '<li class="item">'
        f'<h4>{escape(note_title(note))}</h4>'
        f'<p>{escape(note.description)}</p>'
        f"{links}"
        "</li>"
    )


def render_page(state: ViewState, version: ControllerVersion) -> str:
    """Render the full list page for a view state."""
    parts = [
        "<!DOCTYPE html>",
        "<html><head><meta charset=\"utf-8\"><title>Notes</title>",
        f"<script>{_SCRIPT}</script></head><body>",
        f'<input name="name" placeholder="Enter note name" value="{escape(state.form.name, quote=True)}">',
        f'<input name="description" placeholder="Enter note description" '
        f'value="{escape(state.form.description, quote=True)}">',
        '<button onclick="createNote()">Create Note</button>',
        "<hr>",
        f"<h3>{state.completed_count} completed / {len(state.notes)} total</h3>",
        "<hr>",
    ]

    if version.shows_error and state.error:
        parts.append('<p class="error">Could not load notes.</p>')
    if state.loading:
        parts.append('<p class="loading">Loading...</p>')

    parts.append("<ul>")
    parts.extend(render_item(note, version) for note in state.notes)
    parts.append("</ul></body></html>")
    return "\n".join(parts)
