"""Sample Kibela API payloads and note files for testing.

These fixtures mirror the shapes returned by the notes query and the
createNote / updateNote mutations, plus note files as written to disk.
"""

from typing import Any, Dict, List, Optional


def make_note(
    number: int,
    title: Optional[str] = None,
    published: bool = True,
    **overrides: Any
) -> Dict[str, Any]:
    """Build a decoded note object as returned by the API.

    Args:
        number: Numeric part of the note ID
        title: Note title (defaults to "Note <number>")
        published: Whether publishedAt is set
        **overrides: Fields replacing the defaults

    Returns:
        Note mapping

    Example:
        >>> make_note(1)["id"]
        'Note/1'
    """
    note = {
        "id": f"Note/{number}",
        "title": title or f"Note {number}",
        "content": f"# Note {number}\n\nBody of note {number}.",
        "coediting": True,
        "url": f"https://acme.kibe.la/notes/{number}",
        "createdAt": "2026-01-10T09:00:00Z",
        "publishedAt": "2026-01-10T09:30:00Z" if published else None,
        "contentUpdatedAt": "2026-01-12T18:00:00Z",
        "author": {"id": "User/1", "account": "alice"},
        "groups": [{"id": "Group/1", "name": "Home"}],
        "folders": {
            "edges": [
                {"node": {"id": "Folder/1", "name": "Design", "group": {"id": "Group/1"}}},
            ]
        },
    }
    note.update(overrides)
    return note


def make_notes_page(
    notes: List[Dict[str, Any]],
    end_cursor: Optional[str] = None,
    has_next_page: bool = False,
    total_count: Optional[int] = None,
) -> Dict[str, Any]:
    """Build the data object of a notes query response for one page."""
    return {
        "notes": {
            "totalCount": total_count if total_count is not None else len(notes),
            "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
            "edges": [
                {"cursor": f"cursor-{note.get('id')}", "node": note}
                for note in notes
            ],
            "nodes": notes,
        }
    }


def make_mutation_response(mutation: str, note: Dict[str, Any]) -> Dict[str, Any]:
    """Build the data object of a createNote / updateNote response."""
    return {mutation: {"note": note}}


# Note file as written by pull
SAMPLE_PULLED_FILE = """---
id: Note/12345
title: "Release plan: Q3"
coediting: true
published: true
groups:
  - Group/1
  - Group/2
folders:
  - groupId: Group/1
    folderName: Plans
author: alice
createdAt: "2026-01-10T09:00:00Z"
updatedAt: "2026-01-12T18:00:00Z"
url: "https://acme.kibe.la/notes/12345"
---

# Release plan

- ship it
"""

# New note ready for publish (no id)
SAMPLE_NEW_NOTE = """---
title: Weekly notes
groups: [Group/1]
---

Hello team.
"""

# Inline array forms
SAMPLE_INLINE_ARRAYS = """---
title: Inline
groups: [Group/1, "Group/2", 'Group/3']
folders: [Group/1:Design/Specs, Group/2:Archive]
published: false
---

Body
"""

# Text without any frontmatter
SAMPLE_PLAIN_TEXT = "Just some text\nwithout metadata\n"
