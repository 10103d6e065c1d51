"""Data models for local note documents.

This module defines the in-memory form of a note file: a metadata record
with a fixed set of optional fields plus the Markdown body. All models use
dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class FolderRef:
    """A folder placement of a note inside a group.

    Attributes:
        group_id: ID of the group owning the folder
        folder_name: Folder name (path-like, e.g. "Design/Specs")
    """
    group_id: str
    folder_name: str

    def to_input(self) -> Dict[str, str]:
        """Return the shape expected by the createNote mutation."""
        return {"groupId": self.group_id, "folderName": self.folder_name}


@dataclass
class NoteMetadata:
    """Frontmatter block of a note document.

    Every field is optional except title, which defaults to an empty
    string. Keys that are not recognized are kept in extra so they survive
    a parse/stringify round trip.

    Attributes:
        id: Remote note ID (e.g. "Note/12345"); None for notes never published
        title: Note title
        coediting: Whether the note is co-edited
        published: Whether the note is published (False means draft)
        groups: IDs of the groups the note belongs to
        folders: Folder placements of the note
        author: Author account name
        created_at: Creation timestamp (stored as createdAt)
        updated_at: Content update timestamp (stored as updatedAt)
        url: Browser URL of the note
        extra: Unrecognized keys, in their original order (strings, or lists
            of strings when written as a block list)
    """
    id: Optional[str] = None
    title: str = ""
    coediting: Optional[bool] = None
    published: Optional[bool] = None
    groups: Optional[List[str]] = None
    folders: Optional[List[FolderRef]] = None
    author: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    # On-disk key -> attribute name, in canonical emission order
    FIELD_KEYS = (
        ("id", "id"),
        ("title", "title"),
        ("coediting", "coediting"),
        ("published", "published"),
        ("groups", "groups"),
        ("folders", "folders"),
        ("author", "author"),
        ("createdAt", "created_at"),
        ("updatedAt", "updated_at"),
        ("url", "url"),
    )

    def items(self) -> List[tuple]:
        """Return (key, value) pairs for every present field, in canonical order."""
        pairs: List[tuple] = []
        for key, attr in self.FIELD_KEYS:
            value = getattr(self, attr)
            if value is not None:
                pairs.append((key, value))
        pairs.extend(self.extra.items())
        return pairs

    def as_dict(self) -> Dict[str, Any]:
        """Return present fields keyed by their on-disk names."""
        return dict(self.items())


@dataclass
class Document:
    """A note file: frontmatter metadata plus Markdown content.

    Attributes:
        metadata: Parsed frontmatter
        content: Markdown body (without frontmatter)
    """
    metadata: NoteMetadata = field(default_factory=NoteMetadata)
    content: str = ""
