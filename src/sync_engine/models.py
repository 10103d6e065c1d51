"""Data models for sync engine operations.

This module defines the engine configuration, the read-only projection of
a remote note, and the results returned by pull and publish. All models use
dataclasses for clean, type-safe data structures, following the patterns
established in src/document/models.py.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from src.document.models import Document, FolderRef, NoteMetadata
from src.graphql_client.auth import Credentials
from src.graphql_client.pagination import normalize_connection


@dataclass
class SyncConfig:
    """Validated settings for one SyncEngine.

    Attributes:
        team: Kibela team name (subdomain)
        token: API access token
        directory: Local directory holding note files
    """
    team: str
    token: str
    directory: str = "./notes"

    @property
    def credentials(self) -> Credentials:
        return Credentials(team=self.team, token=self.token)


def _as_list(value: Any) -> List[Any]:
    """Accept either a plain list or a connection object and return its nodes."""
    if value is None:
        return []
    if isinstance(value, Mapping):
        return normalize_connection(value).nodes
    return list(value)


@dataclass
class RemoteNote:
    """Server-side note, as returned by list queries and mutations.

    Server-owned fields (id, url, timestamps, author, groups, folders) are
    only ever read by the client.

    Attributes:
        id: Global note ID (e.g. "Note/12345")
        title: Note title
        content: Markdown content
        coediting: Whether the note is co-edited
        url: Browser URL
        published_at: Publication timestamp; None for drafts
        created_at: Creation timestamp, when the server provides it
        content_updated_at: Last content update timestamp
        author_account: Account name of the author
        group_ids: IDs of the groups the note belongs to
        folders: Folder placements of the note
    """
    id: str
    title: str = ""
    content: str = ""
    coediting: bool = False
    url: Optional[str] = None
    published_at: Optional[str] = None
    created_at: Optional[str] = None
    content_updated_at: Optional[str] = None
    author_account: Optional[str] = None
    group_ids: List[str] = field(default_factory=list)
    folders: List[FolderRef] = field(default_factory=list)

    @classmethod
    def from_dict(cls, node: Mapping[str, Any]) -> "RemoteNote":
        """Build a RemoteNote from a decoded GraphQL note object."""
        author = node.get("author") or {}

        folders = []
        for folder in _as_list(node.get("folders")):
            if not folder or not folder.get("name"):
                continue
            group = folder.get("group") or {}
            folders.append(FolderRef(
                group_id=group.get("id") or "unknown",
                folder_name=folder["name"],
            ))

        return cls(
            id=node["id"],
            title=node.get("title") or "",
            content=node.get("content") or "",
            coediting=bool(node.get("coediting")),
            url=node.get("url"),
            published_at=node.get("publishedAt"),
            created_at=node.get("createdAt"),
            content_updated_at=node.get("contentUpdatedAt"),
            author_account=author.get("account"),
            group_ids=[group["id"] for group in _as_list(node.get("groups")) if group],
            folders=folders,
        )

    @property
    def published(self) -> bool:
        return self.published_at is not None

    def to_document(self) -> Document:
        """Project the note onto the local document format."""
        metadata = NoteMetadata(
            id=self.id,
            title=self.title,
            coediting=self.coediting,
            published=self.published,
            groups=list(self.group_ids),
            folders=list(self.folders),
            author=self.author_account or "unknown",
            created_at=self.created_at or self.published_at,
            updated_at=self.content_updated_at,
            url=self.url,
        )
        return Document(metadata=metadata, content=self.content)


@dataclass
class PullResult:
    """Result of a pull operation.

    Attributes:
        written: Number of note files written
        total_count: totalCount reported by the server (display only)
        paths: Written file paths, in arrival order
    """
    written: int = 0
    total_count: Optional[int] = None
    paths: List[str] = field(default_factory=list)


@dataclass
class PublishResult:
    """Result of a publish operation.

    Attributes:
        note: The note created on the server
        path: Local file the note was written to
    """
    note: RemoteNote
    path: str


def note_input(metadata: NoteMetadata, content: str) -> Dict[str, Any]:
    """Build the mutation input fields shared by push and publish."""
    return {
        "title": metadata.title,
        "content": content,
        "coediting": metadata.coediting,
        "groupIds": metadata.groups,
        "draft": not metadata.published,
    }
