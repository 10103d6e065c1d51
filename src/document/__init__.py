"""Document library for Kibela sync.

This package provides the local representation of a note (frontmatter
metadata plus Markdown content), its text format, and the mapping from
remote note IDs to local filenames.
"""

from .filename import NoteFilenameConverter, note_filename
from .frontmatter import FrontmatterHandler
from .models import Document, FolderRef, NoteMetadata

__all__ = [
    'NoteFilenameConverter',
    'note_filename',
    'FrontmatterHandler',
    'Document',
    'FolderRef',
    'NoteMetadata',
]
