"""Local filename derivation for remote notes.

Kibela note IDs look like "Note/12345". The numeric part is stable for the
lifetime of a note, so it makes a good filename: pulling the same note twice
always writes the same file.
"""

import re


class NoteFilenameConverter:
    """Converts remote note IDs to local filenames.

    Conversion rules:
    - "Note/<digits>" at the end of the ID → "<digits>.md"
    - Anything else → the full ID with path separators (/ and \\) replaced
      by hyphens, plus ".md"

    Examples:
        - "Note/12345" → "12345.md"
        - "xyz" → "xyz.md"
        - "Draft/abc" → "Draft-abc.md"
        - "Note/1/x" → "Note-1-x.md"
    """

    EXTENSION = ".md"
    NOTE_ID_PATTERN = re.compile(r'Note/(\d+)$')

    @classmethod
    def note_stem(cls, note_id: str) -> str:
        """Return the filename without extension for a note ID.

        Examples:
            >>> NoteFilenameConverter.note_stem("Note/12345")
            '12345'
            >>> NoteFilenameConverter.note_stem("xyz")
            'xyz'
        """
        match = cls.NOTE_ID_PATTERN.search(note_id)
        if match:
            return match.group(1)
        return re.sub(r'[/\\]', '-', note_id)

    @classmethod
    def id_to_filename(cls, note_id: str) -> str:
        """Convert a note ID to a filename with .md extension.

        Examples:
            >>> NoteFilenameConverter.id_to_filename("Note/12345")
            '12345.md'
        """
        return f"{cls.note_stem(note_id)}{cls.EXTENSION}"


def note_filename(note_id: str) -> str:
    """Shorthand for NoteFilenameConverter.id_to_filename()."""
    return NoteFilenameConverter.id_to_filename(note_id)
