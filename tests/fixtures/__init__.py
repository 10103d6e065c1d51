"""Test fixtures for kibela-sync tests.

This module provides test fixtures for:
- Decoded API payloads (notes, connection pages, mutation responses)
- Note files in the frontmatter format (pulled, new, inline arrays, plain)
"""

from .sample_notes import (
    make_note,
    make_notes_page,
    make_mutation_response,
    SAMPLE_PULLED_FILE,
    SAMPLE_NEW_NOTE,
    SAMPLE_INLINE_ARRAYS,
    SAMPLE_PLAIN_TEXT,
)

__all__ = [
    "make_note",
    "make_notes_page",
    "make_mutation_response",
    "SAMPLE_PULLED_FILE",
    "SAMPLE_NEW_NOTE",
    "SAMPLE_INLINE_ARRAYS",
    "SAMPLE_PLAIN_TEXT",
]
