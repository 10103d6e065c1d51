"""Frontmatter parsing and generation for note files.

A note file starts with a metadata block between two `---` lines, one
`key: value` pair per line, followed by the Markdown body:

    ---
    id: Note/12345
    title: "Release plan: Q3"
    coediting: true
    groups:
      - R3JvdXAvMQ
    ---

    # Body

The format is deliberately line-oriented rather than full YAML: values are
typed by key (groups/folders are lists, coediting/published are booleans,
everything else is a string), and a file that does not start with the
delimiter, or never closes it, is read as plain content. Parsing never
fails.
"""

import logging
import re
from typing import Any, Dict, List

from .models import Document, FolderRef, NoteMetadata

logger = logging.getLogger(__name__)


class FrontmatterHandler:
    """Parses and generates frontmatter note documents.

    Array values accept both the inline form (`groups: [a, "b"]`) and the
    indented block list that stringify() emits. Inline folder entries are
    written as `groupId:folderName`.

    Example:
        >>> doc = FrontmatterHandler.parse("---\\ntitle: Hello\\n---\\n\\nBody")
        >>> doc.metadata.title, doc.content
        ('Hello', 'Body')
    """

    DELIMITER = "---"
    ARRAY_KEYS = frozenset({"groups", "folders"})
    BOOLEAN_KEYS = frozenset({"coediting", "published"})

    # Characters that force a string value to be double-quoted
    QUOTE_TRIGGERS = (":", "#", '"', "'", "\n")

    _KEY_TO_ATTR = dict(NoteMetadata.FIELD_KEYS)
    _ESCAPE_PATTERN = re.compile(r'\\(.)', re.DOTALL)

    @classmethod
    def parse(cls, text: str) -> Document:
        """Parse a note file into a Document.

        Args:
            text: Full file content

        Returns:
            Document with metadata and content. Text without a complete
            frontmatter block yields an empty-titled Document whose content
            is the entire text.
        """
        lines = text.split("\n")
        if lines[0].rstrip("\r") != cls.DELIMITER:
            return cls._plain(text)

        end_index = None
        for index in range(1, len(lines)):
            if lines[index].rstrip("\r") == cls.DELIMITER:
                end_index = index
                break

        if end_index is None:
            logger.debug("Frontmatter is never closed - reading file as plain content")
            return cls._plain(text)

        metadata = cls._parse_block(lines[1:end_index])
        content = "\n".join(lines[end_index + 1:]).strip()
        return Document(metadata=metadata, content=content)

    @classmethod
    def stringify(cls, document: Document) -> str:
        """Generate note file text from a Document.

        Present metadata keys are emitted in canonical order, followed by
        unrecognized keys in their original order.

        Args:
            document: Document to serialize

        Returns:
            File text: delimiter, metadata lines, delimiter, blank line, content
        """
        lines = [cls.DELIMITER]
        for key, value in document.metadata.items():
            lines.extend(cls._format_entry(key, value))
        lines.append(cls.DELIMITER)
        return "\n".join(lines) + "\n\n" + document.content

    @classmethod
    def _plain(cls, text: str) -> Document:
        return Document(metadata=NoteMetadata(title=""), content=text)

    @classmethod
    def _parse_block(cls, block_lines: List[str]) -> NoteMetadata:
        values: Dict[str, Any] = {}
        list_key = None

        for raw_line in block_lines:
            line = raw_line.rstrip("\r")
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            if line[:1] in (" ", "\t") or stripped.startswith("-"):
                # Continuation of a block list opened by `key:` with no value
                if list_key is not None:
                    if values[list_key] == "":
                        values[list_key] = []
                    cls._parse_list_line(values[list_key], list_key, stripped)
                continue

            key, separator, value = stripped.partition(":")
            if not separator:
                continue
            key = key.strip()
            value = value.strip()
            list_key = None

            if key in cls.ARRAY_KEYS:
                values[key] = cls._parse_inline_array(key, value)
                if not value:
                    list_key = key
            elif key in cls.BOOLEAN_KEYS:
                values[key] = value == "true"
            else:
                values[key] = cls._unquote(value)
                # Unknown keys may carry a block list too
                if not value and key not in cls._KEY_TO_ATTR:
                    list_key = key

        return cls._build_metadata(values)

    @classmethod
    def _parse_list_line(cls, items: List[Any], key: str, stripped: str) -> None:
        starts_item = stripped.startswith("-")
        body = stripped[1:].strip() if starts_item else stripped

        if key == "folders":
            if starts_item:
                items.append({})
            if not items:
                return
            field_key, separator, field_value = body.partition(":")
            if separator:
                items[-1][field_key.strip()] = cls._unquote(field_value.strip())
        elif starts_item:
            items.append(cls._unquote(body))

    @classmethod
    def _parse_inline_array(cls, key: str, value: str) -> List[Any]:
        if not (value.startswith("[") and value.endswith("]")):
            return []

        items = [cls._unquote(item) for item in cls._split_list(value[1:-1])]
        if key != "folders":
            return items

        folders = []
        for item in items:
            group_id, separator, folder_name = item.partition(":")
            if not separator:
                logger.debug(f"Ignoring inline folder entry without group: {item!r}")
                continue
            folders.append({"groupId": group_id.strip(), "folderName": folder_name.strip()})
        return folders

    @staticmethod
    def _split_list(inner: str) -> List[str]:
        """Split a comma-separated list, ignoring commas inside quotes."""
        items: List[str] = []
        current: List[str] = []
        quote = None
        escaped = False

        for char in inner:
            if escaped:
                current.append(char)
                escaped = False
            elif char == "\\" and quote == '"':
                current.append(char)
                escaped = True
            elif quote:
                current.append(char)
                if char == quote:
                    quote = None
            elif char in ('"', "'"):
                current.append(char)
                quote = char
            elif char == ",":
                items.append("".join(current).strip())
                current = []
            else:
                current.append(char)

        last = "".join(current).strip()
        if last or items:
            items.append(last)
        return [item for item in items if item]

    @classmethod
    def _build_metadata(cls, values: Dict[str, Any]) -> NoteMetadata:
        fields: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}

        for key, value in values.items():
            attr = cls._KEY_TO_ATTR.get(key)
            if attr is None:
                extra[key] = value
                continue
            if key == "folders":
                value = [
                    FolderRef(
                        group_id=entry.get("groupId", ""),
                        folder_name=entry.get("folderName", ""),
                    )
                    for entry in value
                ]
            fields[attr] = value

        return NoteMetadata(extra=extra, **fields)

    @classmethod
    def _format_entry(cls, key: str, value: Any) -> List[str]:
        if isinstance(value, bool):
            return [f"{key}: {'true' if value else 'false'}"]

        if isinstance(value, list):
            if not value:
                return [f"{key}: []"]
            lines = [f"{key}:"]
            for item in value:
                if isinstance(item, FolderRef):
                    lines.append(f"  - groupId: {cls._quote(item.group_id)}")
                    lines.append(f"    folderName: {cls._quote(item.folder_name)}")
                else:
                    lines.append(f"  - {cls._quote(str(item))}")
            return lines

        return [f"{key}: {cls._quote(str(value))}"]

    @classmethod
    def _quote(cls, value: str) -> str:
        """Double-quote a value when it would otherwise corrupt the line format."""
        needs_quotes = (
            value == ""
            or value != value.strip()
            or any(trigger in value for trigger in cls.QUOTE_TRIGGERS)
        )
        if not needs_quotes:
            return value
        escaped = (
            value.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
        )
        return f'"{escaped}"'

    @classmethod
    def _unquote(cls, value: str) -> str:
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            inner = value[1:-1]
            if value[0] == '"':
                inner = cls._ESCAPE_PATTERN.sub(
                    lambda match: "\n" if match.group(1) == "n" else match.group(1),
                    inner,
                )
            return inner
        return value
