"""Sync engine orchestrating pull, push and publish.

This module provides the SyncEngine class that moves notes between the
Kibela API and a local directory of frontmatter Markdown files:

    pull    - every remote note → <directory>/<id>.md (unconditional overwrite)
    push    - one local file with an id → updateNote
    publish - new local content → createNote, then written like pull

Operations are sequential and keep no state between calls. Any failure is
classified exactly once here and raised as a SyncEngineError.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, NoReturn, Optional

from src.document.filename import note_filename
from src.document.frontmatter import FrontmatterHandler
from src.graphql_client.errors import ProtocolViolationError
from src.graphql_client.pagination import ConnectionIterator
from src.graphql_client.queries import CREATE_NOTE, LIST_NOTES, UPDATE_NOTE
from src.graphql_client.transport import GraphQLTransport

from .classifier import classify
from .errors import InvalidDocumentError, SyncEngineError
from .models import PublishResult, PullResult, RemoteNote, SyncConfig, note_input

logger = logging.getLogger(__name__)


class SyncEngine:
    """Synchronizes Kibela notes with a local directory.

    Example:
        >>> engine = SyncEngine(SyncConfig(team="acme", token="secret", directory="./notes"))
        >>> result = engine.pull()
        >>> print(f"Pulled {result.written} notes")
    """

    PAGE_SIZE = 100

    def __init__(self, config: SyncConfig, transport: Optional[GraphQLTransport] = None):
        """Initialize the engine.

        Args:
            config: Validated team, token and directory
            transport: Optional transport (defaults to a GraphQLTransport for config)
        """
        self.config = config
        self.directory = Path(config.directory)
        self._transport = transport or GraphQLTransport(config.credentials)

    def pull(self) -> PullResult:
        """Fetch every remote note and write it to the sync directory.

        Notes are written in arrival order, one page at a time. A file of
        the same name is overwritten without checking for local edits.

        Returns:
            PullResult with the number of files written and their paths

        Raises:
            SyncEngineError: On any failure; error.written counts the files
                written before it. Those files are left in place.
        """
        result = PullResult()
        logger.info(f"Pulling notes from team '{self.config.team}' into {self.directory}")

        notes = ConnectionIterator(self._fetch_notes_page)
        try:
            for node in notes:
                note = self._note_from_payload(node)
                path = self._write_note(note)
                result.paths.append(str(path))
                result.written += 1
        except Exception as e:
            logger.error(
                f"Pull aborted after writing {result.written} note(s) "
                f"({notes.pages_fetched} page(s) fetched)"
            )
            self._fail(e, written=result.written)

        result.total_count = notes.total_count
        logger.info(
            f"Pulled {result.written} note(s) in {notes.pages_fetched} page(s) "
            f"(server reports {result.total_count} total)"
        )
        return result

    def push(self, file_path: str) -> RemoteNote:
        """Send a previously pulled or published note file to Kibela.

        The file must carry an id in its frontmatter. The local file is not
        rewritten afterwards.

        Args:
            file_path: Path to the note file

        Returns:
            The updated note as returned by the server

        Raises:
            InvalidDocumentError: If the frontmatter has no id (no request is made)
            SyncEngineError: On read, transport or protocol failures
        """
        path = Path(file_path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._fail(e, path=str(path))

        document = FrontmatterHandler.parse(text)
        metadata = document.metadata
        if not metadata.id:
            raise InvalidDocumentError(
                f"No note ID found in frontmatter of {path}. "
                f"Use publish for new notes.",
                path=str(path),
            )

        fields = note_input(metadata, document.content)
        fields["id"] = metadata.id
        variables = {"input": self._without_nulls(fields)}

        logger.info(f"Updating note {metadata.id} from {path}")
        try:
            data = self._transport.send(UPDATE_NOTE, variables)
            note = self._mutation_note(data, "updateNote")
        except Exception as e:
            self._fail(e)

        logger.info(f"Updated note {note.id}")
        return note

    def publish(self, content: str) -> PublishResult:
        """Create a new note from file text and save it locally.

        Args:
            content: Full file text (frontmatter plus body)

        Returns:
            PublishResult with the created note and the file it was written to

        Raises:
            InvalidDocumentError: If the frontmatter has no title (no request is made)
            SyncEngineError: On transport, protocol or write failures
        """
        document = FrontmatterHandler.parse(content)
        metadata = document.metadata
        if not metadata.title:
            raise InvalidDocumentError("Title is required in frontmatter")

        fields = note_input(metadata, document.content)
        if metadata.coediting is None:
            fields["coediting"] = True
        fields["groupIds"] = metadata.groups or []
        if metadata.folders is not None:
            fields["folders"] = [folder.to_input() for folder in metadata.folders]
        variables = {"input": self._without_nulls(fields)}

        logger.info(f"Publishing new note: {metadata.title}")
        try:
            data = self._transport.send(CREATE_NOTE, variables)
            note = self._mutation_note(data, "createNote")
            path = self._write_note(note)
        except Exception as e:
            self._fail(e)

        logger.info(f"Published note {note.id} to {path}")
        return PublishResult(note=note, path=str(path))

    def _fetch_notes_page(self, cursor: Optional[str]) -> Mapping[str, Any]:
        data = self._transport.send(LIST_NOTES, {"first": self.PAGE_SIZE, "after": cursor})
        notes = data.get("notes")
        if notes is None:
            raise ProtocolViolationError("notes query returned no notes connection")
        return notes

    @staticmethod
    def _note_from_payload(node: Any) -> RemoteNote:
        if not isinstance(node, Mapping) or not node.get("id"):
            raise ProtocolViolationError("note without an id in server response")
        return RemoteNote.from_dict(node)

    def _mutation_note(self, data: Mapping[str, Any], mutation: str) -> RemoteNote:
        payload = data.get(mutation) or {}
        return self._note_from_payload(payload.get("note"))

    def _write_note(self, note: RemoteNote) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / note_filename(note.id)
        path.write_text(FrontmatterHandler.stringify(note.to_document()), encoding="utf-8")
        logger.debug(f"Wrote {note.id} to {path}")
        return path

    @staticmethod
    def _without_nulls(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in fields.items() if value is not None}

    @staticmethod
    def _fail(exception: Exception, written: int = 0, path: Optional[str] = None) -> NoReturn:
        """Classify a failure and raise it as a SyncEngineError."""
        error = classify(exception, path=path)
        error.written = written
        if error is exception:
            raise error
        raise error from exception
