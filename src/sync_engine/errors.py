"""Classified errors surfaced by the sync engine.

Transport and filesystem failures are translated once, at the engine
boundary, into a SyncEngineError tagged with an ErrorKind. Callers branch
on the kind; the payload keeps the structured details (GraphQL messages,
HTTP status, network code, file path) for diagnostics.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from src.graphql_client.errors import SyncError


class ErrorKind(str, Enum):
    """Actionable categories of sync failures."""
    NETWORK_UNREACHABLE = "network_unreachable"
    TIMEOUT = "timeout"
    AUTH_FAILURE = "auth_failure"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    GRAPHQL_GENERIC = "graphql_generic"
    PROTOCOL_VIOLATION = "protocol_violation"
    LOCAL_IO = "local_io"
    INVALID_DOCUMENT = "invalid_document"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ErrorPayload:
    """Structured details attached to a classified error.

    Attributes:
        messages: GraphQL error messages, in response order
        status_code: HTTP status code for non-200 responses
        code: Network failure code (see NetworkError)
        path: Local file involved in the failure
    """
    messages: Tuple[str, ...] = field(default_factory=tuple)
    status_code: Optional[int] = None
    code: Optional[str] = None
    path: Optional[str] = None


class SyncEngineError(SyncError):
    """The single error type raised by SyncEngine operations.

    Attributes:
        kind: Classified ErrorKind
        message: Human-readable description
        payload: Structured details
        written: Files written before the failure (pull/publish)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        payload: Optional[ErrorPayload] = None,
        written: int = 0,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.payload = payload or ErrorPayload()
        self.written = written


class InvalidDocumentError(SyncEngineError):
    """Raised when a document lacks metadata required by push or publish."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            ErrorKind.INVALID_DOCUMENT,
            message,
            ErrorPayload(path=path),
        )
        self.path = path
