"""Classification of raw failures into ErrorKind categories.

GraphQL errors are classified by case-insensitive substring matching
against the joined error messages. This is a heuristic: a note title that
leaks into an error message (e.g. one containing "not found") can be
misclassified. It is kept as-is rather than replaced by stricter matching.
"""

import logging
from typing import Optional

from src.graphql_client.errors import (
    GraphQLResponseError,
    HTTPStatusError,
    NetworkError,
    ProtocolViolationError,
)

from .errors import ErrorKind, ErrorPayload, SyncEngineError

logger = logging.getLogger(__name__)

# Checked in order; first match wins
GRAPHQL_VOCABULARY = (
    (ErrorKind.AUTH_FAILURE, ("authentication", "unauthorized")),
    (ErrorKind.NOT_FOUND, ("not found",)),
    (ErrorKind.PERMISSION_DENIED, ("permission", "forbidden")),
)

NETWORK_CODES = {
    NetworkError.DNS_FAILURE: ErrorKind.NETWORK_UNREACHABLE,
    NetworkError.TIMEOUT: ErrorKind.TIMEOUT,
}

HTTP_STATUS_KINDS = {
    401: ErrorKind.AUTH_FAILURE,
    403: ErrorKind.PERMISSION_DENIED,
    404: ErrorKind.NOT_FOUND,
}

KIND_MESSAGES = {
    ErrorKind.AUTH_FAILURE: "Authentication failed. Please check your API token.",
    ErrorKind.NOT_FOUND: "Resource not found. Please check the ID and try again.",
    ErrorKind.PERMISSION_DENIED: "Permission denied. You may not have access to this resource.",
    ErrorKind.NETWORK_UNREACHABLE: (
        "Could not connect to Kibela. Please check your team name and internet connection."
    ),
    ErrorKind.TIMEOUT: "Request timed out. Please try again.",
}


def classify_graphql_messages(messages) -> ErrorKind:
    """Classify GraphQL error messages by known vocabulary.

    Args:
        messages: Iterable of error message strings

    Returns:
        Matching ErrorKind, or GRAPHQL_GENERIC when nothing matches

    Example:
        >>> classify_graphql_messages(["unauthorized access"])
        <ErrorKind.AUTH_FAILURE: 'auth_failure'>
    """
    text = "\n".join(messages).lower()
    for kind, keywords in GRAPHQL_VOCABULARY:
        if any(keyword in text for keyword in keywords):
            return kind
    return ErrorKind.GRAPHQL_GENERIC


def classify(exception: BaseException, path: Optional[str] = None) -> SyncEngineError:
    """Translate any failure into a classified SyncEngineError.

    Classification only inspects data already extracted by the transport
    (structured GraphQL messages, status code, network code); it performs
    no I/O and never reads response bodies.

    Args:
        exception: The failure to classify
        path: Local file being read or written, when the caller knows it

    Returns:
        SyncEngineError tagged with an ErrorKind. An exception that is
        already a SyncEngineError is returned unchanged.
    """
    if isinstance(exception, SyncEngineError):
        return exception

    if isinstance(exception, GraphQLResponseError):
        kind = classify_graphql_messages(exception.messages)
        message = KIND_MESSAGES.get(kind, "\n".join(exception.messages))
        return SyncEngineError(
            kind,
            message,
            ErrorPayload(messages=tuple(exception.messages)),
        )

    if isinstance(exception, NetworkError):
        kind = NETWORK_CODES.get(exception.code, ErrorKind.UNKNOWN)
        return SyncEngineError(
            kind,
            KIND_MESSAGES.get(kind, str(exception)),
            ErrorPayload(code=exception.code),
        )

    if isinstance(exception, HTTPStatusError):
        kind = HTTP_STATUS_KINDS.get(exception.status_code, ErrorKind.UNKNOWN)
        return SyncEngineError(
            kind,
            KIND_MESSAGES.get(
                kind,
                f"Kibela API returned unexpected status {exception.status_code}"
            ),
            ErrorPayload(status_code=exception.status_code),
        )

    if isinstance(exception, ProtocolViolationError):
        return SyncEngineError(ErrorKind.PROTOCOL_VIOLATION, str(exception))

    if isinstance(exception, UnicodeDecodeError):
        reason = f"not valid UTF-8 text (byte {exception.start})"
        message = f"Cannot read {path}: {reason}" if path else f"File is {reason}"
        return SyncEngineError(
            ErrorKind.LOCAL_IO,
            message,
            ErrorPayload(path=path),
        )

    if isinstance(exception, OSError):
        path = exception.filename or path
        reason = exception.strerror or str(exception)
        message = f"Filesystem operation failed for {path}: {reason}" if path else reason
        return SyncEngineError(
            ErrorKind.LOCAL_IO,
            message,
            ErrorPayload(path=str(path) if path else None),
        )

    logger.debug(f"Unclassified failure: {type(exception).__name__}: {exception}")
    return SyncEngineError(
        ErrorKind.UNKNOWN,
        str(exception) or "An unexpected error occurred",
    )
