"""Typed exception hierarchy for transport-level failures.

This module defines the exceptions raised by the GraphQL transport and the
pagination iterator. They describe *what* went wrong on the wire and carry
the raw details (status code, structured GraphQL errors, network code).
Turning them into actionable categories is the job of
src.sync_engine.classifier, which runs once at the engine boundary.
"""

from typing import Any, Dict, List, Optional


class SyncError(Exception):
    """Base exception for all kibela-sync errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class TransportError(SyncError):
    """Base exception for all failures talking to the GraphQL endpoint."""
    pass


class NetworkError(TransportError):
    """Raised when the HTTP call itself fails before a response arrives.

    The code attribute distinguishes the failure mode so it can be
    classified without re-parsing the message.
    """

    DNS_FAILURE = "dns_failure"
    TIMEOUT = "timeout"
    CONNECTION_FAILED = "connection_failed"

    def __init__(self, code: str, endpoint: str, reason: Optional[str] = None):
        message = f"Network request to {endpoint} failed ({code})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.code = code
        self.endpoint = endpoint
        self.reason = reason


class HTTPStatusError(TransportError):
    """Raised when the endpoint answers with a non-200 status code."""

    def __init__(self, status_code: int, body: str):
        super().__init__(
            f"GraphQL request failed with status {status_code}: {body}"
        )
        self.status_code = status_code
        self.body = body


class GraphQLResponseError(TransportError):
    """Raised when the response envelope carries a non-empty errors array."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = list(errors)
        self.messages = [
            str(error.get("message", "")) if isinstance(error, dict) else str(error)
            for error in self.errors
        ]
        super().__init__(f"GraphQL errors: {', '.join(self.messages)}")


class ProtocolViolationError(TransportError):
    """Raised when a response does not honour the GraphQL envelope contract.

    Covers a 200 response without data or errors, a body that is not a JSON
    object, and a connection page claiming a next page without a cursor.
    """

    def __init__(self, reason: str):
        super().__init__(f"Protocol violation: {reason}")
        self.reason = reason
