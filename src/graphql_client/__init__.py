"""GraphQL client library for Kibela sync.

This package provides the HTTP + GraphQL transport, connection
normalization and cursor pagination used by the sync engine.
"""

from .auth import Authenticator, Credentials
from .errors import (
    SyncError,
    TransportError,
    NetworkError,
    HTTPStatusError,
    GraphQLResponseError,
    ProtocolViolationError,
)
from .pagination import Connection, ConnectionIterator, Edge, PageInfo, normalize_connection, paginate
from .transport import GraphQLTransport

__all__ = [
    "Authenticator",
    "Credentials",
    "SyncError",
    "TransportError",
    "NetworkError",
    "HTTPStatusError",
    "GraphQLResponseError",
    "ProtocolViolationError",
    "Connection",
    "ConnectionIterator",
    "Edge",
    "PageInfo",
    "normalize_connection",
    "paginate",
    "GraphQLTransport",
]
