"""Unit tests for sync_engine.classifier module."""

import pytest

from src.graphql_client.errors import (
    GraphQLResponseError,
    HTTPStatusError,
    NetworkError,
    ProtocolViolationError,
)
from src.sync_engine.classifier import classify, classify_graphql_messages
from src.sync_engine.errors import ErrorKind, InvalidDocumentError


class TestClassifyGraphQLMessages:
    """Test cases for vocabulary-based classification."""

    @pytest.mark.parametrize("message,expected", [
        ("unauthorized access", ErrorKind.AUTH_FAILURE),
        ("Authentication required", ErrorKind.AUTH_FAILURE),
        ("Note not found", ErrorKind.NOT_FOUND),
        ("NOT FOUND", ErrorKind.NOT_FOUND),
        ("You do not have permission", ErrorKind.PERMISSION_DENIED),
        ("Forbidden", ErrorKind.PERMISSION_DENIED),
        ("Field 'x' doesn't exist on type 'Query'", ErrorKind.GRAPHQL_GENERIC),
    ])
    def test_single_message(self, message, expected):
        """Matching is case-insensitive substring search."""
        assert classify_graphql_messages([message]) == expected

    def test_auth_checked_before_not_found(self):
        """The first matching category in vocabulary order wins."""
        messages = ["Note not found", "Unauthorized"]

        assert classify_graphql_messages(messages) == ErrorKind.AUTH_FAILURE

    def test_empty_messages_are_generic(self):
        """No messages means no vocabulary match."""
        assert classify_graphql_messages([]) == ErrorKind.GRAPHQL_GENERIC


class TestClassify:
    """Test cases for classify()."""

    def test_graphql_error_keeps_messages(self):
        """GraphQL errors carry their messages in the payload."""
        error = classify(GraphQLResponseError([{"message": "unauthorized access"}]))

        assert error.kind == ErrorKind.AUTH_FAILURE
        assert error.payload.messages == ("unauthorized access",)
        assert "API token" in error.message

    def test_generic_graphql_error_uses_server_message(self):
        """Unmatched GraphQL errors report the server messages."""
        error = classify(GraphQLResponseError([{"message": "Something odd"}]))

        assert error.kind == ErrorKind.GRAPHQL_GENERIC
        assert error.message == "Something odd"

    def test_dns_failure_is_network_unreachable(self):
        """DNS failures map to NETWORK_UNREACHABLE."""
        error = classify(NetworkError(NetworkError.DNS_FAILURE, "https://nope.kibe.la/api/v1"))

        assert error.kind == ErrorKind.NETWORK_UNREACHABLE
        assert error.payload.code == NetworkError.DNS_FAILURE

    def test_timeout(self):
        """Timeouts map to TIMEOUT."""
        assert classify(NetworkError(NetworkError.TIMEOUT, "e")).kind == ErrorKind.TIMEOUT

    def test_other_connection_failure_is_unknown(self):
        """Refused connections are not given a specific kind."""
        assert classify(NetworkError(NetworkError.CONNECTION_FAILED, "e")).kind == ErrorKind.UNKNOWN

    @pytest.mark.parametrize("status,expected", [
        (401, ErrorKind.AUTH_FAILURE),
        (403, ErrorKind.PERMISSION_DENIED),
        (404, ErrorKind.NOT_FOUND),
        (500, ErrorKind.UNKNOWN),
    ])
    def test_http_status(self, status, expected):
        """Non-200 status codes map by code."""
        error = classify(HTTPStatusError(status, "body"))

        assert error.kind == expected
        assert error.payload.status_code == status

    def test_protocol_violation(self):
        """Protocol violations keep their own kind."""
        error = classify(ProtocolViolationError("no data"))

        assert error.kind == ErrorKind.PROTOCOL_VIOLATION

    def test_os_error_is_local_io(self):
        """Filesystem errors record the path."""
        error = classify(PermissionError(13, "Permission denied", "/notes/1.md"))

        assert error.kind == ErrorKind.LOCAL_IO
        assert error.payload.path == "/notes/1.md"
        assert "/notes/1.md" in error.message

    def test_undecodable_file_is_local_io(self):
        """Decoding failures carry the path passed by the caller."""
        error = classify(UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"), path="notes/1.md")

        assert error.kind == ErrorKind.LOCAL_IO
        assert error.payload.path == "notes/1.md"
        assert "notes/1.md" in error.message

    def test_classified_error_returned_unchanged(self):
        """Already classified errors pass through."""
        original = InvalidDocumentError("no id")

        assert classify(original) is original

    def test_anything_else_is_unknown(self):
        """Unexpected exceptions map to UNKNOWN."""
        error = classify(RuntimeError("boom"))

        assert error.kind == ErrorKind.UNKNOWN
        assert error.message == "boom"
