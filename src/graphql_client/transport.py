"""HTTP transport for the Kibela GraphQL API.

This module posts GraphQL documents to the team-scoped endpoint with
requests and decodes the response envelope. Every failure is raised as one
of the typed exceptions in src.graphql_client.errors; nothing is retried
or recovered here.
"""

import logging
import re
from typing import Any, Dict, Mapping, Optional

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from .auth import Credentials
from .errors import (
    GraphQLResponseError,
    HTTPStatusError,
    NetworkError,
    ProtocolViolationError,
)

logger = logging.getLogger(__name__)

# Fragments that urllib3/socket put in the message of a failed DNS lookup
_DNS_FAILURE_MARKERS = (
    "nameresolutionerror",
    "failed to resolve",
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)


class GraphQLTransport:
    """Stateless GraphQL-over-HTTP client for a single Kibela team.

    The request headers (bearer credential, content type, user agent) are
    fixed at construction; send() performs exactly one POST per call.

    Example:
        >>> transport = GraphQLTransport(Credentials(team="acme", token="secret"))
        >>> data = transport.send(LIST_NOTES, {"first": 100})
        >>> data["notes"]["totalCount"]
    """

    DEFAULT_TIMEOUT = 30
    USER_AGENT = "kibela-sync"

    def __init__(
        self,
        credentials: Credentials,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the transport.

        Args:
            credentials: Team and token used for every request
            timeout: Per-request timeout in seconds
            session: Optional pre-built requests session (used in tests)
        """
        self.endpoint = credentials.endpoint
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {credentials.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.USER_AGENT,
        })

    @staticmethod
    def _sanitize_credentials(text: str) -> str:
        """Mask bearer tokens and token-like values before text reaches a log.

        Example:
            >>> GraphQLTransport._sanitize_credentials("Authorization: Bearer abc123")
            'Authorization: ***REDACTED***'
        """
        if not text:
            return text

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(api_?key|token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    @staticmethod
    def _is_dns_failure(exception: Exception) -> bool:
        """Check whether a connection error was caused by a failed DNS lookup."""
        error_msg = str(exception).lower()
        return any(marker in error_msg for marker in _DNS_FAILURE_MARKERS)

    def _translate_network_error(self, exception: RequestException) -> NetworkError:
        """Translate a requests exception into a NetworkError with a failure code."""
        reason = self._sanitize_credentials(str(exception))

        # ConnectTimeout is both a Timeout and a ConnectionError; timeout wins
        if isinstance(exception, Timeout):
            code = NetworkError.TIMEOUT
        elif isinstance(exception, ConnectionError) and self._is_dns_failure(exception):
            code = NetworkError.DNS_FAILURE
        else:
            code = NetworkError.CONNECTION_FAILED

        logger.warning(f"Request to {self.endpoint} failed ({code}): {reason}")
        return NetworkError(code=code, endpoint=self.endpoint, reason=reason)

    def send(
        self,
        query: str,
        variables: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """Send a GraphQL document and return the decoded data field.

        Args:
            query: GraphQL query or mutation text
            variables: Variables mapping for the document

        Returns:
            The data object of the response envelope

        Raises:
            NetworkError: If the HTTP call fails (DNS, timeout, refused)
            HTTPStatusError: If the status code is not 200
            GraphQLResponseError: If the envelope carries errors
            ProtocolViolationError: If the envelope is malformed or has no data
        """
        payload = {"query": query, "variables": dict(variables or {})}
        logger.debug(f"POST {self.endpoint} variables={payload['variables']}")

        try:
            response = self._session.post(
                self.endpoint,
                json=payload,
                timeout=self.timeout,
            )
        except RequestException as e:
            raise self._translate_network_error(e) from e

        if response.status_code != 200:
            body = response.text
            logger.warning(
                f"GraphQL request failed with status {response.status_code}: "
                f"{self._sanitize_credentials(body[:500])}"
            )
            raise HTTPStatusError(status_code=response.status_code, body=body)

        try:
            envelope = response.json()
        except ValueError as e:
            raise ProtocolViolationError("response body is not valid JSON") from e

        if not isinstance(envelope, dict):
            raise ProtocolViolationError(
                f"response body must be a JSON object, got {type(envelope).__name__}"
            )

        errors = envelope.get("errors")
        if isinstance(errors, dict):
            errors = [errors]
        if errors:
            logger.debug(f"GraphQL response carried {len(errors)} error(s)")
            raise GraphQLResponseError(errors)

        data = envelope.get("data")
        if data is None:
            raise ProtocolViolationError("response carries neither data nor errors")

        return data
