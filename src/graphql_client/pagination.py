"""Cursor pagination over GraphQL connections.

Every list-style query returns a connection envelope
(edges / nodes / pageInfo / totalCount). normalize_connection() turns the
decoded payload into a Connection with a populated nodes list, and
ConnectionIterator walks a connection-returning fetch function page by page
until the server reports there is no next page.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, List, Mapping, Optional, TypeVar, Union

from .errors import ProtocolViolationError

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class PageInfo:
    """Position of a page within a connection.

    Attributes:
        has_next_page: True when another page can be requested
        end_cursor: Cursor to pass as `after` for the next page
    """
    has_next_page: bool = False
    end_cursor: Optional[str] = None


@dataclass
class Edge(Generic[T]):
    """A single node wrapped with its cursor."""
    node: T
    cursor: Optional[str] = None


@dataclass
class Connection(Generic[T]):
    """One page of a paginated collection.

    Attributes:
        edges: Cursor-wrapped nodes in server order
        nodes: Nodes in server order (always populated after normalization)
        page_info: Next-page information
        total_count: Size of the whole collection, for display only
    """
    edges: List[Edge[T]] = field(default_factory=list)
    nodes: List[T] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=PageInfo)
    total_count: Optional[int] = None


def normalize_connection(raw: Optional[Mapping[str, Any]]) -> Connection:
    """Build a Connection from a decoded GraphQL connection object.

    Queries that omit nodes to save payload get them derived from edges,
    so callers can always rely on Connection.nodes.

    Args:
        raw: Decoded connection mapping (edges, nodes, pageInfo, totalCount)

    Returns:
        Normalized Connection

    Raises:
        ProtocolViolationError: If raw is not a mapping

    Example:
        >>> normalize_connection({"edges": [{"node": {"id": "a"}}]}).nodes
        [{'id': 'a'}]
    """
    if raw is None:
        return Connection()
    if not isinstance(raw, Mapping):
        raise ProtocolViolationError(
            f"connection must be an object, got {type(raw).__name__}"
        )

    edges = [
        Edge(node=edge.get("node"), cursor=edge.get("cursor"))
        for edge in (raw.get("edges") or [])
    ]

    nodes = raw.get("nodes")
    if nodes is None:
        nodes = [edge.node for edge in edges]

    page_info_raw = raw.get("pageInfo") or {}
    page_info = PageInfo(
        has_next_page=bool(page_info_raw.get("hasNextPage", False)),
        end_cursor=page_info_raw.get("endCursor"),
    )

    return Connection(
        edges=edges,
        nodes=list(nodes),
        page_info=page_info,
        total_count=raw.get("totalCount"),
    )


FetchPage = Callable[[Optional[str]], Union[Connection, Mapping[str, Any]]]


class ConnectionIterator(Iterator[T]):
    """Lazy, finite, non-restartable iteration over every node of a connection.

    The fetch function is called with None for the first page and with the
    previous page's end cursor for each following page. Iteration stops
    when a page reports hasNextPage false. Once exhausted the iterator stays
    exhausted; start over with a new iterator.

    Errors raised by fetch propagate to the consumer unchanged. Nodes
    already yielded are the consumer's to keep or discard.

    Attributes:
        total_count: totalCount reported by the most recent page (display only)
        pages_fetched: Number of pages requested so far

    Example:
        >>> pages = ConnectionIterator(lambda cursor: client.list_notes(after=cursor))
        >>> for note in pages:
        ...     print(note["id"])
    """

    def __init__(self, fetch: FetchPage):
        self._fetch = fetch
        self._buffer: List[T] = []
        self._next_cursor: Optional[str] = None
        self._has_more = True
        self.total_count: Optional[int] = None
        self.pages_fetched = 0

    def __iter__(self) -> "ConnectionIterator[T]":
        return self

    def __next__(self) -> T:
        while not self._buffer:
            if not self._has_more:
                raise StopIteration
            self._load_page()
        return self._buffer.pop(0)

    def _load_page(self) -> None:
        cursor = self._next_cursor
        logger.debug(f"Fetching page {self.pages_fetched + 1} (after={cursor})")

        # A failed page ends the iteration for good
        self._has_more = False
        page = self._fetch(cursor)
        connection = page if isinstance(page, Connection) else normalize_connection(page)
        self.pages_fetched += 1

        if connection.total_count is not None:
            self.total_count = connection.total_count

        page_info = connection.page_info
        if page_info.has_next_page and not page_info.end_cursor:
            raise ProtocolViolationError(
                f"page {self.pages_fetched} reports a next page without an end cursor"
            )

        self._buffer.extend(connection.nodes)
        self._has_more = page_info.has_next_page
        self._next_cursor = page_info.end_cursor if page_info.has_next_page else None


def paginate(fetch: FetchPage) -> ConnectionIterator:
    """Return a ConnectionIterator over every node produced by fetch."""
    return ConnectionIterator(fetch)
