"""Forward cursor pagination over id-ordered collections.

Collections are walked newest first by a monotonically increasing surrogate
key. A client asks for ``first`` items, optionally ``after`` an opaque
cursor taken from the previous page's ``end_cursor``:

    page = PageRequest.from_params(first=2, after=None)
    connection = await paginate(RecruitmentFeed(repo, RecruitmentFilter.published()), page)
    next_page = PageRequest.from_params(first=2, after=connection.page_info.end_cursor)

``has_next_page`` is answered by an existence probe that runs against the
same ``PagedCollection`` as the page query, so both always share one filter.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import logfire

from rally.domain.error import (
    BadCursorError,
    BadLimitError,
    EmptyCursorError,
    IdDecodeError,
    MissingLimitError,
    MissingParametersError,
)
from rally.domain.value import EntityKind
from rally.domain.value import opaque_id
from rally.domain.value.common import ValueObject

T = TypeVar("T")


class PageRequest(ValueObject):
    """Validated query-time page parameters.

    ``use_after=False`` (with ``after=0``) means the first page: the query
    layer must apply no bound at all rather than bounding at 0.
    """

    use_after: bool = False
    after: int = 0
    limit: int

    @classmethod
    def from_params(
        cls,
        first: Optional[int],
        after: Optional[str],
        *,
        kind: Optional[EntityKind] = None,
        max_limit: Optional[int] = None,
    ) -> "PageRequest":
        """Validate client-supplied ``first``/``after`` arguments.

        Args:
            first: Number of items requested
            after: Opaque cursor of the last item already seen
            kind: If given, the cursor must have been issued for this kind
            max_limit: If given, ``first`` is clamped to this value

        Raises:
            MissingLimitError: ``after`` without ``first``
            MissingParametersError: Neither argument given
            EmptyCursorError: ``after`` is an empty string
            BadCursorError: ``after`` does not decode (or has the wrong kind)
            BadLimitError: ``first`` is not positive
        """
        if first is None:
            if after is not None:
                raise MissingLimitError()
            raise MissingParametersError()

        if first <= 0:
            raise BadLimitError(first)
        limit = min(first, max_limit) if max_limit else first

        if after is None:
            return cls(use_after=False, after=0, limit=limit)

        if after == "":
            raise EmptyCursorError()

        try:
            if kind is not None:
                anchor = opaque_id.decode_kind(after, kind)
            else:
                anchor = opaque_id.decode(after)
        except IdDecodeError as e:
            raise BadCursorError(after) from e

        return cls(use_after=True, after=anchor, limit=limit)


class PageInfo(ValueObject):
    """Relay-style page info.

    Only forward pagination is implemented; ``start_cursor`` and
    ``has_previous_page`` always keep their defaults.
    """

    has_next_page: bool = False
    end_cursor: Optional[str] = None
    start_cursor: Optional[str] = None
    has_previous_page: bool = False

    @classmethod
    async def from_last_item(
        cls,
        last: Any,
        kind: EntityKind,
        probe: Callable[[int], Awaitable[bool]],
    ) -> "PageInfo":
        """Build page info from the last item of a page.

        Args:
            last: Last item of the page (anything with an ``id``), or None
            kind: Entity kind used to encode the cursor
            probe: "Does a row strictly beyond this anchor exist" query,
                scoped to the same filter as the page query
        """
        if last is None:
            return cls()

        anchor = last.id
        return cls(
            has_next_page=await probe(anchor),
            end_cursor=opaque_id.encode(kind, anchor),
        )


@dataclass(frozen=True)
class Edge(Generic[T]):
    cursor: str
    node: T


@dataclass(frozen=True)
class Connection(Generic[T]):
    """One page of a collection."""

    edges: list[Edge[T]]
    page_info: PageInfo

    @property
    def nodes(self) -> list[T]:
        return [edge.node for edge in self.edges]


class PagedCollection(ABC, Generic[T]):
    """A filtered, id-ordered collection that can be paged.

    Implementations bind one filter predicate and use it for both
    ``fetch`` and ``exists_after``.
    """

    kind: EntityKind

    @abstractmethod
    async def fetch(self, page: PageRequest) -> list[T]:
        """Fetch up to ``page.limit`` items strictly beyond the anchor."""
        pass

    @abstractmethod
    async def exists_after(self, anchor: int) -> bool:
        """Whether at least one item exists strictly beyond ``anchor``."""
        pass


async def paginate(collection: PagedCollection[T], page: PageRequest) -> Connection[T]:
    """Fetch one page and derive its edges and page info.

    Args:
        collection: Collection bound to its filter
        page: Validated page request

    Returns:
        Connection with one edge per item
    """
    with logfire.span(
        "paginate {kind}",
        kind=collection.kind.value,
        use_after=page.use_after,
        after=page.after,
        limit=page.limit,
    ):
        items = await collection.fetch(page)
        edges = [
            Edge(cursor=opaque_id.encode(collection.kind, item.id), node=item)
            for item in items
        ]
        page_info = await PageInfo.from_last_item(
            items[-1] if items else None, collection.kind, collection.exists_after
        )
        return Connection(edges=edges, page_info=page_info)
