"""
Offset pagination over a MongoDB collection.

The total is counted before the page is fetched and the two reads are not
isolated from each other: ``total`` reflects the collection at count time,
``items`` reflect it at fetch time.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_PAGINATION_LIMIT = 30

# MongoDB stores skip and limit as signed 64-bit integers
INT64_MAX = 2 ** 63 - 1
INT64_MIN = -(2 ** 63)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class PaginationError(Exception):
    """A count or fetch against the store failed."""

    def __init__(self, stage: str, error: PyMongoError):
        super().__init__(f"{stage} failed: {error}")
        self.stage = stage
        self.error = error


def parse_int(raw: Optional[str], default: int) -> int:
    """
    Parse a query value, falling back to ``default`` when it is not a plain
    ASCII integer within the signed 64-bit range.
    """
    if raw is None or not _INTEGER_RE.fullmatch(raw):
        return default
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        return default
    return value


@dataclass(frozen=True)
class PageRequest:
    """Validated page/limit pair."""

    page: int
    limit: int

    @classmethod
    def from_query(
        cls,
        page: Optional[str],
        limit: Optional[str],
        default_page: int = DEFAULT_PAGE,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_PAGINATION_LIMIT,
    ) -> "PageRequest":
        """
        Build a request from raw query values.

        Unparseable values use the defaults. ``page`` below 1 becomes 1.
        ``limit`` is capped at ``max_limit``; zero or negative limits are kept
        and passed to the driver (0 means no limit, negative means one batch
        of ``abs(limit)`` documents).
        """
        page_number = max(parse_int(page, default_page), 1)
        page_size = min(parse_int(limit, default_limit), max_limit)
        return cls(page=page_number, limit=page_size)

    @property
    def skip(self) -> int:
        # A non-positive limit would give a negative skip, which the driver rejects
        return min(max((self.page - 1) * self.limit, 0), INT64_MAX)


@dataclass
class Page(Generic[T]):
    items: List[T]
    page: int
    limit: int
    total: int


def paginate(
    collection: Collection,
    request: PageRequest,
    decode: Callable[[dict], T],
    query: Optional[dict] = None,
) -> Page[T]:
    """
    Count the matching documents, then fetch one page of them in ``_id`` order.

    Args:
        collection: Collection to read
        request: Page and limit to apply
        decode: Converts a raw document into the item type
        query: Optional filter, defaults to the whole collection

    Returns:
        Page: The decoded items with page, limit and total

    Raises:
        PaginationError: If either store operation fails
    """
    query = query or {}

    try:
        total = collection.count_documents(query)
    except PyMongoError as e:
        logger.error(f"Error counting documents in '{collection.name}': {e}")
        raise PaginationError("count", e) from e

    try:
        cursor = (
            collection.find(query)
            .sort("_id", ASCENDING)
            .skip(request.skip)
            .limit(request.limit)
        )
        items: List[Any] = [decode(doc) for doc in cursor]
    except PyMongoError as e:
        logger.error(f"Error fetching documents from '{collection.name}': {e}")
        raise PaginationError("fetch", e) from e

    return Page(items=items, page=request.page, limit=request.limit, total=total)
