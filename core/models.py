# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that flows
# through an operation: the validated query records, the page identifier
# variant, the resolved endpoint, and the projected summaries that go back to
# the agent.
#
# LIFECYCLE:
#   Every record here is built fresh for one tool call and thrown away when
#   the call returns.  They are all frozen: nothing mutates a record after
#   construction, a changed value means a new record.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class SearchOperator(str, Enum):
    """How the provider combines multiple search terms."""

    AND = "and"
    OR = "or"

    @classmethod
    def parse(cls, value: str) -> "SearchOperator":
        return cls(value.strip().lower())


class IdentifierKind(str, Enum):
    """The three ways to point at a single page, in priority order."""

    BY_ID = "id"
    BY_SLUG = "slug"
    BY_URL = "url"


# -----------------------------------------------------------------------------
# Query records (the validator's output, the query builder's input)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PageSearchQuery:
    """A validated, fully defaulted page search."""

    term: Optional[str] = None
    type_filter: Optional[str] = None          # e.g. "blog.BlogPage"
    locale: str = "en"
    field_selector: Optional[str] = None       # opaque, e.g. "body,feed_image"
    limit: int = 50
    offset: Optional[int] = None
    search_operator: Optional[SearchOperator] = None
    # Left unset on purpose: the provider picks its own default operator
    # for pages and treats an explicit value differently.


@dataclass(frozen=True)
class PageListQuery:
    """A validated page listing with tree filters."""

    type_filter: Optional[str] = None
    child_of: Optional[Union[int, str]] = None  # page id or "root"
    descendant_of: Optional[int] = None
    field_selector: str = "*"
    limit: int = 50
    offset: Optional[int] = None
    term: Optional[str] = None
    search_operator: Optional[SearchOperator] = None
    order: Optional[str] = None                 # e.g. "title", "-first_published_at"
    locale: Optional[str] = None


@dataclass(frozen=True)
class DocumentSearchQuery:
    """A validated document search.  The term is mandatory."""

    term: str
    search_operator: SearchOperator = SearchOperator.AND


@dataclass(frozen=True)
class PageIdentifier:
    """Exactly one way of naming a page, already priority-resolved.

    ``value`` is an int for BY_ID and a str for BY_SLUG / BY_URL.
    """

    kind: IdentifierKind
    value: Union[int, str]
    field_selector: Optional[str] = None

    def describe(self) -> str:
        if self.kind is IdentifierKind.BY_ID:
            return f"ID {self.value}"
        return f"{self.kind.value} '{self.value}'"


@dataclass(frozen=True)
class DocumentIdentifier:
    id: int

    def describe(self) -> str:
        return f"ID {self.id}"


# -----------------------------------------------------------------------------
# ResolvedEndpoint - the endpoint resolver's output
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ResolvedEndpoint:
    """Which REST path to hit and with which query parameters."""

    path: str                                   # e.g. "pages/find/"
    query: dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# Projected output records
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class DocumentSummary:
    """What the agent gets back for each document."""

    id: int
    title: str
    download_url: str


@dataclass(frozen=True)
class ListEnvelope:
    """Result of every list-shaped operation.

    ``count`` is the number of items actually returned.  ``total_available``
    is the provider's own total, which can be larger (pagination) or larger
    still if incomplete items were dropped during projection.
    """

    count: int
    total_available: Optional[int]
    items: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "total_available": self.total_available,
            "items": list(self.items),
        }
