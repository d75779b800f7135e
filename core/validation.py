# =============================================================================
# core/validation.py  -  Parameter Validator
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the raw, untyped argument mapping of a tool call into a typed,
#   fully defaulted record from core/models.py, or raises ValidationError
#   listing EVERY bad field (not just the first one).
#
# TWO STEPS, ALWAYS IN THIS ORDER:
#   1. normalize_arguments()  - absent and null both mean "not supplied";
#      declared sentinel values (page id 0, empty page-search term) also
#      collapse to "not supplied".  This happens once, up front, for every
#      operation, so no field needs its own "is it really there?" check.
#   2. validate_*()           - type/range checks, defaults, cross-field rules.
#
# Nothing in here touches the network.  A ValidationError always means the
# caller can fix the input and try again.
# =============================================================================

from typing import Any, Mapping, Optional, Union
from urllib.parse import urlparse

from core.errors import ValidationError
from core.models import (
    DocumentIdentifier,
    DocumentSearchQuery,
    IdentifierKind,
    PageIdentifier,
    PageListQuery,
    PageSearchQuery,
    SearchOperator,
)

# Values that mean "not supplied" for a specific field of a specific operation.
_PAGE_DETAIL_SENTINELS = {"id": 0}
_PAGE_SEARCH_SENTINELS = {"query": ""}


def normalize_arguments(
    raw: Optional[Mapping[str, Any]],
    sentinels: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Drop every argument that counts as "not supplied".

    Args:
        raw: The caller's arguments (may be None).
        sentinels: field -> value that should be treated as absent.

    Returns:
        A new dict holding only the arguments that were really supplied.
    """
    sentinels = sentinels or {}
    cleaned: dict[str, Any] = {}
    for name, value in (raw or {}).items():
        if value is None:
            continue
        if name in sentinels and _same_value(value, sentinels[name]):
            continue
        cleaned[name] = value
    return cleaned


def _same_value(value: Any, sentinel: Any) -> bool:
    # True == 1 in Python; a bool must never match a numeric sentinel.
    return type(value) is type(sentinel) and value == sentinel


# -----------------------------------------------------------------------------
# Field readers - each appends to `violations` instead of raising
# -----------------------------------------------------------------------------
def _read_int(
    args: Mapping[str, Any],
    name: str,
    violations: dict[str, str],
    minimum: int,
) -> Optional[int]:
    if name not in args:
        return None
    value = args[name]
    if isinstance(value, bool) or not isinstance(value, int):
        violations[name] = f"must be an integer, got {value!r}"
        return None
    if value < minimum:
        rule = "a positive integer" if minimum == 1 else "a non-negative integer"
        violations[name] = f"must be {rule}, got {value}"
        return None
    return value


def _read_str(
    args: Mapping[str, Any],
    name: str,
    violations: dict[str, str],
    non_empty: bool = False,
) -> Optional[str]:
    if name not in args:
        return None
    value = args[name]
    if not isinstance(value, str):
        violations[name] = f"must be a string, got {type(value).__name__}"
        return None
    if non_empty and not value.strip():
        violations[name] = "must not be empty"
        return None
    return value


def _read_operator(
    args: Mapping[str, Any],
    name: str,
    violations: dict[str, str],
) -> Optional[SearchOperator]:
    text = _read_str(args, name, violations)
    if text is None:
        return None
    try:
        return SearchOperator.parse(text)
    except ValueError:
        violations[name] = f"must be 'and' or 'or', got {text!r}"
        return None


def is_valid_url(value: str) -> bool:
    """True for absolute http(s) URLs with a host."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _raise_if_any(violations: dict[str, str]) -> None:
    if violations:
        raise ValidationError(violations)


# -----------------------------------------------------------------------------
# One validator per operation
# -----------------------------------------------------------------------------
def validate_page_search(raw: Optional[Mapping[str, Any]]) -> PageSearchQuery:
    """Validate ``search_pages`` arguments.

    Accepted: query, type, locale (default "en"), fields, limit (default 50,
    positive), offset (non-negative), search_operator ("and"/"or", no default).
    """
    args = normalize_arguments(raw, _PAGE_SEARCH_SENTINELS)
    violations: dict[str, str] = {}

    term = _read_str(args, "query", violations)
    type_filter = _read_str(args, "type", violations)
    locale = _read_str(args, "locale", violations)
    fields = _read_str(args, "fields", violations)
    limit = _read_int(args, "limit", violations, minimum=1)
    offset = _read_int(args, "offset", violations, minimum=0)
    operator = _read_operator(args, "search_operator", violations)

    _raise_if_any(violations)
    return PageSearchQuery(
        term=term,
        type_filter=type_filter,
        locale=locale if locale is not None else "en",
        field_selector=fields,
        limit=limit if limit is not None else 50,
        offset=offset,
        search_operator=operator,
    )


def validate_page_details(raw: Optional[Mapping[str, Any]]) -> PageIdentifier:
    """Validate ``get_page_details`` arguments and pick the winning identifier.

    Priority is id > slug > url.  Lower-priority identifiers that were also
    supplied are ignored without complaint, but they are still type-checked:
    a malformed URL is rejected even when an id is present.
    """
    args = normalize_arguments(raw, _PAGE_DETAIL_SENTINELS)
    violations: dict[str, str] = {}

    page_id = _read_int(args, "id", violations, minimum=1)
    slug = _read_str(args, "slug", violations, non_empty=True)
    url = _read_str(args, "url", violations)
    fields = _read_str(args, "fields", violations)

    if url is not None and not is_valid_url(url):
        violations["url"] = f"must be a valid http(s) URL, got {url!r}"
        url = None

    if not any(name in args for name in ("id", "slug", "url")):
        violations["id/slug/url"] = 'At least one of "id", "slug", or "url" must be provided.'

    _raise_if_any(violations)

    if page_id is not None:
        return PageIdentifier(IdentifierKind.BY_ID, page_id, fields)
    if slug is not None:
        return PageIdentifier(IdentifierKind.BY_SLUG, slug, fields)
    return PageIdentifier(IdentifierKind.BY_URL, url, fields)


def validate_document_search(raw: Optional[Mapping[str, Any]]) -> DocumentSearchQuery:
    """Validate ``search_documents`` arguments (query required, operator default AND)."""
    args = normalize_arguments(raw)
    violations: dict[str, str] = {}

    term = _read_str(args, "query", violations, non_empty=True)
    if "query" not in args:
        violations["query"] = "is required"
    operator = _read_operator(args, "search_operator", violations)

    _raise_if_any(violations)
    return DocumentSearchQuery(
        term=term,
        search_operator=operator if operator is not None else SearchOperator.AND,
    )


def validate_document_details(raw: Optional[Mapping[str, Any]]) -> DocumentIdentifier:
    args = normalize_arguments(raw)
    violations: dict[str, str] = {}

    doc_id = _read_int(args, "id", violations, minimum=1)
    if "id" not in args:
        violations["id"] = "is required"

    _raise_if_any(violations)
    return DocumentIdentifier(id=doc_id)


def validate_page_list(raw: Optional[Mapping[str, Any]]) -> PageListQuery:
    """Validate ``list_pages`` arguments.

    ``child_of`` takes a positive page id or the literal "root".
    ``fields`` defaults to "*" (every default field).
    """
    args = normalize_arguments(raw)
    violations: dict[str, str] = {}

    child_of: Optional[Union[int, str]] = None
    if args.get("child_of") == "root":
        child_of = "root"
    else:
        child_of = _read_int(args, "child_of", violations, minimum=1)
        if "child_of" in violations:
            violations["child_of"] = "must be a positive page id or 'root'"

    descendant_of = _read_int(args, "descendant_of", violations, minimum=1)
    type_filter = _read_str(args, "type", violations)
    fields = _read_str(args, "fields", violations)
    limit = _read_int(args, "limit", violations, minimum=1)
    offset = _read_int(args, "offset", violations, minimum=0)
    term = _read_str(args, "search", violations)
    operator = _read_operator(args, "search_operator", violations)
    order = _read_str(args, "order", violations, non_empty=True)
    locale = _read_str(args, "locale", violations)

    _raise_if_any(violations)
    return PageListQuery(
        type_filter=type_filter,
        child_of=child_of,
        descendant_of=descendant_of,
        field_selector=fields if fields is not None else "*",
        limit=limit if limit is not None else 50,
        offset=offset,
        term=term or None,
        search_operator=operator,
        order=order,
        locale=locale,
    )
