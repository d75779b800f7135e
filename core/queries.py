# =============================================================================
# core/queries.py  -  Query Builder
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Converts a validated query record into Wagtail's query-string vocabulary.
#
# RULES:
#   - A key appears ONLY when its field is present.  Wagtail treats a missing
#     "search_operator" differently from an explicit one, so nothing here
#     invents defaults beyond the ones already baked into the record.
#   - Search operators go out lower-case ("and" / "or").
#   - Numbers stay numbers; the config resolver stringifies at URL time.
#   - Key order is fixed per record type, so identical records always give
#     identical mappings.
# =============================================================================

from typing import Any, Union

from core.models import DocumentSearchQuery, PageListQuery, PageSearchQuery

QueryRecord = Union[PageSearchQuery, DocumentSearchQuery, PageListQuery]


def _put(params: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        params[key] = value


def build_page_search_params(query: PageSearchQuery) -> dict[str, Any]:
    params: dict[str, Any] = {}
    _put(params, "search", query.term)
    _put(params, "type", query.type_filter)
    _put(params, "locale", query.locale)
    _put(params, "fields", query.field_selector)
    _put(params, "limit", query.limit)
    _put(params, "offset", query.offset)
    if query.search_operator is not None:
        params["search_operator"] = query.search_operator.value
    return params


def build_document_search_params(query: DocumentSearchQuery) -> dict[str, Any]:
    return {
        "search": query.term,
        "search_operator": query.search_operator.value,
    }


def build_page_list_params(query: PageListQuery) -> dict[str, Any]:
    params: dict[str, Any] = {}
    _put(params, "type", query.type_filter)
    _put(params, "child_of", query.child_of)
    _put(params, "descendant_of", query.descendant_of)
    _put(params, "fields", query.field_selector)
    _put(params, "limit", query.limit)
    _put(params, "offset", query.offset)
    _put(params, "search", query.term)
    if query.search_operator is not None:
        params["search_operator"] = query.search_operator.value
    _put(params, "order", query.order)
    _put(params, "locale", query.locale)
    return params


_BUILDERS = {
    PageSearchQuery: build_page_search_params,
    DocumentSearchQuery: build_document_search_params,
    PageListQuery: build_page_list_params,
}


def build_query(query: QueryRecord) -> dict[str, Any]:
    """Build the outgoing query mapping for any search/list record."""
    try:
        builder = _BUILDERS[type(query)]
    except KeyError:
        raise TypeError(f"No query builder for {type(query).__name__}") from None
    return builder(query)
