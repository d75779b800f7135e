# =============================================================================
# core/projection.py  -  Response Projector
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reshapes a decoded Wagtail response into exactly what each tool promises
#   to return.  Pure functions: no I/O, no logging, no mutation of the input.
#
#   page search / page list  ->  ListEnvelope of page dicts
#   page detail              ->  the provider object, verbatim
#   document search          ->  ListEnvelope of {id, title, download_url}
#   document detail          ->  {id, title, download_url}
#
# COUNT vs TOTAL:
#   "count" is how many items we actually emit (after dropping incomplete
#   documents).  "total_available" is the provider's meta.total_count,
#   untouched.  An empty items list with a nonzero total is still a success.
# =============================================================================

from typing import Any, Callable, Optional

from core.errors import ProviderResponseError
from core.models import DocumentSummary, ListEnvelope

# Page meta keys that are lifted to the top level, in output order.
_PAGE_META_FIELDS = (
    ("type", "type"),
    ("locale", "locale"),
    ("slug", "slug"),
    ("html_url", "url"),
    ("detail_url", "detail_api_url"),
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _list_payload(response: Any, resource: str) -> tuple[list[Any], int]:
    """Check the {meta: {total_count}, items: [...]} shape and unpack it."""
    if not isinstance(response, dict):
        raise ProviderResponseError(
            f"Received invalid data structure from Wagtail {resource} API: expected an object."
        )
    meta = response.get("meta")
    total = meta.get("total_count") if isinstance(meta, dict) else None
    if not _is_number(total):
        raise ProviderResponseError(
            f"Received invalid data structure from Wagtail {resource} API: "
            "meta.total_count is missing or not a number."
        )
    items = response.get("items")
    if not isinstance(items, list):
        raise ProviderResponseError(
            f"Received invalid data structure from Wagtail {resource} API: items is not a list."
        )
    return items, int(total)


def project_page_item(item: dict[str, Any]) -> dict[str, Any]:
    """Flatten a page item's ``meta`` into top-level keys.

    ``locale`` is only emitted when the provider sent one.  Every other
    top-level field (custom fields requested via ``fields``) is kept, except
    that a custom field named like a lifted key (type, locale, slug, url,
    detail_api_url) is shadowed by the meta value.
    """
    meta = item.get("meta") if isinstance(item.get("meta"), dict) else {}
    page: dict[str, Any] = {"id": item.get("id")}
    for source, target in _PAGE_META_FIELDS:
        if source == "locale" and "locale" not in meta:
            continue
        page[target] = meta.get(source)
    page["title"] = item.get("title")
    for key, value in item.items():
        if key not in ("meta", "id", "title"):
            page.setdefault(key, value)
    return page


def project_page_search(response: Any) -> ListEnvelope:
    items, total = _list_payload(response, "pages")
    pages = []
    for item in items:
        if not isinstance(item, dict):
            raise ProviderResponseError(
                "Received invalid data structure from Wagtail pages API: item is not an object."
            )
        pages.append(project_page_item(item))
    return ListEnvelope(count=len(pages), total_available=total, items=pages)


def project_page_list(response: Any) -> ListEnvelope:
    """Page listing keeps each item exactly as the provider sent it."""
    items, total = _list_payload(response, "pages")
    pages = [dict(item) for item in items if isinstance(item, dict)]
    return ListEnvelope(count=len(pages), total_available=total, items=pages)


def project_page_detail(response: Any) -> Any:
    # Field selection already happened server-side through `fields`.
    if response is None or response == {} or response == "":
        raise ProviderResponseError("Wagtail API returned an empty page detail response.")
    return response


def _document_summary(item: Any) -> Optional[DocumentSummary]:
    """Return a summary, or None when id/title/download_url is missing."""
    if not isinstance(item, dict):
        return None
    meta = item.get("meta")
    download_url = meta.get("download_url") if isinstance(meta, dict) else None
    doc_id = item.get("id")
    title = item.get("title")
    if not _is_number(doc_id) or not isinstance(title, str) or not isinstance(download_url, str):
        return None
    return DocumentSummary(id=doc_id, title=title, download_url=download_url)


def _summary_dict(summary: DocumentSummary) -> dict[str, Any]:
    return {"id": summary.id, "title": summary.title, "download_url": summary.download_url}


def project_document_search(response: Any) -> ListEnvelope:
    items, total = _list_payload(response, "documents")
    documents = []
    for item in items:
        summary = _document_summary(item)
        if summary is not None:
            documents.append(_summary_dict(summary))
    return ListEnvelope(count=len(documents), total_available=total, items=documents)


def project_document_detail(response: Any) -> dict[str, Any]:
    summary = _document_summary(response)
    if summary is None:
        raise ProviderResponseError(
            "API request successful but document response is missing id, title or download_url."
        )
    return _summary_dict(summary)


PROJECTORS: dict[str, Callable[[Any], Any]] = {
    "search_pages": project_page_search,
    "list_pages": project_page_list,
    "get_page_details": project_page_detail,
    "search_documents": project_document_search,
    "get_document_details": project_document_detail,
}


def project(operation: str, response: Any) -> Any:
    """Project *response* for the named operation."""
    try:
        projector = PROJECTORS[operation]
    except KeyError:
        raise ValueError(f"Unknown operation: {operation}") from None
    return projector(response)
