# =============================================================================
# core/endpoints.py  -  Endpoint Resolver (detail lookups)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Decides which Wagtail REST path serves a detail lookup, and which query
#   parameters go with it.
#
#   Page by id    ->  pages/{id}/      fields=<selector or "*">
#   Page by slug  ->  pages/find/      html_path=<slug>, fields=...
#   Page by url   ->  pages/find/      html_path=<url path, no outer slashes>, fields=...
#   Document      ->  documents/{id}/
#
#   Wagtail's "find" view redirects to the matching detail view, so the HTTP
#   client follows redirects.
# =============================================================================

from urllib.parse import urlparse

from core.errors import ValidationError
from core.models import DocumentIdentifier, IdentifierKind, PageIdentifier, ResolvedEndpoint

DEFAULT_FIELD_SELECTOR = "*"


def _html_path_from_url(url: str) -> str:
    try:
        parsed = urlparse(url)
    except ValueError:
        raise ValidationError({"url": f"Invalid URL provided: {url}"}) from None
    if not parsed.scheme or not parsed.netloc:
        raise ValidationError({"url": f"Invalid URL provided: {url}"})
    return parsed.path.strip("/")


def resolve_page_endpoint(identifier: PageIdentifier) -> ResolvedEndpoint:
    """Resolve a page identifier to a path and query.

    The identifier already holds the highest-priority variant the caller
    supplied (see validate_page_details), so this is a straight dispatch.
    The URL variant is parsed again here because this is where its path is
    actually extracted.
    """
    fields = identifier.field_selector or DEFAULT_FIELD_SELECTOR

    if identifier.kind is IdentifierKind.BY_ID:
        return ResolvedEndpoint(path=f"pages/{identifier.value}/", query={"fields": fields})

    if identifier.kind is IdentifierKind.BY_SLUG:
        html_path = str(identifier.value)
    else:
        html_path = _html_path_from_url(str(identifier.value))

    return ResolvedEndpoint(
        path="pages/find/",
        query={"html_path": html_path, "fields": fields},
    )


def resolve_document_endpoint(identifier: DocumentIdentifier) -> ResolvedEndpoint:
    return ResolvedEndpoint(path=f"documents/{identifier.id}/")
