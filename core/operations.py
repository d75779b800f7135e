# =============================================================================
# core/operations.py  -  Operation Templates
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wires the pipeline for every tool:
#
#     raw args -> validate -> (resolve endpoint) -> build query
#              -> fetch_json (one GET) -> project -> result
#
#   There are only TWO shapes of operation, so there are two templates:
#     SearchOperation  fixed path, query built from a search/list record
#     DetailOperation  path + query resolved from an identifier record
#
#   Each concrete tool is one instance of a template configured with a small
#   record (name, resource noun, validator, builder/resolver, projector).
#   Adding a resource means adding an instance, not copying a function.
#
# WHAT OPERATIONS DO NOT DO:
#   - They do not read the environment.  A WagtailConfig is passed in.
#   - They do not catch provider errors.  core/client.py already raised a
#     classified WagtailError; it propagates as-is.
# =============================================================================

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from core.client import ClientFactory, fetch_json
from core.config import WagtailConfig
from core.endpoints import resolve_document_endpoint, resolve_page_endpoint
from core.models import ListEnvelope, ResolvedEndpoint
from core.projection import (
    project_document_detail,
    project_document_search,
    project_page_detail,
    project_page_list,
    project_page_search,
)
from core.queries import build_query
from core.validation import (
    validate_document_details,
    validate_document_search,
    validate_page_details,
    validate_page_list,
    validate_page_search,
)


@dataclass(frozen=True)
class SearchOperation:
    """A list-shaped operation against one fixed collection endpoint."""

    name: str
    resource: str                                  # used in error messages
    path: str                                      # e.g. "pages/"
    validate: Callable[[Optional[Mapping[str, Any]]], Any]
    project: Callable[[Any], ListEnvelope]

    async def run(
        self,
        config: WagtailConfig,
        arguments: Optional[Mapping[str, Any]],
        *,
        client_factory: Optional[ClientFactory] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> dict[str, Any]:
        query = self.validate(arguments)
        response = await fetch_json(
            config,
            self.path,
            build_query(query),
            resource=self.resource,
            client_factory=client_factory,
            cancel_event=cancel_event,
        )
        return self.project(response).to_dict()


@dataclass(frozen=True)
class DetailOperation:
    """A single-object lookup whose path depends on the identifier."""

    name: str
    resource: str
    validate: Callable[[Optional[Mapping[str, Any]]], Any]
    resolve: Callable[[Any], ResolvedEndpoint]
    project: Callable[[Any], Any]

    async def run(
        self,
        config: WagtailConfig,
        arguments: Optional[Mapping[str, Any]],
        *,
        client_factory: Optional[ClientFactory] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Any:
        identifier = self.validate(arguments)
        endpoint = self.resolve(identifier)
        response = await fetch_json(
            config,
            endpoint.path,
            endpoint.query,
            resource=self.resource,
            identifier=identifier.describe(),
            client_factory=client_factory,
            cancel_event=cancel_event,
        )
        return self.project(response)


SEARCH_PAGES = SearchOperation(
    name="search_pages",
    resource="pages",
    path="pages/",
    validate=validate_page_search,
    project=project_page_search,
)

LIST_PAGES = SearchOperation(
    name="list_pages",
    resource="pages",
    path="pages/",
    validate=validate_page_list,
    project=project_page_list,
)

SEARCH_DOCUMENTS = SearchOperation(
    name="search_documents",
    resource="documents",
    path="documents/",
    validate=validate_document_search,
    project=project_document_search,
)

GET_PAGE_DETAILS = DetailOperation(
    name="get_page_details",
    resource="page",
    validate=validate_page_details,
    resolve=resolve_page_endpoint,
    project=project_page_detail,
)

GET_DOCUMENT_DETAILS = DetailOperation(
    name="get_document_details",
    resource="document",
    validate=validate_document_details,
    resolve=resolve_document_endpoint,
    project=project_document_detail,
)

OPERATIONS = {
    op.name: op
    for op in (SEARCH_PAGES, LIST_PAGES, SEARCH_DOCUMENTS, GET_PAGE_DETAILS, GET_DOCUMENT_DETAILS)
}
