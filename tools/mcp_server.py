# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL Wagtail tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool the agent can call.  Each tool is a thin wrapper
#   around a core/ operation: it logs the call, hands the arguments to the
#   operation, and turns a core failure into a ToolError the framework can
#   report.
#
# HOW IT WORKS (the flow):
#   1. The agent decides it needs CMS content (e.g., "find the About page")
#   2. It calls a tool by name via MCP (e.g., "get_page_details")
#   3. FastMCP routes the call to the decorated function below
#   4. The function runs the matching core/operations.py template
#   5. The agent receives a JSON-able dict, or an error message
#
# TOOL NAMING CONVENTIONS:
#   - get_*    -> Single-object lookup (idempotent, safe to retry)
#   - search_* -> Full-text query (idempotent, safe to retry)
#   - list_*   -> Filtered listing (idempotent, safe to retry)
#   Everything here is read-only.
#
# ERRORS:
#   Results and errors never mix.  A tool either returns its dict or raises
#   ToolError carrying the classified message from core/errors.py.
#
# RUNNING THIS SERVER:
#   a) Standalone:  python -m tools.mcp_server
#   b) Spawned by the content agent over stdio (agent/content_agent.py)
# =============================================================================

import json
import logging
import os
import sys
from typing import Any, Optional, Union

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from core.client import ClientFactory
from core.config import get_config
from core.errors import ConfigurationError, WagtailError
from core.operations import (
    GET_DOCUMENT_DETAILS,
    GET_PAGE_DETAILS,
    LIST_PAGES,
    SEARCH_DOCUMENTS,
    SEARCH_PAGES,
)

# MCP_SERVICE_NAME is read below at import time, so .env has to be loaded first.
load_dotenv()

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: stdout carries the MCP JSON stream over stdio, and any
# stray line there corrupts the protocol.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status/progress messages
#     - RED for failures
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Errors
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger("wagtail_mcp")


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: Any) -> Any:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


# Tests point this at an httpx.MockTransport-backed client.
_client_factory: Optional[ClientFactory] = None


async def _run(operation, arguments: dict[str, Any]) -> Any:
    """Run one core operation and translate its failure into a ToolError."""
    try:
        result = await operation.run(
            get_config(), arguments, client_factory=_client_factory
        )
    except WagtailError as exc:
        logger.error(f"{_RED}  ✗ {operation.name} failed [{exc.kind.value}]: {exc.message}{_RESET}")
        raise ToolError(exc.message) from exc
    if isinstance(result, dict) and "count" in result:
        _log_status(f"{result['count']} item(s) returned, {result['total_available']} available")
    return _log_response(operation.name, result)


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP(os.getenv("MCP_SERVICE_NAME") or "Wagtail MCP Server")


# =============================================================================
# TOOL 1: search_pages
# =============================================================================
@mcp.tool()
async def search_pages(
    query: Optional[str] = None,
    type: Optional[str] = None,
    locale: Optional[str] = None,
    fields: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    search_operator: Optional[str] = None,
) -> dict:
    """Search pages in the Wagtail CMS.

    Allows filtering by page type and locale, choosing the search operator,
    and paging through results.

    Args:
        query: Search term.  Leave empty to list pages without searching.
        type: Filter by page type (e.g., "blog.BlogPage").
        locale: Locale code to filter by (e.g., "en", "es").  Defaults to "en".
        fields: Comma-separated field selector passed to Wagtail
                (e.g., "body,feed_image", "*,-title", "_,custom_field").
        limit: Maximum number of pages to return (positive, default 50).
        offset: Number of results to skip, for pagination.
        search_operator: "and" or "or" for multi-term queries.  Omit to let
                         the Wagtail search backend decide.

    Returns:
        A dict with:
          - count: Number of pages in this response
          - total_available: Total matches reported by Wagtail
          - items: Pages with id, type, locale, title, slug, url,
            detail_api_url, plus any fields requested via `fields`
    """
    arguments = dict(query=query, type=type, locale=locale, fields=fields,
                     limit=limit, offset=offset, search_operator=search_operator)
    _log_request("search_pages", **arguments)
    return await _run(SEARCH_PAGES, arguments)


# =============================================================================
# TOOL 2: get_page_details
# =============================================================================
# Three ways to name a page.  If more than one is given, the highest
# priority wins and the rest are ignored: id > slug > url.
# =============================================================================
@mcp.tool()
async def get_page_details(
    id: Optional[int] = None,
    slug: Optional[str] = None,
    url: Optional[str] = None,
    fields: Optional[str] = None,
) -> dict:
    """Retrieve the full details of one Wagtail page by its ID, slug, or URL.

    Requires at least one of id, slug, url.  Priority: id > slug > url.

    Args:
        id: The unique numeric ID of the page.
        slug: The slug / path of the page (e.g., "about-us/team").
        url: The full public URL of the page.
        fields: Field selector passed to Wagtail unchanged (default "*").

    Returns:
        The page object exactly as Wagtail returns it.
    """
    arguments = dict(id=id, slug=slug, url=url, fields=fields)
    _log_request("get_page_details", **arguments)
    return await _run(GET_PAGE_DETAILS, arguments)


# =============================================================================
# TOOL 3: search_documents
# =============================================================================
@mcp.tool()
async def search_documents(query: str, search_operator: Optional[str] = None) -> dict:
    """Search Wagtail documents by a query string.

    Args:
        query: The search term (required, non-empty).
        search_operator: "and" or "or" for multi-term queries.  Defaults to "and".

    Returns:
        A dict with count, total_available and items, where each item has
        id, title and download_url.  Documents missing any of those three
        fields are left out of items (but still counted in total_available).
    """
    arguments = dict(query=query, search_operator=search_operator)
    _log_request("search_documents", **arguments)
    return await _run(SEARCH_DOCUMENTS, arguments)


# =============================================================================
# TOOL 4: get_document_details
# =============================================================================
@mcp.tool()
async def get_document_details(id: int) -> dict:
    """Retrieve details (ID, title, download URL) for one Wagtail document.

    Args:
        id: The unique numeric ID of the document.

    Returns:
        A dict with id, title and download_url.
    """
    _log_request("get_document_details", id=id)
    return await _run(GET_DOCUMENT_DETAILS, dict(id=id))


# =============================================================================
# TOOL 5: list_pages
# =============================================================================
# Tree-aware listing: children of a page, descendants of a page, ordered.
# Items come back exactly as Wagtail sends them.
# =============================================================================
@mcp.tool()
async def list_pages(
    type: Optional[str] = None,
    child_of: Optional[Union[int, str]] = None,
    descendant_of: Optional[int] = None,
    fields: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    search: Optional[str] = None,
    search_operator: Optional[str] = None,
    order: Optional[str] = None,
    locale: Optional[str] = None,
) -> dict:
    """List pages from the Wagtail CMS with tree and type filters.

    Args:
        type: Filter by page type (e.g., "blog.BlogPage").
        child_of: Parent page ID, or "root" for top-level pages.
        descendant_of: Ancestor page ID.
        fields: Field selector (e.g., "title,seo_title", "*" for all, "_" for none).
        limit: Maximum number of pages to return (default 50).
        offset: Offset for pagination.
        search: Optional search term.
        search_operator: "and" or "or".
        order: Field to order by (e.g., "title", "-first_published_at").
        locale: Locale code to filter by.

    Returns:
        A dict with count, total_available and the raw page items.
    """
    if isinstance(child_of, str) and child_of.strip().isdigit():
        child_of = int(child_of.strip())
    arguments = dict(type=type, child_of=child_of, descendant_of=descendant_of,
                     fields=fields, limit=limit, offset=offset, search=search,
                     search_operator=search_operator, order=order, locale=locale)
    _log_request("list_pages", **arguments)
    return await _run(LIST_PAGES, arguments)


# =============================================================================
# Server entry point
# =============================================================================
# A missing WAGTAIL_BASE_URL is fatal for the process, so it is checked here
# once instead of failing every tool call.
# =============================================================================
def main() -> None:
    transport = (os.getenv("MCP_TRANSPORT") or "STDIO").upper()
    logger.info(f"Starting {mcp.name}...")
    try:
        get_config().require_base_url()
    except ConfigurationError as exc:
        logger.error(f"{_RED}{exc.message}{_RESET}")
        sys.exit(1)

    if transport != "STDIO":
        logger.error(f"{_RED}Unsupported transport type: {transport}{_RESET}")
        sys.exit(1)

    logger.info("Connecting using STDIO transport...")
    mcp.run()


if __name__ == "__main__":
    main()
