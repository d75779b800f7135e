# =============================================================================
# core/client.py  -  Provider Client (the ONE network call per operation)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Performs a single HTTP GET against the Wagtail API with httpx and returns
#   the decoded JSON body.  Every failure leaves this module already
#   classified (core/errors.py), so operations never inspect httpx errors.
#
# RESOURCE MODEL:
#   - A fresh httpx.AsyncClient per call, closed afterwards.  Nothing is
#     shared between concurrent tool calls.  Tests inject their own client
#     through `client_factory` (usually one built on httpx.MockTransport).
#   - The config's timeout bounds the whole request; expiry becomes
#     ProviderUnavailable.
#   - An optional asyncio.Event acts as a cancellation signal.  If it is
#     already set, no request is made.  If it fires mid-request, the request
#     is cancelled.  Either way asyncio.CancelledError propagates.
#   - No retries.  One failed attempt is final.
# =============================================================================

import asyncio
import logging
from typing import Any, Callable, Mapping, Optional

import httpx

from core.config import WagtailConfig
from core.errors import RequestContext, classify_error

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], httpx.AsyncClient]


async def _await_request(
    request: "asyncio.Task[httpx.Response]",
    timeout: float,
    cancel_event: Optional[asyncio.Event],
) -> httpx.Response:
    """Wait for ``request`` under one overall deadline, honoring ``cancel_event``.

    The request task never outlives this call: on timeout, caller
    cancellation or outer task cancellation it is cancelled and reaped
    before the client is closed.
    """
    waiter = None
    pending = {request}
    if cancel_event is not None:
        waiter = asyncio.ensure_future(cancel_event.wait())
        pending.add(waiter)
    try:
        done, _ = await asyncio.wait(pending, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        if request in done:
            return request.result()
    finally:
        if waiter is not None:
            waiter.cancel()
        if not request.done():
            request.cancel()
            await asyncio.wait({request})
    if waiter is not None and cancel_event.is_set():
        raise asyncio.CancelledError("Wagtail API request cancelled by caller")
    raise asyncio.TimeoutError(f"no response within {timeout:g}s")


async def fetch_json(
    config: WagtailConfig,
    path: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    resource: str,
    identifier: Optional[str] = None,
    client_factory: Optional[ClientFactory] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> Any:
    """GET ``{base}{api_path}/{path}?{params}`` and return the decoded JSON.

    Args:
        config: Connection settings (base URL, API key, timeout).
        path: Path fragment below the API root, e.g. ``"pages/find/"``.
        params: Query parameters; omitted from the URL when empty.
        resource: Noun used in error messages ("page", "documents", ...).
        identifier: Human description of the looked-up item ("ID 999").
        client_factory: Builds the httpx client.  Defaults to a plain
            AsyncClient with the config's timeout.
        cancel_event: Optional cancellation signal.

    Raises:
        ConfigurationError: WAGTAIL_BASE_URL is not set.
        ResourceNotFound, ClientError, ProviderUnavailable,
        ProviderResponseError: see core/errors.py.
        asyncio.CancelledError: the caller cancelled.
    """
    url = config.build_url(path, params)
    context = RequestContext(resource=resource, url=url, identifier=identifier)

    if cancel_event is not None and cancel_event.is_set():
        raise asyncio.CancelledError("Wagtail API request cancelled before it started")

    if client_factory is not None:
        client = client_factory()
    else:
        client = httpx.AsyncClient(timeout=config.timeout_seconds)

    logger.info("Calling Wagtail API: %s", url)
    try:
        async with client:
            request = asyncio.ensure_future(
                client.get(url, headers=config.headers(), follow_redirects=True)
            )
            response = await _await_request(request, config.timeout_seconds, cancel_event)
            logger.info("Received response from Wagtail API (status %s)", response.status_code)
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, asyncio.TimeoutError, ValueError) as exc:
        error = classify_error(exc, context)
        logger.warning("Wagtail API call failed [%s]: %s", error.kind.value, error.message)
        raise error from exc
