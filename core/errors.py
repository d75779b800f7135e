# =============================================================================
# core/errors.py  -  Error Taxonomy & Classifier
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Defines the small set of failures an operation can end with, and the
#   ONE function (classify_error) that turns a caught transport/provider
#   exception into one of them.
#
# THE TAXONOMY:
#   ValidationError        caller input broke a declared constraint
#   ConfigurationError     a required deployment setting is missing
#   ResourceNotFound       the provider answered 404
#   ClientError            the provider answered another 4xx
#   ProviderUnavailable    network failure, timeout, or a provider 5xx
#   ProviderResponseError  the provider answered 200 with an unusable body
#
# PROPAGATION RULES:
#   - ValidationError is raised by core/validation.py BEFORE any network call
#     and never passes through the classifier.
#   - Every other category is produced here, from a caught exception.
#     Operations never invent these ad hoc.
# =============================================================================

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx


class ErrorKind(str, Enum):
    """Machine-readable failure category carried by every WagtailError."""

    VALIDATION = "validation_error"
    CONFIGURATION = "configuration_error"
    NOT_FOUND = "resource_not_found"
    CLIENT = "client_error"
    UNAVAILABLE = "provider_unavailable"
    BAD_RESPONSE = "provider_response_error"


class WagtailError(Exception):
    """Base class for every failure an operation can surface."""

    kind: ErrorKind = ErrorKind.UNAVAILABLE

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ValidationError(WagtailError):
    """Caller input violates one or more declared constraints.

    ``violations`` maps each offending field to the reason it was rejected,
    so the caller can fix every problem in one retry.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, violations: dict[str, str]) -> None:
        self.violations = dict(violations)
        details = "; ".join(f"{name}: {reason}" for name, reason in self.violations.items())
        super().__init__(f"Invalid parameters - {details}")


class ConfigurationError(WagtailError):
    """A required deployment setting (e.g. WAGTAIL_BASE_URL) is missing."""

    kind = ErrorKind.CONFIGURATION


class ResourceNotFound(WagtailError):
    kind = ErrorKind.NOT_FOUND


class ClientError(WagtailError):
    kind = ErrorKind.CLIENT


class ProviderUnavailable(WagtailError):
    kind = ErrorKind.UNAVAILABLE


class ProviderResponseError(WagtailError):
    kind = ErrorKind.BAD_RESPONSE


# -----------------------------------------------------------------------------
# RequestContext - what was being asked for when the failure happened
# -----------------------------------------------------------------------------
# The classifier needs this to produce messages like
#   "Document with ID 999 not found."
# instead of a bare "404".
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RequestContext:
    """Describes the request a failure belongs to."""

    resource: str                      # "page", "document", "pages", "documents"
    url: str                           # Absolute request URL (for messages)
    identifier: Optional[str] = None   # "ID 999", "slug 'about'" ... if any

    def subject(self) -> str:
        if self.identifier:
            return f"{self.resource.capitalize()} with {self.identifier}"
        return f"Wagtail {self.resource} resource"


def _upstream_detail(response: httpx.Response) -> str:
    """Pull the provider's own error message out of a failed response."""
    try:
        body: Any = response.json()
    except ValueError:
        return response.reason_phrase or ""
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            if body.get(key):
                return str(body[key])
    return response.reason_phrase or ""


def classify_error(exc: Exception, context: RequestContext) -> WagtailError:
    """Map a caught network/provider exception onto the error taxonomy.

    Args:
        exc: The exception raised while talking to the provider.
        context: What was being requested (used in the message).

    Returns:
        A WagtailError subclass instance.  The caller raises it.
    """
    if isinstance(exc, WagtailError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        detail = _upstream_detail(exc.response)
        suffix = f" Upstream said: {detail}" if detail else ""
        if status == 404:
            return ResourceNotFound(
                f"{context.subject()} not found (status 404).{suffix}", status=status
            )
        if 400 <= status < 500:
            return ClientError(
                f"Client error calling Wagtail API for {context.subject()} "
                f"(status {status}). Check query or parameters.{suffix}",
                status=status,
            )
        return ProviderUnavailable(
            f"Wagtail API server error for {context.subject()} (status {status}).{suffix}",
            status=status,
        )

    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return ProviderUnavailable(
            f"Wagtail API timed out while fetching {context.subject()}: {context.url}"
        )

    if isinstance(exc, httpx.HTTPError):
        return ProviderUnavailable(
            f"Network error calling Wagtail API for {context.subject()}: {exc}"
        )

    if isinstance(exc, ValueError):
        # json.JSONDecodeError is a ValueError subclass.
        return ProviderResponseError(
            f"Wagtail API returned a body that is not valid JSON for {context.subject()}."
        )

    return ProviderUnavailable(
        f"Unexpected error calling Wagtail API for {context.subject()}: {exc}"
    )
