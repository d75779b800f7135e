import asyncio
import json

import httpx
import pytest

from core.errors import (
    ClientError,
    ErrorKind,
    ProviderResponseError,
    ProviderUnavailable,
    RequestContext,
    ResourceNotFound,
    ValidationError,
    classify_error,
)

URL = "https://cms.example.com/api/v2/documents/999/"
CONTEXT = RequestContext(resource="document", url=URL, identifier="ID 999")


def _status_error(status: int, body=None) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", URL)
    response = httpx.Response(status, json=body, request=request)
    return httpx.HTTPStatusError(f"status {status}", request=request, response=response)


def test_404_is_resource_not_found_naming_the_identifier():
    error = classify_error(_status_error(404, {"message": "Not found."}), CONTEXT)
    assert isinstance(error, ResourceNotFound)
    assert error.kind is ErrorKind.NOT_FOUND
    assert error.status == 404
    assert "999" in error.message
    assert "Not found." in error.message


@pytest.mark.parametrize("status", [400, 401, 403, 422])
def test_other_4xx_is_client_error(status):
    error = classify_error(_status_error(status), CONTEXT)
    assert isinstance(error, ClientError)
    assert str(status) in error.message


@pytest.mark.parametrize("status", [500, 502, 503])
def test_5xx_is_provider_unavailable(status):
    error = classify_error(_status_error(status), CONTEXT)
    assert isinstance(error, ProviderUnavailable)
    assert error.status == status


def test_timeout_is_provider_unavailable():
    exc = httpx.ReadTimeout("timed out", request=httpx.Request("GET", URL))
    assert isinstance(classify_error(exc, CONTEXT), ProviderUnavailable)


def test_connection_failure_is_provider_unavailable():
    exc = httpx.ConnectError("refused", request=httpx.Request("GET", URL))
    error = classify_error(exc, CONTEXT)
    assert isinstance(error, ProviderUnavailable)
    assert "refused" in error.message


def test_bad_json_is_provider_response_error():
    exc = json.JSONDecodeError("Expecting value", "<html>", 0)
    assert isinstance(classify_error(exc, CONTEXT), ProviderResponseError)


def test_already_classified_errors_pass_through():
    original = ProviderResponseError("bad shape")
    assert classify_error(original, CONTEXT) is original


def test_validation_error_lists_every_field():
    error = ValidationError({"limit": "must be a positive integer, got 0", "offset": "must be a non-negative integer, got -1"})
    assert error.kind is ErrorKind.VALIDATION
    assert "limit" in error.message and "offset" in error.message


def test_subject_without_identifier():
    context = RequestContext(resource="pages", url="https://cms.example.com/api/v2/pages/")
    error = classify_error(_status_error(400), context)
    assert "Wagtail pages resource" in error.message


def test_overall_deadline_is_provider_unavailable():
    error = classify_error(asyncio.TimeoutError("no response within 12s"), CONTEXT)
    assert isinstance(error, ProviderUnavailable)
    assert "timed out" in error.message
