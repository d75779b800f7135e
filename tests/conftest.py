"""Shared fixtures for the Wagtail MCP tests.

Provider traffic is simulated with ``httpx.MockTransport``: every test gets a
``FakeWagtail`` that records each outbound request and answers with whatever
the test configured.
"""

from typing import Any, Callable, Optional

import httpx
import pytest

from core.config import WagtailConfig, reset_config

BASE_URL = "https://cms.example.com"


class FakeWagtail:
    """Records requests and answers them with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={})
        )

    def respond(self, status: int = 200, json: Any = None, **kwargs) -> None:
        self._responder = lambda request: httpx.Response(status, json=json, **kwargs)

    def respond_with(self, responder: Callable[[httpx.Request], Any]) -> None:
        self._responder = responder

    def _handle(self, request: httpx.Request):
        self.requests.append(request)
        return self._responder(request)

    def client_factory(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    @property
    def last_request(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None


@pytest.fixture
def wagtail() -> FakeWagtail:
    return FakeWagtail()


@pytest.fixture
def config() -> WagtailConfig:
    return WagtailConfig(base_url=BASE_URL, api_path="/api/v2", api_key="secret-token")


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


def page_item(page_id: int = 1, title: str = "Home", **meta) -> dict:
    """A page item the way Wagtail's /pages/ listing returns it."""
    page_meta = {
        "type": "home.HomePage",
        "detail_url": f"{BASE_URL}/api/v2/pages/{page_id}/",
        "html_url": f"{BASE_URL}/{title.lower()}/",
        "slug": title.lower(),
        "first_published_at": "2024-05-01T10:00:00Z",
    }
    page_meta.update(meta)
    return {"id": page_id, "meta": page_meta, "title": title}


def document_item(doc_id: int = 1, title: str = "Report", download_url: Optional[str] = "default") -> dict:
    meta = {
        "type": "wagtaildocs.Document",
        "detail_url": f"{BASE_URL}/api/v2/documents/{doc_id}/",
    }
    if download_url == "default":
        meta["download_url"] = f"/documents/{doc_id}/{title.lower()}.pdf"
    elif download_url is not None:
        meta["download_url"] = download_url
    return {"id": doc_id, "meta": meta, "title": title}
