from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from svrf.clients.svrf_api import SvrfApiClient
from svrf.core.errors import (
    ExchangeFailedError,
    MissingApiKeyError,
    MissingPayloadError,
    TransportError,
)
from svrf.models.credential import Credential
from svrf.models.media import MediaType
from svrf.schemas.options import SearchOptions
from svrf.services.credential_store import CredentialStore
from svrf.services.media_fetch import MediaFetchClient
from svrf.services.token_lifecycle import TokenLifecycleManager
from tests.fakes import FakeConfigSource

MEDIA = {"id": "42", "type": "3d", "files": {"glb": "https://cdn.svrf.test/42.glb"}}


class FakeSvrfServer:
    """Minimal stand-in for the SVRF API used through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.auth_status = 200
        self.responses: dict[str, tuple[int, dict]] = {}
        self.auth_release: asyncio.Event | None = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/app/authenticate"):
            if self.auth_release is not None:
                await self.auth_release.wait()
            if self.auth_status != 200:
                return httpx.Response(self.auth_status, json={"success": False})
            return httpx.Response(200, json={"success": True, "token": "tok", "expiresIn": 3600})
        for suffix, (status_code, body) in self.responses.items():
            if request.url.path.endswith(suffix):
                return httpx.Response(status_code, json=body)
        return httpx.Response(404, json={"success": False})

    @property
    def media_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if "/vr/" in r.url.path]


def _fetch_client(
    server: FakeSvrfServer, store: CredentialStore, *, api_key: str | None = "key"
) -> MediaFetchClient:
    http_client = httpx.AsyncClient(
        base_url="https://api.svrf.test/v1", transport=httpx.MockTransport(server)
    )
    api = SvrfApiClient(http_client)
    lifecycle = TokenLifecycleManager(
        authenticator=api,
        credential_store=store,
        config_source=FakeConfigSource({"SVRF_API_KEY": api_key} if api_key else None),
    )
    return MediaFetchClient(api, lifecycle)


@pytest.mark.asyncio
async def test_search_returns_page_after_authenticating(credential_store: CredentialStore) -> None:
    server = FakeSvrfServer()
    server.responses["/vr/search"] = (200, {"success": True, "media": [MEDIA], "nextPageNum": 3})
    client = _fetch_client(server, credential_store)

    page = await client.search("cats", SearchOptions(size=1))

    assert [item.id for item in page.items] == ["42"]
    assert page.items[0].type is MediaType.THREE_D
    assert page.next_page_num == 3
    assert page.next_page_cursor is None
    assert server.requests[0].url.path.endswith("/app/authenticate")
    assert server.media_requests[0].headers["x-app-token"] == "tok"


@pytest.mark.asyncio
async def test_trending_returns_cursor(credential_store: CredentialStore) -> None:
    server = FakeSvrfServer()
    server.responses["/vr/trending"] = (200, {"success": True, "media": [], "nextPageCursor": "abc"})
    client = _fetch_client(server, credential_store)

    page = await client.get_trending()

    assert page.items == []
    assert page.next_page_cursor == "abc"


@pytest.mark.asyncio
async def test_missing_media_array_is_missing_payload(credential_store: CredentialStore) -> None:
    server = FakeSvrfServer()
    server.responses["/vr/search"] = (200, {"success": True})
    client = _fetch_client(server, credential_store)

    with pytest.raises(MissingPayloadError):
        await client.search("cats")


@pytest.mark.asyncio
async def test_null_media_item_is_missing_payload(credential_store: CredentialStore) -> None:
    server = FakeSvrfServer()
    server.responses["/vr/42"] = (200, {"success": True, "media": None})
    client = _fetch_client(server, credential_store)

    with pytest.raises(MissingPayloadError):
        await client.get_media("42")


@pytest.mark.asyncio
async def test_get_media_returns_item(credential_store: CredentialStore) -> None:
    server = FakeSvrfServer()
    server.responses["/vr/42"] = (200, {"success": True, "media": MEDIA})
    client = _fetch_client(server, credential_store)

    media = await client.get_media("42")

    assert media.glb_url == "https://cdn.svrf.test/42.glb"


@pytest.mark.asyncio
async def test_transport_failure_leaves_credential_untouched(
    credential_store: CredentialStore,
) -> None:
    cached = Credential(token="cached", expires_at=datetime.now(timezone.utc) + timedelta(hours=1))
    credential_store.save_credential(cached)
    server = FakeSvrfServer()
    server.responses["/vr/trending"] = (502, {"success": False})
    client = _fetch_client(server, credential_store)

    with pytest.raises(TransportError):
        await client.get_trending()

    assert credential_store.load_credential() == cached
    assert not any(r.url.path.endswith("/app/authenticate") for r in server.requests)


@pytest.mark.asyncio
async def test_fetch_surfaces_authentication_failure_without_requesting_media(
    credential_store: CredentialStore,
) -> None:
    server = FakeSvrfServer()
    server.auth_status = 401
    client = _fetch_client(server, credential_store)

    with pytest.raises(ExchangeFailedError):
        await client.search("cats")

    assert server.media_requests == []


@pytest.mark.asyncio
async def test_fetch_without_api_key_fails(credential_store: CredentialStore) -> None:
    server = FakeSvrfServer()
    client = _fetch_client(server, credential_store, api_key=None)

    with pytest.raises(MissingApiKeyError):
        await client.get_trending()

    assert server.requests == []


@pytest.mark.asyncio
async def test_concurrent_fetches_wait_for_a_single_authentication(
    credential_store: CredentialStore,
) -> None:
    server = FakeSvrfServer()
    server.auth_release = asyncio.Event()
    server.responses["/vr/search"] = (200, {"success": True, "media": [MEDIA]})
    client = _fetch_client(server, credential_store)

    fetches = [asyncio.create_task(client.search(f"q{i}")) for i in range(5)]
    await asyncio.sleep(0.01)
    assert server.media_requests == []

    server.auth_release.set()
    pages = await asyncio.gather(*fetches)

    auth_requests = [r for r in server.requests if r.url.path.endswith("/app/authenticate")]
    assert len(auth_requests) == 1
    assert len(server.media_requests) == 5
    assert all(len(page.items) == 1 for page in pages)
