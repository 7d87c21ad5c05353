from __future__ import annotations

import asyncio
import json
import threading

import httpx
import pytest

from portal.domain.entities.credential import VendorCredential
from portal.domain.exceptions import VendorConfigurationError, VendorCredentialError
from portal.infrastructure.clients.vendor_credentials import VendorCredentialProvider
from portal.infrastructure.stores.credential_store import InMemoryCredentialStore


NOW_MS = 1_700_000_000_000


class RecordingHandler:
    def __init__(self, *, status_code: int = 200, payload=None, delay: float = 0.0):
        self.status_code = status_code
        self.payload = payload if payload is not None else {"token": "fresh-token", "expiresIn": 3600}
        self.delay = delay
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        return httpx.Response(self.status_code, json=self.payload)


def _provider(
    handler: RecordingHandler,
    *,
    store: InMemoryCredentialStore | None = None,
    client_id: str = "client-id",
    secret: str = "secret",
) -> VendorCredentialProvider:
    return VendorCredentialProvider(
        client_id=client_id,
        secret=secret,
        api_url="https://api.frontegg.test",
        store=store or InMemoryCredentialStore(),
        transport=httpx.MockTransport(handler),
        clock=lambda: NOW_MS,
    )


def test_cached_token_in_the_future_skips_the_network():
    store = InMemoryCredentialStore()
    store.save(VendorCredential(token="cached-token", expires_at_ms=NOW_MS + 60_000))
    handler = RecordingHandler()

    token = asyncio.run(_provider(handler, store=store).get_token())

    assert token == "cached-token"
    assert handler.requests == []


def test_expired_token_triggers_exactly_one_exchange():
    store = InMemoryCredentialStore()
    store.save(VendorCredential(token="stale-token", expires_at_ms=NOW_MS - 1))
    handler = RecordingHandler()
    provider = _provider(handler, store=store)

    async def scenario():
        return [await provider.get_token(), await provider.get_token()]

    tokens = asyncio.run(scenario())

    assert tokens == ["fresh-token", "fresh-token"]
    assert len(handler.requests) == 1
    request = handler.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.frontegg.test/auth/vendor/"
    assert json.loads(request.content) == {"clientId": "client-id", "secret": "secret"}
    assert store.load() == VendorCredential(token="fresh-token", expires_at_ms=NOW_MS + 3_600_000)


def test_missing_expires_in_defaults_to_one_hour():
    store = InMemoryCredentialStore()
    handler = RecordingHandler(payload={"token": "fresh-token"})

    asyncio.run(_provider(handler, store=store).get_token())

    assert store.load().expires_at_ms == NOW_MS + 3_600_000


def test_concurrent_callers_share_a_single_exchange():
    handler = RecordingHandler(delay=0.02)
    provider = _provider(handler)

    async def scenario():
        return await asyncio.gather(*(provider.get_token() for _ in range(5)))

    tokens = asyncio.run(scenario())

    assert tokens == ["fresh-token"] * 5
    assert len(handler.requests) == 1


def test_missing_credentials_raise_configuration_error():
    handler = RecordingHandler()

    with pytest.raises(VendorConfigurationError):
        asyncio.run(_provider(handler, client_id="").get_token())
    assert handler.requests == []


def test_failed_exchange_raises_credential_error():
    handler = RecordingHandler(status_code=401, payload={"message": "Unauthorized"})

    with pytest.raises(VendorCredentialError) as exc_info:
        asyncio.run(_provider(handler).get_token())

    assert exc_info.value.status_code == 401


def test_response_without_token_raises_credential_error():
    handler = RecordingHandler(payload={"expiresIn": 3600})

    with pytest.raises(VendorCredentialError):
        asyncio.run(_provider(handler).get_token())


def test_non_numeric_expires_in_raises_credential_error():
    handler = RecordingHandler(payload={"token": "fresh-token", "expiresIn": "an hour"})

    with pytest.raises(VendorCredentialError) as exc_info:
        asyncio.run(_provider(handler).get_token())

    assert exc_info.value.status_code == 200


class ThreadRecordingStore(InMemoryCredentialStore):
    def __init__(self):
        super().__init__()
        self.threads: list[int] = []

    def load(self):
        self.threads.append(threading.get_ident())
        return super().load()

    def save(self, credential):
        self.threads.append(threading.get_ident())
        super().save(credential)


def test_store_access_runs_off_the_event_loop_thread():
    store = ThreadRecordingStore()
    provider = _provider(RecordingHandler(), store=store)

    async def scenario():
        await provider.get_token()
        return threading.get_ident()

    loop_thread = asyncio.run(scenario())

    assert len(store.threads) == 2
    assert loop_thread not in store.threads
