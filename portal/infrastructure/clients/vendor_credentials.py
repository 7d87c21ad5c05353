from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

import httpx

from portal.application.ports.credential_store_port import CredentialStorePort
from portal.application.ports.vendor_token_port import VendorTokenPort
from portal.domain.entities.credential import VendorCredential, credential_from_exchange
from portal.domain.exceptions import VendorConfigurationError, VendorCredentialError


logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class VendorCredentialProvider(VendorTokenPort):
    """Server-to-server vendor token with a shared cache and single-flight refresh.

    Concurrent callers that find the cache empty wait on one exchange instead
    of each triggering their own.
    """

    def __init__(
        self,
        *,
        client_id: str,
        secret: str,
        api_url: str,
        store: CredentialStorePort,
        timeout_seconds: float = 15,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], int] = _now_ms,
    ):
        self._client_id = client_id
        self._secret = secret
        self._api_url = api_url.rstrip("/")
        self._store = store
        self._timeout = timeout_seconds
        self._transport = transport
        self._clock = clock
        self._credential: VendorCredential | None = None
        self._lock = asyncio.Lock()

    async def get_token(self) -> str:
        cached = self._cached(now_ms=self._clock())
        if cached is not None:
            return cached

        async with self._lock:
            now_ms = self._clock()
            cached = self._cached(now_ms=now_ms)
            if cached is not None:
                return cached

            stored = await asyncio.to_thread(self._store.load)
            if stored is not None and stored.is_valid(now_ms=now_ms):
                logger.info("vendor_credentials: store_hit expires_at_ms=%s", stored.expires_at_ms)
                self._credential = stored
                return stored.token

            credential = await self._exchange(now_ms=now_ms)
            await asyncio.to_thread(self._store.save, credential)
            self._credential = credential
            return credential.token

    def _cached(self, *, now_ms: int) -> str | None:
        credential = self._credential
        if credential is not None and credential.is_valid(now_ms=now_ms):
            return credential.token
        return None

    async def _exchange(self, *, now_ms: int) -> VendorCredential:
        if not self._client_id or not self._secret:
            raise VendorConfigurationError(
                "Missing vendor credentials. Set FRONTEGG_CLIENT_ID and FRONTEGG_API_KEY."
            )

        url = f"{self._api_url}/auth/vendor/"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(
                url,
                json={"clientId": self._client_id, "secret": self._secret},
            )
        if response.status_code < 200 or response.status_code >= 300:
            raise VendorCredentialError(
                f"Failed to get vendor token: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise VendorCredentialError(
                "Vendor token response is not JSON.",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            raise VendorCredentialError(
                "Vendor token response is missing the token.",
                status_code=response.status_code,
            )

        try:
            credential = credential_from_exchange(
                token=str(token),
                expires_in=payload.get("expiresIn"),
                now_ms=now_ms,
            )
        except (TypeError, ValueError) as exc:
            raise VendorCredentialError(
                "Vendor token response has an invalid expiresIn.",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        logger.info("vendor_credentials: exchanged expires_at_ms=%s", credential.expires_at_ms)
        return credential
