from __future__ import annotations

from dataclasses import dataclass


DEFAULT_EXPIRES_IN_SECONDS = 3600


@dataclass(frozen=True)
class VendorCredential:
    token: str
    expires_at_ms: int

    def is_valid(self, *, now_ms: int) -> bool:
        return bool(self.token) and now_ms < self.expires_at_ms


def credential_from_exchange(*, token: str, expires_in: int | None, now_ms: int) -> VendorCredential:
    seconds = expires_in or DEFAULT_EXPIRES_IN_SECONDS
    return VendorCredential(token=token, expires_at_ms=now_ms + int(seconds) * 1000)
