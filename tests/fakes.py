from __future__ import annotations

from dataclasses import replace
import time
from types import SimpleNamespace
from typing import Any

import jwt

from portal.domain.entities.session import SessionContext
from portal.domain.entities.user import ProfileMetadata, UserProfile
from portal.domain.exceptions import VendorApiError
from portal.infrastructure.security.session_claims import SessionTokenVerifier


SESSION_SIGNING_KEY = "session-signing-key-used-only-in-tests-0123456789"


def make_session(**overrides: Any) -> SessionContext:
    values: dict[str, Any] = {
        "access_token": "session-token",
        "user_id": "user-1",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone_number": None,
        "profile_picture_url": None,
        "tenant_id": "tenant-1",
        "claims_metadata": None,
        "roles": (),
    }
    values.update(overrides)
    return SessionContext(**values)


def make_profile(**overrides: Any) -> UserProfile:
    profile = UserProfile(
        id="user-1",
        name="Ada Lovelace",
        email="ada@example.com",
        phone_number="+441234567890",
        profile_picture_url="https://cdn.example.com/ada.png",
        tenant_id="tenant-1",
        metadata=ProfileMetadata(),
    )
    return replace(profile, **overrides)


class FakeTokenPort:
    def __init__(self, token: str = "vendor-token"):
        self.token = token
        self.calls = 0

    async def get_token(self) -> str:
        self.calls += 1
        return self.token


class FakeIdentityPort:
    """In-memory stand-in for the vendor identity API."""

    def __init__(
        self,
        *,
        profile: UserProfile | None = None,
        get_me_error: VendorApiError | None = None,
        upload_url: str = "https://cdn.example.com/new.png",
        sso_address: str | None = None,
        sso_error: VendorApiError | None = None,
        existing_emails: tuple[str, ...] = (),
    ):
        self.profile = profile or make_profile()
        self.get_me_error = get_me_error
        self.upload_url = upload_url
        self.sso_address = sso_address
        self.sso_error = sso_error
        self.existing_emails = existing_emails
        self.calls: list[str] = []
        self.me_updates: list[dict[str, Any]] = []
        self.user_updates: list[dict[str, Any]] = []
        self.created_users: list[dict[str, Any]] = []
        self.uploads: list[dict[str, Any]] = []

    async def get_me(self, *, access_token: str) -> UserProfile:
        self.calls.append("get_me")
        if self.get_me_error is not None:
            raise self.get_me_error
        return self.profile

    async def update_me(self, **kwargs: Any) -> None:
        self.calls.append("update_me")
        self.me_updates.append(kwargs)

    async def upload_profile_image(self, **kwargs: Any) -> str:
        self.calls.append("upload_profile_image")
        self.uploads.append(kwargs)
        return self.upload_url

    async def list_users(self, *, access_token: str) -> list[UserProfile]:
        self.calls.append("list_users")
        return [self.profile]

    async def update_user(self, **kwargs: Any) -> None:
        self.calls.append("update_user")
        self.user_updates.append(kwargs)

    async def sso_prelogin(self, *, vendor_token: str, email: str) -> str | None:
        self.calls.append("sso_prelogin")
        if self.sso_error is not None:
            raise self.sso_error
        return self.sso_address

    async def user_exists(self, *, vendor_token: str, email: str) -> bool:
        self.calls.append("user_exists")
        return email in self.existing_emails

    async def create_user(self, **kwargs: Any) -> None:
        self.calls.append("create_user")
        self.created_users.append(kwargs)


class FakeSigningKeySource:
    """Serves one HMAC key in place of the vendor's JWKS endpoint."""

    def __init__(self, key: str = SESSION_SIGNING_KEY, error: Exception | None = None):
        self.key = key
        self.error = error

    def get_signing_key_from_jwt(self, token: str) -> SimpleNamespace:
        if self.error is not None:
            raise self.error
        return SimpleNamespace(key=self.key)


def make_verifier(**kwargs: Any) -> SessionTokenVerifier:
    return SessionTokenVerifier(
        key_source=FakeSigningKeySource(**kwargs),
        algorithms=("HS256",),
    )


def signed_session_token(claims: dict[str, Any], *, key: str = SESSION_SIGNING_KEY) -> str:
    payload = {"sub": "user-1", "exp": int(time.time()) + 3600}
    payload.update(claims)
    return jwt.encode(payload, key, algorithm="HS256")
