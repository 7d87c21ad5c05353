from __future__ import annotations

from typing import Protocol

from portal.domain.entities.user import ProfileMetadata, UserProfile


class IdentityPort(Protocol):
    async def get_me(self, *, access_token: str) -> UserProfile:
        ...

    async def update_me(
        self,
        *,
        access_token: str,
        name: str | None,
        phone_number: str | None,
        profile_picture_url: str | None,
        metadata: ProfileMetadata,
    ) -> None:
        ...

    async def upload_profile_image(
        self,
        *,
        access_token: str,
        filename: str,
        content_type: str,
        content: bytes,
    ) -> str:
        ...

    async def list_users(self, *, access_token: str) -> list[UserProfile]:
        ...

    async def update_user(
        self,
        *,
        vendor_token: str,
        tenant_id: str | None,
        user_id: str,
        name: str | None,
        phone_number: str | None,
        metadata: ProfileMetadata,
    ) -> None:
        ...

    async def sso_prelogin(self, *, vendor_token: str, email: str) -> str | None:
        ...

    async def user_exists(self, *, vendor_token: str, email: str) -> bool:
        ...

    async def create_user(
        self,
        *,
        vendor_token: str,
        email: str,
        name: str,
        role_id: str,
        tenant_id: str,
    ) -> None:
        ...
