from __future__ import annotations

from datetime import datetime
import json
import logging
from typing import Any

import httpx

from portal.application.ports.entitlements_port import EntitlementsPort
from portal.application.ports.identity_port import IdentityPort
from portal.application.ports.login_metadata_port import LoginMetadataPort
from portal.domain.entities.plan import Plan
from portal.domain.entities.subscription import SubscriptionEntitlement
from portal.domain.entities.user import ProfileMetadata, UserProfile
from portal.domain.exceptions import VendorApiError
from portal.domain.services.metadata import (
    normalize_metadata,
    profile_metadata_from_mapping,
    serialize_metadata,
)
from portal.domain.services.roster import decode_user_envelope


logger = logging.getLogger(__name__)


IMAGE_URL_KEYS = ("url", "profilePictureUrl", "imageUrl")


class FronteggClient(IdentityPort, EntitlementsPort, LoginMetadataPort):
    """REST adapter for the vendor's identity, entitlements and metadata APIs.

    Metadata is a JSON string on the wire; this is the only place that
    encodes or decodes it.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_url: str,
        timeout_seconds: float = 15,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    async def get_me(self, *, access_token: str) -> UserProfile:
        response = await self._request(
            "GET",
            f"{self._base_url}/identity/resources/users/v2/me",
            token=access_token,
        )
        _raise_for_status(response, "Failed to load profile")
        return _to_user_profile(_json_object(response))

    async def update_me(
        self,
        *,
        access_token: str,
        name: str | None,
        phone_number: str | None,
        profile_picture_url: str | None,
        metadata: ProfileMetadata,
    ) -> None:
        body = _drop_none(
            {
                "name": name,
                "phoneNumber": phone_number,
                "profilePictureUrl": profile_picture_url,
                "metadata": serialize_metadata(metadata),
            }
        )
        response = await self._request(
            "PUT",
            f"{self._base_url}/identity/resources/users/v2/me",
            token=access_token,
            json=body,
        )
        _raise_for_status(response, "Failed to update profile")

    async def upload_profile_image(
        self,
        *,
        access_token: str,
        filename: str,
        content_type: str,
        content: bytes,
    ) -> str:
        response = await self._request(
            "PUT",
            f"{self._base_url}/frontegg/team/resources/profile/me/image/v1",
            token=access_token,
            files={"image": (filename, content, content_type)},
        )
        _raise_for_status(response, "Failed to upload profile picture")
        return _extract_image_url(response.text)

    async def list_users(self, *, access_token: str) -> list[UserProfile]:
        response = await self._request(
            "GET",
            f"{self._base_url}/identity/resources/users/v2",
            token=access_token,
        )
        _raise_for_status(response, "Failed to load users")
        rows = decode_user_envelope(_json(response))
        return [_to_user_profile(row) for row in rows]

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
        body = _drop_none(
            {
                "name": name,
                "phoneNumber": phone_number,
                "metadata": serialize_metadata(metadata),
            }
        )
        response = await self._request(
            "PUT",
            f"{self._api_url}/identity/resources/users/v1",
            token=vendor_token,
            headers={"frontegg-tenant-id": tenant_id or "", "frontegg-user-id": user_id},
            json=body,
        )
        _raise_for_status(response, "Failed to update user")

    async def sso_prelogin(self, *, vendor_token: str, email: str) -> str | None:
        response = await self._request(
            "POST",
            f"{self._base_url}/frontegg/identity/resources/auth/v2/user/sso/prelogin",
            token=vendor_token,
            json={"email": email},
        )
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            _raise_for_status(response, "SSO prelogin check failed", force=True)
        payload = _json_object(response)
        address = payload.get("address")
        return address if isinstance(address, str) and address else None

    async def user_exists(self, *, vendor_token: str, email: str) -> bool:
        response = await self._request(
            "GET",
            f"{self._api_url}/identity/resources/users/v1/email",
            token=vendor_token,
            params={"email": email},
        )
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        _raise_for_status(response, "Failed to check user existence", force=True)
        return False

    async def create_user(
        self,
        *,
        vendor_token: str,
        email: str,
        name: str,
        role_id: str,
        tenant_id: str,
    ) -> None:
        response = await self._request(
            "POST",
            f"{self._api_url}/identity/resources/users/v2",
            token=vendor_token,
            headers={"frontegg-tenant-id": tenant_id},
            json={
                "email": email,
                "name": name,
                "roleIds": [role_id] if role_id else [],
                "skipInviteEmail": False,
            },
        )
        _raise_for_status(response, "Failed to create user")

    async def list_plans(self, *, vendor_token: str) -> list[Plan]:
        response = await self._request(
            "GET",
            f"{self._api_url}/entitlements/resources/plans/v1",
            token=vendor_token,
        )
        _raise_for_status(response, "Failed to fetch plans")
        rows = _json_object(response).get("items") or []
        return [
            Plan(
                id=str(row.get("id")),
                name=str(row.get("name")),
                description=row.get("description") if isinstance(row.get("description"), str) else None,
            )
            for row in rows
            if isinstance(row, dict) and row.get("id") is not None
        ]

    async def list_user_entitlements(
        self,
        *,
        vendor_token: str,
        user_id: str,
    ) -> list[SubscriptionEntitlement]:
        response = await self._request(
            "GET",
            f"{self._api_url}/entitlements/resources/entitlements/v2",
            token=vendor_token,
            params={"userId": user_id},
        )
        _raise_for_status(response, "Failed to fetch entitlements")
        payload = _json_object(response)
        rows = payload.get("items") or payload.get("entitlements") or []
        return [_to_entitlement(row) for row in rows if isinstance(row, dict)]

    async def create_entitlement(
        self,
        *,
        vendor_token: str,
        plan_id: str,
        tenant_id: str,
        user_id: str,
        expiration_date: datetime,
    ) -> None:
        response = await self._request(
            "POST",
            f"{self._api_url}/entitlements/resources/entitlements/v2",
            token=vendor_token,
            json={
                "planId": plan_id,
                "tenantId": tenant_id,
                "userId": user_id,
                "expirationDate": _iso(expiration_date),
            },
        )
        _raise_for_status(response, "Failed to assign subscription")

    async def update_entitlement(
        self,
        *,
        vendor_token: str,
        entitlement_id: str,
        expiration_date: datetime,
    ) -> None:
        response = await self._request(
            "PATCH",
            f"{self._api_url}/entitlements/resources/entitlements/v2/{entitlement_id}",
            token=vendor_token,
            json={"expirationDate": _iso(expiration_date)},
        )
        _raise_for_status(response, "Failed to update subscription")

    async def delete_entitlement(self, *, vendor_token: str, entitlement_id: str) -> None:
        response = await self._request(
            "DELETE",
            f"{self._api_url}/entitlements/resources/entitlements/v2/{entitlement_id}",
            token=vendor_token,
        )
        _raise_for_status(response, "Failed to remove subscription")

    async def get_entity_metadata(self, *, vendor_token: str, entity_name: str) -> dict[str, Any]:
        response = await self._request(
            "GET",
            f"{self._api_url}/metadata",
            token=vendor_token,
            params={"entityName": entity_name},
        )
        _raise_for_status(response, "Failed to fetch metadata")
        return _json_object(response)

    async def save_entity_metadata(
        self,
        *,
        vendor_token: str,
        entity_name: str,
        configuration: dict[str, Any],
    ) -> None:
        response = await self._request(
            "POST",
            f"{self._api_url}/metadata",
            token=vendor_token,
            json={"entityName": entity_name, "configuration": configuration},
        )
        _raise_for_status(response, "Failed to update metadata")

    async def _request(
        self,
        method: str,
        url: str,
        *,
        token: str,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        request_headers = {"Authorization": f"Bearer {token}"}
        if headers:
            request_headers.update(headers)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                return await client.request(method, url, headers=request_headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("frontegg_client: transport_error method=%s url=%s error=%s", method, url, exc)
            raise VendorApiError(f"Vendor request failed: {exc}") from exc


def _raise_for_status(response: httpx.Response, message: str, *, force: bool = False) -> None:
    if response.is_success and not force:
        return
    body = response.text
    detail = _error_message(body)
    raise VendorApiError(
        f"{message}: {response.status_code}" + (f" {detail}" if detail else ""),
        status_code=response.status_code,
        body=body,
    )


def _error_message(body: str) -> str:
    try:
        payload = json.loads(body)
    except ValueError:
        return body.strip()[:500]
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("errors")
        if message:
            return str(message)
    return ""


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise VendorApiError(
            "Vendor response is not JSON.",
            status_code=response.status_code,
            body=response.text,
        ) from exc


def _json_object(response: httpx.Response) -> dict[str, Any]:
    payload = _json(response)
    return payload if isinstance(payload, dict) else {}


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _to_user_profile(row: dict[str, Any]) -> UserProfile:
    return UserProfile(
        id=str(row.get("id") or ""),
        name=_optional_str(row.get("name")),
        email=_optional_str(row.get("email")),
        phone_number=_optional_str(row.get("phoneNumber")),
        profile_picture_url=_optional_str(row.get("profilePictureUrl")),
        tenant_id=_optional_str(row.get("tenantId")),
        metadata=profile_metadata_from_mapping(normalize_metadata(row.get("metadata"))),
    )


def _to_entitlement(row: dict[str, Any]) -> SubscriptionEntitlement:
    plan = row.get("plan") if isinstance(row.get("plan"), dict) else {}
    plan_id = row.get("planId")
    return SubscriptionEntitlement(
        id=str(row["id"]) if row.get("id") is not None else None,
        plan_id=str(plan_id) if plan_id is not None else None,
        plan_name=_optional_str(row.get("planName")) or _optional_str(plan.get("name")),
        expiration_date=_optional_str(row.get("expirationDate")),
    )


def _extract_image_url(text: str) -> str:
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        for key in IMAGE_URL_KEYS:
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return ""


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")
