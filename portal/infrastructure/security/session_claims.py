from __future__ import annotations

import logging
from typing import Any, Protocol

import jwt
from jwt.exceptions import PyJWKClientConnectionError

from portal.domain.entities.session import SessionContext
from portal.domain.exceptions import InvalidSessionError, VendorApiError
from portal.domain.services.metadata import parse_metadata


logger = logging.getLogger(__name__)

SESSION_ALGORITHMS = ("RS256",)


class SigningKeySource(Protocol):
    def get_signing_key_from_jwt(self, token: str) -> Any:
        ...


class SessionTokenVerifier:
    """Checks vendor session JWTs against the vendor's published signing keys."""

    def __init__(
        self,
        *,
        key_source: SigningKeySource,
        algorithms: tuple[str, ...] = SESSION_ALGORITHMS,
        audience: str | None = None,
    ):
        self._key_source = key_source
        self._algorithms = algorithms
        self._audience = audience

    def decode(self, token: str) -> dict[str, Any]:
        try:
            signing_key = self._key_source.get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=list(self._algorithms),
                audience=self._audience,
                options={
                    "require": ["exp", "sub"],
                    "verify_aud": self._audience is not None,
                },
            )
        except PyJWKClientConnectionError as exc:
            logger.error("session_claims: signing_keys_unavailable error=%s", exc)
            raise VendorApiError("Failed to load session signing keys.") from exc
        except jwt.PyJWTError as exc:
            logger.info("session_claims: rejected_token error=%s", exc)
            raise InvalidSessionError("Invalid access token.") from exc

        if not isinstance(payload.get("sub"), str) or not payload["sub"]:
            raise InvalidSessionError("Invalid token subject.")
        return payload


def _role_names(raw_roles: Any) -> tuple[str, ...]:
    if not isinstance(raw_roles, list):
        return ()
    names: list[str] = []
    for role in raw_roles:
        if isinstance(role, str):
            names.append(role)
        elif isinstance(role, dict):
            for key in ("name", "key"):
                value = role.get(key)
                if isinstance(value, str) and value:
                    names.append(value)
    return tuple(names)


def _string_claim(claims: dict[str, Any], *names: str) -> str | None:
    for name in names:
        value = claims.get(name)
        if isinstance(value, str) and value:
            return value
    return None


def build_session_context(token: str, claims: dict[str, Any]) -> SessionContext:
    """Session view over claims that ``SessionTokenVerifier`` already accepted."""
    claims_metadata = parse_metadata(claims.get("metadata"))
    if claims_metadata is None:
        claims_metadata = parse_metadata(claims.get("vendorMetadata"))

    return SessionContext(
        access_token=token,
        user_id=_string_claim(claims, "sub", "userId", "id"),
        name=_string_claim(claims, "name"),
        email=_string_claim(claims, "email"),
        phone_number=_string_claim(claims, "phone_number", "phoneNumber"),
        profile_picture_url=_string_claim(claims, "picture", "profilePictureUrl"),
        tenant_id=_string_claim(claims, "tenantId"),
        claims_metadata=claims_metadata,
        roles=_role_names(claims.get("roles")),
    )
