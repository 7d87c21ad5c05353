from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException
import jwt

from portal.api.errors import to_http_exception
from portal.application.use_cases.admin_update_user import AdminUpdateUserUseCase
from portal.application.use_cases.check_onboarding import CheckOnboardingUseCase
from portal.application.use_cases.complete_onboarding import CompleteOnboardingUseCase
from portal.application.use_cases.get_login_overrides import GetLoginOverridesUseCase
from portal.application.use_cases.get_profile import GetProfileUseCase
from portal.application.use_cases.list_plans import ListPlansUseCase
from portal.application.use_cases.load_admin_roster import LoadAdminRosterUseCase
from portal.application.use_cases.manage_subscriptions import (
    AssignSubscriptionUseCase,
    ExtendSubscriptionUseCase,
    RemoveSubscriptionUseCase,
)
from portal.application.use_cases.sign_up import SignUpUseCase
from portal.application.use_cases.update_profile import UpdateProfileUseCase
from portal.application.use_cases.upload_profile_image import UploadProfileImageUseCase
from portal.domain.entities.session import ADMIN_ROLES, RESEARCH_ROLES, SessionContext
from portal.domain.exceptions import AccessDeniedError, InvalidSessionError, VendorApiError
from portal.infrastructure.clients.frontegg_client import FronteggClient
from portal.infrastructure.clients.vendor_credentials import VendorCredentialProvider
from portal.infrastructure.security.session_claims import SessionTokenVerifier, build_session_context
from portal.infrastructure.stores.credential_store import (
    InMemoryCredentialStore,
    JsonFileCredentialStore,
)
from portal.infrastructure.stores.login_overrides_document import PackagedLoginOverrides
from portal.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_frontegg_client() -> FronteggClient:
    settings = get_settings()
    return FronteggClient(
        base_url=settings.vendor_base_url,
        api_url=settings.vendor_api_url,
        timeout_seconds=settings.vendor_timeout_seconds,
    )


@lru_cache(maxsize=1)
def _get_credential_provider() -> VendorCredentialProvider:
    settings = get_settings()
    if not settings.vendor_client_id:
        raise HTTPException(status_code=500, detail="FRONTEGG_CLIENT_ID is required.")
    if not settings.vendor_api_key:
        raise HTTPException(status_code=500, detail="FRONTEGG_API_KEY is required.")
    if settings.credential_cache_path:
        store = JsonFileCredentialStore(settings.credential_cache_path)
    else:
        store = InMemoryCredentialStore()
    return VendorCredentialProvider(
        client_id=settings.vendor_client_id,
        secret=settings.vendor_api_key,
        api_url=settings.vendor_api_url,
        store=store,
        timeout_seconds=settings.vendor_timeout_seconds,
    )


def get_get_profile_use_case() -> GetProfileUseCase:
    return GetProfileUseCase(identity_port=_get_frontegg_client())


def get_update_profile_use_case() -> UpdateProfileUseCase:
    return UpdateProfileUseCase(identity_port=_get_frontegg_client())


def get_upload_profile_image_use_case() -> UploadProfileImageUseCase:
    return UploadProfileImageUseCase(identity_port=_get_frontegg_client())


def get_check_onboarding_use_case() -> CheckOnboardingUseCase:
    return CheckOnboardingUseCase(identity_port=_get_frontegg_client())


def get_complete_onboarding_use_case() -> CompleteOnboardingUseCase:
    return CompleteOnboardingUseCase(identity_port=_get_frontegg_client())


def get_load_admin_roster_use_case() -> LoadAdminRosterUseCase:
    client = _get_frontegg_client()
    return LoadAdminRosterUseCase(
        identity_port=client,
        entitlements_port=client,
        token_port=_get_credential_provider(),
    )


def get_admin_update_user_use_case() -> AdminUpdateUserUseCase:
    return AdminUpdateUserUseCase(
        identity_port=_get_frontegg_client(),
        token_port=_get_credential_provider(),
    )


def get_list_plans_use_case() -> ListPlansUseCase:
    return ListPlansUseCase(
        entitlements_port=_get_frontegg_client(),
        token_port=_get_credential_provider(),
    )


def get_assign_subscription_use_case() -> AssignSubscriptionUseCase:
    return AssignSubscriptionUseCase(
        entitlements_port=_get_frontegg_client(),
        token_port=_get_credential_provider(),
    )


def get_extend_subscription_use_case() -> ExtendSubscriptionUseCase:
    return ExtendSubscriptionUseCase(
        entitlements_port=_get_frontegg_client(),
        token_port=_get_credential_provider(),
    )


def get_remove_subscription_use_case() -> RemoveSubscriptionUseCase:
    return RemoveSubscriptionUseCase(
        entitlements_port=_get_frontegg_client(),
        token_port=_get_credential_provider(),
    )


def get_sign_up_use_case() -> SignUpUseCase:
    settings = get_settings()
    if not settings.default_tenant_id:
        raise HTTPException(status_code=500, detail="FRONTEGG_TENANT_ID is required.")
    return SignUpUseCase(
        identity_port=_get_frontegg_client(),
        token_port=_get_credential_provider(),
        vendor_base_url=settings.vendor_base_url,
        default_role_id=settings.default_role_id,
        default_tenant_id=settings.default_tenant_id,
        allowed_sso_hosts=settings.sso_allowed_hosts,
    )


@lru_cache(maxsize=1)
def _get_session_verifier() -> SessionTokenVerifier:
    settings = get_settings()
    return SessionTokenVerifier(
        key_source=jwt.PyJWKClient(settings.session_jwks_url),
        audience=settings.session_audience or None,
    )


def get_session_verifier() -> SessionTokenVerifier:
    return _get_session_verifier()


def get_current_session(
    authorization: str = Header(...),
    verifier: SessionTokenVerifier = Depends(get_session_verifier),
) -> SessionContext:
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")
    try:
        claims = verifier.decode(token)
    except InvalidSessionError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except VendorApiError as exc:
        raise to_http_exception(exc, context="session") from exc
    return build_session_context(token, claims)


def require_role(allowed_roles: frozenset[str]):
    def _dependency(session: SessionContext = Depends(get_current_session)) -> SessionContext:
        try:
            session.require_any_role(allowed_roles)
        except AccessDeniedError as exc:
            raise HTTPException(status_code=403, detail=str(exc)) from exc
        return session

    return _dependency


require_admin = require_role(ADMIN_ROLES)
require_research_access = require_role(RESEARCH_ROLES)


def get_login_overrides_use_case() -> GetLoginOverridesUseCase:
    settings = get_settings()
    return GetLoginOverridesUseCase(
        source=PackagedLoginOverrides(asset_base_url=settings.public_app_url),
        application_id=settings.login_overrides_application_id,
    )
