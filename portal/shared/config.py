from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from portal.domain.services.redirect import KNOWN_SSO_PROVIDERS


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = _env(name)
    if not value:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    vendor_client_id: str
    vendor_api_key: str
    vendor_base_url: str
    vendor_api_url: str
    vendor_timeout_seconds: float
    session_jwks_url: str
    session_audience: str
    default_role_id: str
    default_tenant_id: str
    login_overrides_application_id: str
    login_overrides_url: str
    public_app_url: str
    credential_cache_path: str
    cors_allow_origins: tuple[str, ...]
    sso_allowed_hosts: tuple[str, ...]


def get_settings() -> Settings:
    vendor_base_url = _env("FRONTEGG_BASE_URL", "https://app.frontegg.com").rstrip("/")
    return Settings(
        vendor_client_id=_env("FRONTEGG_CLIENT_ID", ""),
        vendor_api_key=_env("FRONTEGG_API_KEY", ""),
        vendor_base_url=vendor_base_url,
        vendor_api_url=_env("FRONTEGG_API_URL", "https://api.frontegg.com").rstrip("/"),
        vendor_timeout_seconds=float(_env("FRONTEGG_TIMEOUT_SECONDS", "15")),
        session_jwks_url=_env("FRONTEGG_JWKS_URL", "") or f"{vendor_base_url}/.well-known/jwks.json",
        session_audience=_env("FRONTEGG_SESSION_AUDIENCE", ""),
        default_role_id=_env("FRONTEGG_DEFAULT_ROLE_ID", ""),
        default_tenant_id=_env("FRONTEGG_TENANT_ID", ""),
        login_overrides_application_id=_env("FRONTEGG_APPLICATION_ID", ""),
        login_overrides_url=_env(
            "FRONTEGG_OVERRIDES_URL",
            "http://localhost:8000/api/frontegg-login-overrides",
        ),
        public_app_url=_env("PUBLIC_APP_URL", "http://localhost:3000").rstrip("/"),
        credential_cache_path=_env("VENDOR_TOKEN_CACHE_PATH", ""),
        cors_allow_origins=_csv("CORS_ALLOW_ORIGINS", ("*",)),
        sso_allowed_hosts=_csv("SSO_ALLOWED_HOSTS", KNOWN_SSO_PROVIDERS),
    )
