from __future__ import annotations

from urllib.parse import urlsplit


VENDOR_ROOT_DOMAIN = "frontegg.com"

KNOWN_SSO_PROVIDERS: tuple[str, ...] = (
    "login.microsoftonline.com",
    "accounts.google.com",
    "login.okta.com",
    "okta.com",
    "auth0.com",
    "login.salesforce.com",
    "sso.azure.com",
    "sts.windows.net",
)

_BLOCKED_HOSTS = frozenset({"localhost", "127.0.0.1"})
_PRIVATE_PREFIXES: tuple[str, ...] = (
    "10.",
    "192.168.",
    *(f"172.{octet}." for octet in range(16, 32)),
)


def _hostname(url: str) -> str | None:
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return None
    return hostname.lower() if hostname else None


def _matches_domain(hostname: str, domain: str) -> bool:
    domain = domain.lower()
    return hostname == domain or hostname.endswith("." + domain)


def is_private_host(hostname: str) -> bool:
    return hostname in _BLOCKED_HOSTS or hostname.startswith(_PRIVATE_PREFIXES)


def is_safe_redirect(
    candidate_url: str,
    *,
    vendor_base_url: str,
    allowed_hosts: tuple[str, ...] = KNOWN_SSO_PROVIDERS,
) -> bool:
    if not isinstance(candidate_url, str) or not candidate_url:
        return False
    try:
        scheme = urlsplit(candidate_url).scheme
    except ValueError:
        return False
    if scheme != "https":
        return False

    hostname = _hostname(candidate_url)
    if not hostname or is_private_host(hostname):
        return False

    vendor_host = _hostname(vendor_base_url)
    if hostname == vendor_host or _matches_domain(hostname, VENDOR_ROOT_DOMAIN):
        return True
    return any(_matches_domain(hostname, provider) for provider in allowed_hosts)
