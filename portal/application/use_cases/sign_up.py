from __future__ import annotations

import logging

from portal.application.dto.signup import SignUpInput, SignUpOutput
from portal.application.ports.identity_port import IdentityPort
from portal.application.ports.vendor_token_port import VendorTokenPort
from portal.domain.exceptions import DomainError, UnsafeRedirectError, ValidationFailedError
from portal.domain.services.redirect import KNOWN_SSO_PROVIDERS, is_safe_redirect


logger = logging.getLogger(__name__)


class SignUpUseCase:
    def __init__(
        self,
        *,
        identity_port: IdentityPort,
        token_port: VendorTokenPort,
        vendor_base_url: str,
        default_role_id: str,
        default_tenant_id: str,
        allowed_sso_hosts: tuple[str, ...] = KNOWN_SSO_PROVIDERS,
    ):
        self._identity_port = identity_port
        self._token_port = token_port
        self._vendor_base_url = vendor_base_url
        self._default_role_id = default_role_id
        self._default_tenant_id = default_tenant_id
        self._allowed_sso_hosts = allowed_sso_hosts

    def is_safe_redirect(self, url: str) -> bool:
        return is_safe_redirect(
            url,
            vendor_base_url=self._vendor_base_url,
            allowed_hosts=self._allowed_sso_hosts,
        )

    def ensure_safe_redirect(self, url: str) -> str:
        if not self.is_safe_redirect(url):
            logger.error("sign_up: redirect_blocked url=%s", url)
            raise UnsafeRedirectError("SSO redirect target is not allowed.")
        return url

    async def execute(self, command: SignUpInput) -> SignUpOutput:
        email = command.email.strip()
        name = command.name.strip()
        errors: dict[str, str] = {}
        if not email:
            errors["email"] = "Email is required"
        if not name:
            errors["name"] = "Full name is required"
        if errors:
            raise ValidationFailedError("Please fill in all fields", errors=errors)

        vendor_token = await self._token_port.get_token()

        sso_address = await self._probe_sso(vendor_token, email)
        if sso_address is not None:
            return SignUpOutput(outcome="sso_redirect", email=email, redirect_url=sso_address)

        if await self._identity_port.user_exists(vendor_token=vendor_token, email=email):
            return SignUpOutput(outcome="user_exists", email=email, redirect_url=None)

        await self._identity_port.create_user(
            vendor_token=vendor_token,
            email=email,
            name=name,
            role_id=self._default_role_id,
            tenant_id=self._default_tenant_id,
        )
        logger.info("sign_up: user_created email_domain=%s", email.rpartition("@")[2])
        return SignUpOutput(outcome="created", email=email, redirect_url=None)

    async def _probe_sso(self, vendor_token: str, email: str) -> str | None:
        try:
            address = await self._identity_port.sso_prelogin(vendor_token=vendor_token, email=email)
        except DomainError as exc:
            logger.warning("sign_up: sso_prelogin_failed error=%s", exc)
            return None
        if not address:
            return None
        if not self.is_safe_redirect(address):
            logger.error("sign_up: sso_address_rejected address=%s", address)
            return None
        return address
