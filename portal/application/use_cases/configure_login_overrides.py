from __future__ import annotations

import logging

from portal.application.ports.login_metadata_port import LoginMetadataPort
from portal.application.ports.vendor_token_port import VendorTokenPort
from portal.domain.exceptions import VendorConfigurationError


logger = logging.getLogger(__name__)


LOGIN_BOX_ENTITY = "loginBox"


class ConfigureLoginOverridesUseCase:
    """Point the vendor's hosted login page at our overrides endpoint."""

    def __init__(self, *, login_metadata_port: LoginMetadataPort, token_port: VendorTokenPort):
        self._login_metadata_port = login_metadata_port
        self._token_port = token_port

    async def execute(self, *, overrides_url: str, entity_name: str = LOGIN_BOX_ENTITY) -> dict:
        if not overrides_url:
            raise VendorConfigurationError("FRONTEGG_OVERRIDES_URL is required.")

        vendor_token = await self._token_port.get_token()
        current = await self._login_metadata_port.get_entity_metadata(
            vendor_token=vendor_token,
            entity_name=entity_name,
        )
        configuration = dict(current.get("configuration") or {})
        configuration["metadataOverrides"] = {"url": overrides_url}

        await self._login_metadata_port.save_entity_metadata(
            vendor_token=vendor_token,
            entity_name=entity_name,
            configuration=configuration,
        )
        logger.info(
            "configure_login_overrides: updated entity=%s url=%s",
            entity_name,
            overrides_url,
        )
        return configuration
