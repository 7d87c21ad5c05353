from __future__ import annotations

from portal.application.ports.entitlements_port import EntitlementsPort
from portal.application.ports.vendor_token_port import VendorTokenPort
from portal.domain.entities.plan import Plan


class ListPlansUseCase:
    def __init__(self, *, entitlements_port: EntitlementsPort, token_port: VendorTokenPort):
        self._entitlements_port = entitlements_port
        self._token_port = token_port

    async def execute(self) -> list[Plan]:
        vendor_token = await self._token_port.get_token()
        return await self._entitlements_port.list_plans(vendor_token=vendor_token)
