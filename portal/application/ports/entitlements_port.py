from __future__ import annotations

from datetime import datetime
from typing import Protocol

from portal.domain.entities.plan import Plan
from portal.domain.entities.subscription import SubscriptionEntitlement


class EntitlementsPort(Protocol):
    async def list_plans(self, *, vendor_token: str) -> list[Plan]:
        ...

    async def list_user_entitlements(
        self,
        *,
        vendor_token: str,
        user_id: str,
    ) -> list[SubscriptionEntitlement]:
        ...

    async def create_entitlement(
        self,
        *,
        vendor_token: str,
        plan_id: str,
        tenant_id: str,
        user_id: str,
        expiration_date: datetime,
    ) -> None:
        ...

    async def update_entitlement(
        self,
        *,
        vendor_token: str,
        entitlement_id: str,
        expiration_date: datetime,
    ) -> None:
        ...

    async def delete_entitlement(self, *, vendor_token: str, entitlement_id: str) -> None:
        ...
