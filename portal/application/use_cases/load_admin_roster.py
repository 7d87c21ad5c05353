from __future__ import annotations

import asyncio
from dataclasses import replace
import logging

from portal.application.ports.entitlements_port import EntitlementsPort
from portal.application.ports.identity_port import IdentityPort
from portal.application.ports.vendor_token_port import VendorTokenPort
from portal.domain.entities.session import SessionContext
from portal.domain.entities.subscription import SubscriptionEntitlement
from portal.domain.entities.user import RosterEntry, UserProfile
from portal.domain.exceptions import VendorApiError
from portal.domain.services.roster import build_plan_name_map, resolve_plan_name


logger = logging.getLogger(__name__)


class LoadAdminRosterUseCase:
    def __init__(
        self,
        *,
        identity_port: IdentityPort,
        entitlements_port: EntitlementsPort,
        token_port: VendorTokenPort,
    ):
        self._identity_port = identity_port
        self._entitlements_port = entitlements_port
        self._token_port = token_port

    async def execute(self, *, session: SessionContext) -> list[RosterEntry]:
        vendor_token = await self._token_port.get_token()
        users = await self._identity_port.list_users(access_token=session.access_token)
        plan_names = await self._load_plan_names(vendor_token)

        # gather keeps input order, so the roster follows the user list
        subscriptions = await asyncio.gather(
            *(self._load_subscriptions(vendor_token, user, plan_names) for user in users)
        )
        logger.info(
            "load_admin_roster: loaded users=%s plans=%s",
            len(users),
            len(plan_names),
        )
        return [
            RosterEntry(user=user, subscriptions=user_subscriptions)
            for user, user_subscriptions in zip(users, subscriptions)
        ]

    async def _load_plan_names(self, vendor_token: str) -> dict[str, str]:
        try:
            plans = await self._entitlements_port.list_plans(vendor_token=vendor_token)
        except VendorApiError as exc:
            logger.warning("load_admin_roster: plans_failed status=%s", exc.status_code)
            return {}
        return build_plan_name_map(plans)

    async def _load_subscriptions(
        self,
        vendor_token: str,
        user: UserProfile,
        plan_names: dict[str, str],
    ) -> list[SubscriptionEntitlement]:
        try:
            entitlements = await self._entitlements_port.list_user_entitlements(
                vendor_token=vendor_token,
                user_id=user.id,
            )
        except VendorApiError as exc:
            logger.warning(
                "load_admin_roster: entitlements_failed user_id=%s status=%s",
                user.id,
                exc.status_code,
            )
            return []
        return [
            replace(entitlement, plan_name=resolve_plan_name(entitlement, plan_names))
            for entitlement in entitlements
        ]
