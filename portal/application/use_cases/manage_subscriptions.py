from __future__ import annotations

from datetime import date, datetime, time, timezone

from portal.application.dto.admin import AssignSubscriptionInput, ExtendSubscriptionInput
from portal.application.ports.entitlements_port import EntitlementsPort
from portal.application.ports.vendor_token_port import VendorTokenPort
from portal.domain.exceptions import ValidationFailedError


MISSING_PLAN_OR_DATE = "Please select a plan and set an expiration date"


def expiration_at_noon(value: date) -> datetime:
    # noon keeps the calendar day stable across the admin's and vendor's timezones
    return datetime.combine(value, time(12, 0), tzinfo=timezone.utc)


class AssignSubscriptionUseCase:
    def __init__(self, *, entitlements_port: EntitlementsPort, token_port: VendorTokenPort):
        self._entitlements_port = entitlements_port
        self._token_port = token_port

    async def execute(self, command: AssignSubscriptionInput) -> None:
        errors: dict[str, str] = {}
        if not command.plan_id.strip():
            errors["plan_id"] = MISSING_PLAN_OR_DATE
        if command.expiration_date is None:
            errors["expiration_date"] = MISSING_PLAN_OR_DATE
        if errors:
            raise ValidationFailedError(MISSING_PLAN_OR_DATE, errors=errors)

        vendor_token = await self._token_port.get_token()
        await self._entitlements_port.create_entitlement(
            vendor_token=vendor_token,
            plan_id=command.plan_id.strip(),
            tenant_id=command.tenant_id or "",
            user_id=command.user_id,
            expiration_date=expiration_at_noon(command.expiration_date),
        )


class ExtendSubscriptionUseCase:
    def __init__(self, *, entitlements_port: EntitlementsPort, token_port: VendorTokenPort):
        self._entitlements_port = entitlements_port
        self._token_port = token_port

    async def execute(self, command: ExtendSubscriptionInput) -> None:
        if command.expiration_date is None:
            raise ValidationFailedError(
                MISSING_PLAN_OR_DATE,
                errors={"expiration_date": MISSING_PLAN_OR_DATE},
            )

        vendor_token = await self._token_port.get_token()
        await self._entitlements_port.update_entitlement(
            vendor_token=vendor_token,
            entitlement_id=command.entitlement_id,
            expiration_date=expiration_at_noon(command.expiration_date),
        )


class RemoveSubscriptionUseCase:
    def __init__(self, *, entitlements_port: EntitlementsPort, token_port: VendorTokenPort):
        self._entitlements_port = entitlements_port
        self._token_port = token_port

    async def execute(self, *, entitlement_id: str) -> None:
        vendor_token = await self._token_port.get_token()
        await self._entitlements_port.delete_entitlement(
            vendor_token=vendor_token,
            entitlement_id=entitlement_id,
        )
