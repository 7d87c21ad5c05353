from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from portal.domain.entities.plan import Plan
from portal.domain.entities.subscription import UNKNOWN_PLAN_NAME, SubscriptionEntitlement
from portal.domain.exceptions import UnrecognizedEnvelopeError


USER_ENVELOPE_KEYS: tuple[str, ...] = ("data", "items", "content")


def decode_user_envelope(payload: Any) -> list[dict[str, Any]]:
    """Unwrap the user list from any of the envelope shapes the vendor returns."""
    if isinstance(payload, list):
        return [row for row in payload if isinstance(row, dict)]
    if isinstance(payload, Mapping):
        for key in USER_ENVELOPE_KEYS:
            rows = payload.get(key)
            if isinstance(rows, list):
                return [row for row in rows if isinstance(row, dict)]
        raise UnrecognizedEnvelopeError(
            f"Unrecognized user list envelope with keys: {sorted(payload.keys())}"
        )
    raise UnrecognizedEnvelopeError(
        f"Unrecognized user list envelope of type {type(payload).__name__}"
    )


def build_plan_name_map(plans: Iterable[Plan]) -> dict[str, str]:
    return {plan.id: plan.name for plan in plans}


def resolve_plan_name(entitlement: SubscriptionEntitlement, plan_names: Mapping[str, str]) -> str:
    if not entitlement.plan_id:
        return UNKNOWN_PLAN_NAME
    return plan_names.get(entitlement.plan_id) or entitlement.plan_name or UNKNOWN_PLAN_NAME
