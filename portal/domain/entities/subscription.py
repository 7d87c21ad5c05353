from __future__ import annotations

from dataclasses import dataclass


UNKNOWN_PLAN_NAME = "Unknown Plan"


@dataclass(frozen=True)
class SubscriptionEntitlement:
    id: str | None
    plan_id: str | None
    plan_name: str | None
    expiration_date: str | None
