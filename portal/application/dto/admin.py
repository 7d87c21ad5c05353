from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from portal.application.dto.profile import ProfileFormInput


@dataclass(frozen=True)
class AdminUpdateUserInput:
    user_id: str
    tenant_id: str | None
    form: ProfileFormInput
    existing_metadata: dict[str, Any] | None


@dataclass(frozen=True)
class AssignSubscriptionInput:
    user_id: str
    tenant_id: str | None
    plan_id: str
    expiration_date: date | None


@dataclass(frozen=True)
class ExtendSubscriptionInput:
    entitlement_id: str
    expiration_date: date | None
