from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from .profile import MIGRATED_METADATA_DESCRIPTION, ProfileForm


class SubscriptionSchema(BaseModel):
    id: str | None
    plan_id: str | None
    plan_name: str
    expiration_date: str | None


class RosterUserSchema(BaseModel):
    id: str
    name: str | None
    email: str | None
    phone_number: str | None
    profile_picture_url: str | None
    tenant_id: str | None
    metadata: dict[str, Any] = Field(..., description=MIGRATED_METADATA_DESCRIPTION)
    subscriptions: list[SubscriptionSchema]


class RosterResponse(BaseModel):
    users: list[RosterUserSchema]


class AdminUpdateUserRequest(ProfileForm):
    tenant_id: str | None = Field(None, description="Tenant the user belongs to.")
    existing_metadata: dict[str, Any] | None = Field(
        None,
        description="Metadata currently shown in the editor; edited fields are merged over it.",
    )


class PlanSchema(BaseModel):
    id: str
    name: str
    description: str | None = None


class PlansResponse(BaseModel):
    plans: list[PlanSchema]


class AssignSubscriptionRequest(BaseModel):
    tenant_id: str | None = None
    plan_id: str = ""
    expiration_date: date | None = Field(None, description="Calendar day the subscription ends.")


class ExtendSubscriptionRequest(BaseModel):
    expiration_date: date | None = None
