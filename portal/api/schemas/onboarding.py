from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from .profile import AddressSchema, UpdateProfileRequest


class OnboardingPrefill(BaseModel):
    name: str | None
    phone_number: str | None
    profile_picture_url: str | None
    company: str
    job_title: str
    university: str
    qualification: str
    graduation_year: str
    address: AddressSchema


class OnboardingStatusResponse(BaseModel):
    state: Literal["checking", "blocking", "clear"]
    dismissible: bool
    prefill: OnboardingPrefill


class CompleteOnboardingRequest(UpdateProfileRequest):
    pass


class CompleteOnboardingResponse(BaseModel):
    completed: bool
    reload_required: bool
