from __future__ import annotations

from dataclasses import dataclass

from portal.application.dto.profile import ProfileFormInput
from portal.domain.entities.user import ProfileMetadata
from portal.domain.services.onboarding import OnboardingState


@dataclass(frozen=True)
class OnboardingStatusOutput:
    state: OnboardingState
    dismissible: bool
    name: str | None
    phone_number: str | None
    profile_picture_url: str | None
    metadata: ProfileMetadata


@dataclass(frozen=True)
class CompleteOnboardingInput:
    form: ProfileFormInput
    profile_picture_url: str | None


@dataclass(frozen=True)
class CompleteOnboardingOutput:
    completed: bool
    reload_required: bool
