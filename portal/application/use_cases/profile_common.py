from __future__ import annotations

from portal.application.dto.profile import ProfileFormInput
from portal.domain.entities.session import SessionContext
from portal.domain.entities.user import ProfileMetadata, UserProfile
from portal.domain.services.metadata import merge_profile_metadata, profile_metadata_from_mapping


def profile_from_session(session: SessionContext) -> UserProfile:
    return UserProfile(
        id=session.user_id or "",
        name=session.name,
        email=session.email,
        phone_number=session.phone_number,
        profile_picture_url=session.profile_picture_url,
        tenant_id=session.tenant_id,
        metadata=profile_metadata_from_mapping(session.claims_metadata),
    )


def apply_form(
    metadata: ProfileMetadata,
    form: ProfileFormInput,
    *,
    onboarding_complete: bool | None = None,
) -> ProfileMetadata:
    return merge_profile_metadata(
        metadata,
        company=form.company,
        job_title=form.job_title,
        university=form.university,
        qualification=form.qualification,
        graduation_year=form.graduation_year,
        address=form.address(),
        onboarding_complete=onboarding_complete,
    )


def optional(value: str | None) -> str | None:
    stripped = (value or "").strip()
    return stripped or None
