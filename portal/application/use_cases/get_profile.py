from __future__ import annotations

from dataclasses import replace
import logging

from portal.application.dto.profile import ProfileOutput, ProfileSource
from portal.application.ports.identity_port import IdentityPort
from portal.domain.entities.session import SessionContext
from portal.domain.entities.user import UserProfile
from portal.domain.exceptions import VendorApiError
from portal.domain.services.metadata import (
    profile_metadata_from_mapping,
    profile_metadata_to_mapping,
    reconcile_metadata,
)

from .profile_common import profile_from_session


logger = logging.getLogger(__name__)


class GetProfileUseCase:
    """Profile view: session claims first, superseded by the live vendor profile."""

    def __init__(self, *, identity_port: IdentityPort):
        self._identity_port = identity_port

    async def execute(self, *, session: SessionContext) -> ProfileOutput:
        fetched = await self._fetch(session)
        metadata = profile_metadata_from_mapping(
            reconcile_metadata(
                session.claims_metadata,
                profile_metadata_to_mapping(fetched.metadata) if fetched is not None else None,
            )
        )
        if fetched is None:
            profile = replace(profile_from_session(session), metadata=metadata)
            return _to_output(profile, email=session.email, source="claims")
        profile = replace(fetched, metadata=metadata)
        return _to_output(profile, email=fetched.email or session.email, source="vendor")

    async def _fetch(self, session: SessionContext) -> UserProfile | None:
        try:
            return await self._identity_port.get_me(access_token=session.access_token)
        except VendorApiError as exc:
            logger.warning(
                "get_profile: vendor_fetch_failed user_id=%s status=%s",
                session.user_id,
                exc.status_code,
            )
            return None


def _to_output(profile: UserProfile, *, email: str | None, source: ProfileSource) -> ProfileOutput:
    return ProfileOutput(
        id=profile.id or None,
        name=profile.name,
        email=email,
        phone_number=profile.phone_number,
        profile_picture_url=profile.profile_picture_url,
        metadata=profile_metadata_to_mapping(profile.metadata),
        address=profile.metadata.address,
        source=source,
    )
