from __future__ import annotations

import logging

from portal.application.dto.onboarding import OnboardingStatusOutput
from portal.application.ports.identity_port import IdentityPort
from portal.domain.entities.session import SessionContext
from portal.domain.entities.user import ProfileMetadata
from portal.domain.exceptions import VendorApiError
from portal.domain.services.metadata import profile_metadata_from_mapping
from portal.domain.services.onboarding import OnboardingState, is_onboarding_complete


logger = logging.getLogger(__name__)


class CheckOnboardingUseCase:
    """Decide whether the onboarding form must block the app.

    Unknown state is treated as incomplete: only an explicit
    ``onboardingComplete: true`` clears the gate.
    """

    def __init__(self, *, identity_port: IdentityPort):
        self._identity_port = identity_port

    async def execute(self, *, session: SessionContext) -> OnboardingStatusOutput:
        claims_metadata = session.claims_metadata
        if is_onboarding_complete(claims_metadata):
            logger.info("check_onboarding: clear source=claims user_id=%s", session.user_id)
            return self._output(
                session,
                state="clear",
                metadata=profile_metadata_from_mapping(claims_metadata),
            )

        try:
            profile = await self._identity_port.get_me(access_token=session.access_token)
        except VendorApiError as exc:
            logger.warning(
                "check_onboarding: vendor_fetch_failed user_id=%s status=%s has_claims_metadata=%s",
                session.user_id,
                exc.status_code,
                claims_metadata is not None,
            )
            # claims metadata can only be incomplete here, the fast path took the rest
            return self._output(
                session,
                state="blocking",
                metadata=profile_metadata_from_mapping(claims_metadata),
            )

        state: OnboardingState = "clear" if profile.metadata.onboarding_complete else "blocking"
        logger.info("check_onboarding: %s source=vendor user_id=%s", state, session.user_id)
        return self._output(
            session,
            state=state,
            metadata=profile.metadata,
            name=profile.name,
            phone_number=profile.phone_number,
            profile_picture_url=profile.profile_picture_url,
        )

    def _output(
        self,
        session: SessionContext,
        *,
        state: OnboardingState,
        metadata: ProfileMetadata,
        name: str | None = None,
        phone_number: str | None = None,
        profile_picture_url: str | None = None,
    ) -> OnboardingStatusOutput:
        return OnboardingStatusOutput(
            state=state,
            dismissible=False,
            name=name or session.name,
            phone_number=phone_number or session.phone_number,
            profile_picture_url=profile_picture_url or session.profile_picture_url,
            metadata=metadata,
        )
