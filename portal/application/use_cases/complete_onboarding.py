from __future__ import annotations

import logging

from portal.application.dto.onboarding import CompleteOnboardingInput, CompleteOnboardingOutput
from portal.application.ports.identity_port import IdentityPort
from portal.domain.entities.session import SessionContext
from portal.domain.exceptions import ValidationFailedError, VendorApiError
from portal.domain.services.onboarding import validate_onboarding_fields

from .profile_common import apply_form, optional, profile_from_session


logger = logging.getLogger(__name__)


class CompleteOnboardingUseCase:
    def __init__(self, *, identity_port: IdentityPort):
        self._identity_port = identity_port

    async def execute(
        self,
        *,
        session: SessionContext,
        command: CompleteOnboardingInput,
    ) -> CompleteOnboardingOutput:
        errors = validate_onboarding_fields(command.form.as_mapping())
        if errors:
            raise ValidationFailedError("Please fill in all required fields", errors=errors)

        try:
            current = await self._identity_port.get_me(access_token=session.access_token)
        except VendorApiError as exc:
            logger.warning(
                "complete_onboarding: vendor_fetch_failed user_id=%s status=%s",
                session.user_id,
                exc.status_code,
            )
            current = profile_from_session(session)

        await self._identity_port.update_me(
            access_token=session.access_token,
            name=optional(command.form.name),
            phone_number=optional(command.form.phone),
            profile_picture_url=optional(command.profile_picture_url),
            metadata=apply_form(current.metadata, command.form, onboarding_complete=True),
        )
        logger.info("complete_onboarding: completed user_id=%s", session.user_id)
        return CompleteOnboardingOutput(completed=True, reload_required=True)
