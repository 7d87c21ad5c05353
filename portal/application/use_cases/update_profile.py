from __future__ import annotations

from portal.application.dto.profile import UpdateProfileInput
from portal.application.ports.identity_port import IdentityPort
from portal.domain.entities.session import SessionContext
from portal.domain.exceptions import ValidationFailedError, VendorApiError
from portal.domain.services.onboarding import validate_optional_phone

from .profile_common import apply_form, optional, profile_from_session


class UpdateProfileUseCase:
    def __init__(self, *, identity_port: IdentityPort):
        self._identity_port = identity_port

    async def execute(self, *, session: SessionContext, command: UpdateProfileInput) -> None:
        errors = validate_optional_phone(command.form.phone)
        if errors:
            raise ValidationFailedError("Please correct the highlighted fields.", errors=errors)

        try:
            current = await self._identity_port.get_me(access_token=session.access_token)
        except VendorApiError:
            current = profile_from_session(session)

        await self._identity_port.update_me(
            access_token=session.access_token,
            name=optional(command.form.name),
            phone_number=optional(command.form.phone),
            profile_picture_url=optional(command.profile_picture_url),
            metadata=apply_form(current.metadata, command.form),
        )
