from __future__ import annotations

from portal.application.dto.admin import AdminUpdateUserInput
from portal.application.ports.identity_port import IdentityPort
from portal.application.ports.vendor_token_port import VendorTokenPort
from portal.domain.exceptions import ValidationFailedError
from portal.domain.services.metadata import profile_metadata_from_mapping
from portal.domain.services.onboarding import validate_optional_phone

from .profile_common import apply_form, optional


class AdminUpdateUserUseCase:
    def __init__(self, *, identity_port: IdentityPort, token_port: VendorTokenPort):
        self._identity_port = identity_port
        self._token_port = token_port

    async def execute(self, command: AdminUpdateUserInput) -> None:
        errors = validate_optional_phone(command.form.phone)
        if errors:
            raise ValidationFailedError("Please correct the highlighted fields.", errors=errors)

        existing = profile_metadata_from_mapping(command.existing_metadata)
        vendor_token = await self._token_port.get_token()
        await self._identity_port.update_user(
            vendor_token=vendor_token,
            tenant_id=command.tenant_id,
            user_id=command.user_id,
            name=optional(command.form.name),
            phone_number=optional(command.form.phone),
            metadata=apply_form(existing, command.form),
        )
