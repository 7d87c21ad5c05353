from __future__ import annotations

from portal.application.dto.profile import UploadProfileImageInput, UploadProfileImageOutput
from portal.application.ports.identity_port import IdentityPort
from portal.domain.entities.session import SessionContext
from portal.domain.exceptions import InvalidImageError, VendorApiError


MAX_IMAGE_BYTES = 5 * 1024 * 1024


class UploadProfileImageUseCase:
    def __init__(self, *, identity_port: IdentityPort, max_bytes: int = MAX_IMAGE_BYTES):
        self._identity_port = identity_port
        self._max_bytes = max_bytes

    async def execute(
        self,
        *,
        session: SessionContext,
        command: UploadProfileImageInput,
    ) -> UploadProfileImageOutput:
        if not command.content_type.startswith("image/"):
            raise InvalidImageError("Please select an image file")
        if len(command.content) > self._max_bytes:
            raise InvalidImageError("File size must be less than 5MB")

        url = await self._identity_port.upload_profile_image(
            access_token=session.access_token,
            filename=command.filename,
            content_type=command.content_type,
            content=command.content,
        )
        if not isinstance(url, str) or not url.strip():
            raise VendorApiError("Invalid URL received from upload")
        return UploadProfileImageOutput(profile_picture_url=url.strip())
