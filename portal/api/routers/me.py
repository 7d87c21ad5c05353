from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, File, UploadFile

from portal.api.deps import (
    get_current_session,
    get_get_profile_use_case,
    get_update_profile_use_case,
    get_upload_profile_image_use_case,
)
from portal.api.errors import to_http_exception
from portal.api.schemas.profile import (
    AddressSchema,
    ProfileImageResponse,
    ProfileResponse,
    StatusResponse,
    UpdateProfileRequest,
)
from portal.application.dto.profile import UpdateProfileInput, UploadProfileImageInput
from portal.application.use_cases.get_profile import GetProfileUseCase
from portal.application.use_cases.update_profile import UpdateProfileUseCase
from portal.application.use_cases.upload_profile_image import UploadProfileImageUseCase
from portal.domain.entities.session import SessionContext
from portal.domain.exceptions import DomainError


router = APIRouter()


@router.get("/v1/me", response_model=ProfileResponse)
async def get_me(
    session: SessionContext = Depends(get_current_session),
    use_case: GetProfileUseCase = Depends(get_get_profile_use_case),
):
    output = await use_case.execute(session=session)
    return ProfileResponse(
        id=output.id,
        name=output.name,
        email=output.email,
        phone_number=output.phone_number,
        profile_picture_url=output.profile_picture_url,
        metadata=output.metadata,
        address=AddressSchema(**asdict(output.address)),
        source=output.source,
    )


@router.put("/v1/me", response_model=StatusResponse)
async def update_me(
    req: UpdateProfileRequest,
    session: SessionContext = Depends(get_current_session),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
):
    try:
        await use_case.execute(
            session=session,
            command=UpdateProfileInput(
                form=req.to_input(),
                profile_picture_url=req.profile_picture_url,
            ),
        )
    except DomainError as exc:
        raise to_http_exception(exc, context="update_me") from exc
    return StatusResponse()


@router.post("/v1/me/image", response_model=ProfileImageResponse)
async def upload_profile_image(
    image: UploadFile = File(...),
    session: SessionContext = Depends(get_current_session),
    use_case: UploadProfileImageUseCase = Depends(get_upload_profile_image_use_case),
):
    content = await image.read()
    try:
        output = await use_case.execute(
            session=session,
            command=UploadProfileImageInput(
                filename=image.filename or "profile-image",
                content_type=image.content_type or "",
                content=content,
            ),
        )
    except DomainError as exc:
        raise to_http_exception(exc, context="upload_profile_image") from exc
    return ProfileImageResponse(profile_picture_url=output.profile_picture_url)
