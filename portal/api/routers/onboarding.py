from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from portal.api.deps import (
    get_check_onboarding_use_case,
    get_complete_onboarding_use_case,
    get_current_session,
)
from portal.api.errors import to_http_exception
from portal.api.schemas.onboarding import (
    CompleteOnboardingRequest,
    CompleteOnboardingResponse,
    OnboardingPrefill,
    OnboardingStatusResponse,
)
from portal.api.schemas.profile import AddressSchema
from portal.application.dto.onboarding import CompleteOnboardingInput
from portal.application.use_cases.check_onboarding import CheckOnboardingUseCase
from portal.application.use_cases.complete_onboarding import CompleteOnboardingUseCase
from portal.domain.entities.session import SessionContext
from portal.domain.exceptions import DomainError


router = APIRouter()


@router.get("/v1/onboarding", response_model=OnboardingStatusResponse)
async def get_onboarding_status(
    session: SessionContext = Depends(get_current_session),
    use_case: CheckOnboardingUseCase = Depends(get_check_onboarding_use_case),
):
    output = await use_case.execute(session=session)
    metadata = output.metadata
    return OnboardingStatusResponse(
        state=output.state,
        dismissible=output.dismissible,
        prefill=OnboardingPrefill(
            name=output.name,
            phone_number=output.phone_number,
            profile_picture_url=output.profile_picture_url,
            company=metadata.company,
            job_title=metadata.job_title,
            university=metadata.university,
            qualification=metadata.qualification,
            graduation_year=metadata.graduation_year,
            address=AddressSchema(**asdict(metadata.address)),
        ),
    )


@router.post("/v1/onboarding", response_model=CompleteOnboardingResponse)
async def complete_onboarding(
    req: CompleteOnboardingRequest,
    session: SessionContext = Depends(get_current_session),
    use_case: CompleteOnboardingUseCase = Depends(get_complete_onboarding_use_case),
):
    try:
        output = await use_case.execute(
            session=session,
            command=CompleteOnboardingInput(
                form=req.to_input(),
                profile_picture_url=req.profile_picture_url,
            ),
        )
    except DomainError as exc:
        raise to_http_exception(exc, context="complete_onboarding") from exc
    return CompleteOnboardingResponse(
        completed=output.completed,
        reload_required=output.reload_required,
    )
