from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from portal.api.deps import get_sign_up_use_case
from portal.api.errors import to_http_exception
from portal.api.schemas.signup import SignUpRequest, SignUpResponse
from portal.application.dto.signup import SignUpInput
from portal.application.use_cases.sign_up import SignUpUseCase
from portal.domain.exceptions import DomainError, UnsafeRedirectError


router = APIRouter()

OUTCOME_MESSAGES = {
    "sso_redirect": "Redirecting to your organization's sign-in.",
    "user_exists": "An account with this email already exists. Please log in instead.",
    "created": "Account created. Check your email to activate your account.",
}


@router.post("/v1/signup", response_model=SignUpResponse)
async def sign_up(
    req: SignUpRequest,
    use_case: SignUpUseCase = Depends(get_sign_up_use_case),
):
    try:
        output = await use_case.execute(SignUpInput(email=req.email, name=req.name))
    except DomainError as exc:
        raise to_http_exception(exc, context="sign_up") from exc

    redirect_url = output.redirect_url
    if redirect_url is not None:
        try:
            redirect_url = use_case.ensure_safe_redirect(redirect_url)
        except UnsafeRedirectError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    return SignUpResponse(
        outcome=output.outcome,
        email=output.email,
        redirect_url=redirect_url,
        message=OUTCOME_MESSAGES[output.outcome],
    )
