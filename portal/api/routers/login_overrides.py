from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse

from portal.api.deps import get_login_overrides_use_case
from portal.application.use_cases.get_login_overrides import GetLoginOverridesUseCase


router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS, HEAD",
    "Access-Control-Allow-Headers": (
        "Content-Type, x-frontegg-framework, X-Frontegg-Framework, x-frontegg-sdk, "
        "X-Frontegg-Sdk, frontegg-requested-application-id, Authorization, "
        "X-Requested-With, Accept, Origin"
    ),
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Max-Age": "86400",
}


@router.api_route(
    "/api/frontegg-login-overrides",
    methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
)
def login_overrides(
    request: Request,
    frontegg_requested_application_id: str | None = Header(default=None),
    use_case: GetLoginOverridesUseCase = Depends(get_login_overrides_use_case),
):
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    if request.method != "GET":
        return JSONResponse(
            status_code=405,
            content={"error": "Method not allowed"},
            headers=CORS_HEADERS,
        )
    overrides = use_case.execute(requested_application_id=frontegg_requested_application_id)
    return JSONResponse(content=overrides, headers=CORS_HEADERS)
