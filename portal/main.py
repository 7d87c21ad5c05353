from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.api.routers.admin import router as admin_router
from portal.api.routers.login_overrides import router as login_overrides_router
from portal.api.routers.me import router as me_router
from portal.api.routers.onboarding import router as onboarding_router
from portal.api.routers.research import router as research_router
from portal.api.routers.signup import router as signup_router
from portal.shared.config import get_settings


settings = get_settings()

app = FastAPI(title="Research Portal API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allow_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(me_router)
app.include_router(onboarding_router)
app.include_router(admin_router)
app.include_router(signup_router)
app.include_router(research_router)
app.include_router(login_overrides_router)
