from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    email: str = Field("", description="Work email.")
    name: str = Field("", description="Full name.")


class SignUpResponse(BaseModel):
    outcome: Literal["sso_redirect", "user_exists", "created"]
    email: str
    redirect_url: str | None = None
    message: str
