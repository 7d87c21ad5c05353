from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


SignUpOutcome = Literal["sso_redirect", "user_exists", "created"]


@dataclass(frozen=True)
class SignUpInput:
    email: str
    name: str


@dataclass(frozen=True)
class SignUpOutput:
    outcome: SignUpOutcome
    email: str
    redirect_url: str | None
