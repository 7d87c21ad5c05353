from __future__ import annotations

from pydantic import BaseModel


class ResearchAccessResponse(BaseModel):
    allowed: bool
    roles: list[str]
