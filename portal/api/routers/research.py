from __future__ import annotations

from fastapi import APIRouter, Depends

from portal.api.deps import require_research_access
from portal.api.schemas.research import ResearchAccessResponse
from portal.domain.entities.session import SessionContext


router = APIRouter()


@router.get("/v1/research/access", response_model=ResearchAccessResponse)
def research_access(session: SessionContext = Depends(require_research_access)):
    return ResearchAccessResponse(allowed=True, roles=list(session.roles))
