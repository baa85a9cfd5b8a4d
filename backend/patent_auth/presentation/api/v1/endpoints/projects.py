"""Project catalogue for enterprise users."""

from fastapi import APIRouter, Depends

from patent_auth.application.schemas import ProjectResponse
from patent_auth.application.services import LedgerService
from patent_auth.domain.entities import User
from patent_auth.infrastructure.dependencies import get_ledger_service, require_user

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    user: User = Depends(require_user),
    service: LedgerService = Depends(get_ledger_service),
) -> list[ProjectResponse]:
    """All projects, flagged by whether the caller can currently afford them."""
    projects = await service.list_projects()
    return [
        ProjectResponse(id=p.id, name=p.name, cost=p.cost, affordable=user.can_afford(p.cost))
        for p in projects
    ]
