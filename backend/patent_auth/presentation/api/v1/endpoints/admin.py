"""Administrator endpoints — patent config, projects, accounts and data reset."""

from fastapi import APIRouter, Depends, status

from patent_auth.application.schemas import (
    CertificateResponse,
    PatentConfigResponse,
    PatentConfigUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from patent_auth.application.services import AdminService, LedgerService
from patent_auth.domain.exceptions import DuplicateEntityError, EntityNotFoundError, ValidationError
from patent_auth.infrastructure.dependencies import (
    get_admin_service,
    get_ledger_service,
    require_admin,
)
from patent_auth.presentation.api.v1.errors import to_http_exception

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


# ── Patent config ────────────────────────────────────────────────────

@router.get("/config", response_model=PatentConfigResponse)
async def get_config(service: AdminService = Depends(get_admin_service)) -> PatentConfigResponse:
    config = await service.get_config()
    return PatentConfigResponse.model_validate(config, from_attributes=True)


@router.put("/config", response_model=PatentConfigResponse)
async def update_config(
    data: PatentConfigUpdate,
    service: AdminService = Depends(get_admin_service),
) -> PatentConfigResponse:
    """Update patent metadata. Already issued certificates keep their snapshot."""
    config = await service.update_config(data)
    return PatentConfigResponse.model_validate(config, from_attributes=True)


# ── Projects ─────────────────────────────────────────────────────────

@router.get("/projects", response_model=list[ProjectResponse])
async def list_projects(service: AdminService = Depends(get_admin_service)) -> list[ProjectResponse]:
    projects = await service.list_projects()
    return [ProjectResponse.model_validate(p, from_attributes=True) for p in projects]


@router.post("/projects", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def add_project(
    data: ProjectCreate,
    service: AdminService = Depends(get_admin_service),
) -> ProjectResponse:
    project = await service.add_project(data)
    return ProjectResponse.model_validate(project, from_attributes=True)


@router.put("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    service: AdminService = Depends(get_admin_service),
) -> ProjectResponse:
    try:
        project = await service.update_project(project_id, data)
    except (EntityNotFoundError, ValidationError) as e:
        raise to_http_exception(e)
    return ProjectResponse.model_validate(project, from_attributes=True)


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    service: AdminService = Depends(get_admin_service),
) -> None:
    """Delete a project. Unpaid certificates for it become free to download."""
    try:
        await service.delete_project(project_id)
    except EntityNotFoundError as e:
        raise to_http_exception(e)


# ── Users ────────────────────────────────────────────────────────────

@router.get("/users", response_model=list[UserResponse])
async def list_users(service: AdminService = Depends(get_admin_service)) -> list[UserResponse]:
    users = await service.list_users()
    return [UserResponse.model_validate(u, from_attributes=True) for u in users]


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def add_user(
    data: UserCreate,
    service: AdminService = Depends(get_admin_service),
) -> UserResponse:
    try:
        user = await service.add_user(data)
    except DuplicateEntityError as e:
        raise to_http_exception(e)
    return UserResponse.model_validate(user, from_attributes=True)


@router.put("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    service: AdminService = Depends(get_admin_service),
) -> UserResponse:
    """Edit an account, including granting credits."""
    try:
        user = await service.update_user(user_id, data)
    except (EntityNotFoundError, DuplicateEntityError, ValidationError) as e:
        raise to_http_exception(e)
    return UserResponse.model_validate(user, from_attributes=True)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    service: AdminService = Depends(get_admin_service),
) -> None:
    try:
        await service.delete_user(user_id)
    except (EntityNotFoundError, ValidationError) as e:
        raise to_http_exception(e)


# ── Certificates & demo data ─────────────────────────────────────────

@router.get("/certificates", response_model=list[CertificateResponse])
async def list_certificates(
    service: LedgerService = Depends(get_ledger_service),
) -> list[CertificateResponse]:
    certificates = await service.list_all_certificates()
    return [CertificateResponse.model_validate(c, from_attributes=True) for c in certificates]


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
async def reset_data(service: AdminService = Depends(get_admin_service)) -> None:
    """Erase all stored data and fall back to the seed."""
    await service.reset_data()
