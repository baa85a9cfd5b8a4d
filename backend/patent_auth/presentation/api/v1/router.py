"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from patent_auth.presentation.api.v1.endpoints.health import router as health_router
from patent_auth.presentation.api.v1.endpoints.auth import router as auth_router
from patent_auth.presentation.api.v1.endpoints.projects import router as projects_router
from patent_auth.presentation.api.v1.endpoints.certificates import router as certificates_router
from patent_auth.presentation.api.v1.endpoints.admin import router as admin_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(projects_router)
router.include_router(certificates_router)
router.include_router(admin_router)
