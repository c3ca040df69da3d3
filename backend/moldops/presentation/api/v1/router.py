"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from moldops.presentation.api.v1.endpoints.health import router as health_router
from moldops.presentation.api.v1.endpoints.auth import router as auth_router
from moldops.presentation.api.v1.endpoints.navigation import router as navigation_router
from moldops.presentation.api.v1.endpoints.entities import router as entities_router
from moldops.presentation.api.v1.endpoints.dashboard import router as dashboard_router
from moldops.presentation.api.v1.endpoints.reports import router as reports_router
from moldops.presentation.api.v1.endpoints.notifications import router as notifications_router
from moldops.presentation.api.v1.settings_controller import router as settings_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(navigation_router)
router.include_router(entities_router)
router.include_router(dashboard_router)
router.include_router(reports_router)
router.include_router(notifications_router)
router.include_router(settings_router)
