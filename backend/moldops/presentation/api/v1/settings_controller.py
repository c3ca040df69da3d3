"""Settings API controller — company settings and display themes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from moldops.application.schemas import SystemSettings, SystemSettingsUpdate, ThemeOption
from moldops.application.services import AppContext
from moldops.application.services.settings_service import (
    get_system_settings,
    list_themes,
    update_system_settings,
)
from moldops.infrastructure.dependencies import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/system", response_model=SystemSettings)
async def get_system(context: AppContext = Depends(require_user)):
    """Return the effective company settings."""
    return get_system_settings()


@router.put("/system", response_model=SystemSettings)
async def put_system(body: SystemSettingsUpdate, context: AppContext = Depends(require_user)):
    """Update company settings. Only the fields present in the body change."""
    try:
        return update_system_settings(body)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        )
    except OSError as exc:
        logger.exception("Failed to persist system settings")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Could not save settings: {exc}",
        )


@router.get("/themes", response_model=list[ThemeOption])
async def get_themes():
    """Every palette in both light and dark variants."""
    return list_themes()
