"""Dashboard endpoint."""

from fastapi import APIRouter, Depends

from moldops.application.schemas import DashboardResponse
from moldops.application.services import DashboardService
from moldops.infrastructure.dependencies import get_dashboard_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """Headline counts, orders per month and the latest production orders.

    Sections whose query fails come back as zeros or empty lists.
    """
    return await service.get_dashboard()
