"""Reports catalogue endpoint."""

from fastapi import APIRouter, Depends, Query

from moldops.application.schemas import ReportCategory, ReportRow, ReportsResponse
from moldops.application.services import AppContext, ReportsService
from moldops.application.services.reports_service import REPORT_CATEGORIES
from moldops.infrastructure.dependencies import get_reports_service, require_user

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("", response_model=ReportsResponse)
async def list_reports(
    category: str = Query("all", description="Report category id, or 'all'"),
    search: str = Query(""),
    context: AppContext = Depends(require_user),
    service: ReportsService = Depends(get_reports_service),
) -> ReportsResponse:
    page = service.list_reports(category, search)
    return ReportsResponse(
        rows=[ReportRow(id=r.id, cells=r.cells, record=r.record) for r in page.rows],
        categories=[ReportCategory(id="all", name="All Reports")]
        + [ReportCategory(id=key, name=name) for key, name in REPORT_CATEGORIES.items()],
        category=category,
        search=search,
        total_rows=page.total_rows,
        filtered_count=page.filtered_count,
    )
