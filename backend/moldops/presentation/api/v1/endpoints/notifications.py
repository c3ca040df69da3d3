"""Notification endpoints — the notices raised by the caller's entity pages."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from moldops.application.schemas import NoticeSchema
from moldops.application.services import AppContext, NotificationCenter
from moldops.infrastructure.dependencies import get_notification_center, require_user

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=list[NoticeSchema])
async def recent_notices(
    limit: int = Query(20, ge=1, le=50),
    context: AppContext = Depends(require_user),
    center: NotificationCenter = Depends(get_notification_center),
) -> list[NoticeSchema]:
    """The caller's most recent notices, oldest first."""
    return [NoticeSchema(**n.to_dict()) for n in center.recent(limit, user_id=context.user.id)]


@router.get("/stream")
async def notice_stream(
    context: AppContext = Depends(require_user),
    center: NotificationCenter = Depends(get_notification_center),
) -> StreamingResponse:
    """SSE endpoint for notices.

    Clients connect via EventSource and receive 'notice' events whenever one
    of their loads fails or one of their records is created, updated or deleted.
    """
    return StreamingResponse(
        center.subscribe(context.user.id),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
