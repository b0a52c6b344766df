"""Activity Logs API - read-only activity feed of customers and companies."""
from fastapi import APIRouter, Query
from typing import Optional
import uuid
import logging

from app.api.deps import ActivityLogs
from app.config import settings
from app.exceptions import NotFoundError
from app.models.activity_log import ActivityType, COCType
from app.schemas.activity_log import ActivityLogResponse, ActivityLogListResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=ActivityLogListResponse)
async def list_activity_logs(
    service: ActivityLogs,
    coc_type: COCType,
    coc_id: str = Query(..., min_length=1, max_length=64),
    activity_type: Optional[ActivityType] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1),
):
    """List the activity logs attached to one customer or company, newest first."""
    page_size = min(page_size, settings.ACTIVITY_LOG_PAGE_SIZE_MAX)
    logs, total = await service.list_for_coc(
        coc_type,
        coc_id,
        activity_type=activity_type,
        limit=page_size,
        offset=(page - 1) * page_size,
    )

    return ActivityLogListResponse(
        items=[ActivityLogResponse.model_validate(log) for log in logs],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{log_id}", response_model=ActivityLogResponse)
async def get_activity_log(log_id: uuid.UUID, service: ActivityLogs):
    """Get a single activity log by ID."""
    log = await service.get(log_id)
    if not log:
        raise NotFoundError("Activity log", str(log_id))
    return ActivityLogResponse.model_validate(log)
