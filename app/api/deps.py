"""
API dependencies.

Provides the database session and the activity log service to route handlers.
"""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.activity_log_service import ActivityLogService

DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_activity_log_service(db: DbSession) -> ActivityLogService:
    return ActivityLogService(db)


ActivityLogs = Annotated[ActivityLogService, Depends(get_activity_log_service)]
