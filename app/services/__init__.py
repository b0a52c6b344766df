# Services module
from app.services.activity_log_service import ActivityLogService

__all__ = [
    "ActivityLogService",
]
