from app.schemas.activity_log import (
    ActivityPerformer,
    ActivityRecord,
    COCRef,
    ActivityLogCreate,
    ActivityLogResponse,
    ActivityLogListResponse,
)

__all__ = [
    "ActivityPerformer",
    "ActivityRecord",
    "COCRef",
    "ActivityLogCreate",
    "ActivityLogResponse",
    "ActivityLogListResponse",
]
