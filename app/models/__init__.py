from app.models.activity_log import (
    ActivityLog,
    ActivityType,
    ActivityAction,
    PerformerType,
    COCType,
)

__all__ = [
    "ActivityLog",
    "ActivityType",
    "ActivityAction",
    "PerformerType",
    "COCType",
]
