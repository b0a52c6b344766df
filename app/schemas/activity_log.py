"""Activity log schemas for write-time validation and responses."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional
from datetime import datetime

from app.models.activity_log import ActivityType, ActivityAction, PerformerType, COCType
from app.schemas.types import IdStr


class ActivityPerformer(BaseModel):
    """Actor credited with the activity; System when nobody in particular."""
    type: PerformerType = PerformerType.SYSTEM
    id: Optional[IdStr] = None


class ActivityRecord(BaseModel):
    """The action being logged and the entity it was performed on."""
    type: ActivityType
    action: ActivityAction
    content: Any = Field(default_factory=dict)
    id: Optional[IdStr] = None


class COCRef(BaseModel):
    """Customer or company the log entry belongs to."""
    id: IdStr
    type: COCType


class ActivityLogCreate(BaseModel):
    """Schema for inserting an activity log. Unknown fields are rejected."""
    model_config = ConfigDict(extra="forbid")

    activity: ActivityRecord
    performed_by: ActivityPerformer = Field(default_factory=ActivityPerformer)
    coc: COCRef
    created_at: Optional[datetime] = None


class ActivityLogResponse(BaseModel):
    """Schema for activity log response."""
    model_config = ConfigDict(from_attributes=True)

    id: IdStr
    activity: ActivityRecord
    performed_by: ActivityPerformer
    coc: COCRef
    created_at: datetime


class ActivityLogListResponse(BaseModel):
    """Paginated activity feed for one customer or company."""
    items: list[ActivityLogResponse]
    total: int
    page: int
    page_size: int
