"""Activity log model: append-only audit trail attached to customers and companies."""

from datetime import datetime, timezone
import enum
import uuid

from sqlalchemy import Column, String, DateTime, JSON, CheckConstraint, Index
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base


class ActivityType(str, enum.Enum):
    """Kinds of entity an activity is about."""

    INTERNAL_NOTE = "internal_note"
    CONVERSATION_MESSAGE = "conversation_message"
    SEGMENT = "segment"
    CUSTOMER = "customer"
    COMPANY = "company"


class ActivityAction(str, enum.Enum):
    """What was done to the entity."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class PerformerType(str, enum.Enum):
    """Who performed the activity (cron job, staff user or the customer)."""

    SYSTEM = "SYSTEM"
    USER = "USER"
    CUSTOMER = "CUSTOMER"


class COCType(str, enum.Enum):
    """Customer-or-company: the business entity a log is attached to."""

    CUSTOMER = "customer"
    COMPANY = "company"


def _in_clause(column: str, members: type[enum.Enum]) -> str:
    values = ", ".join(f"'{m.value}'" for m in members)
    return f"{column} IN ({values})"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityLog(Base):
    """
    One immutable activity log entry.

    The embedded activity / performer / coc records are stored as prefixed
    columns and exposed again as dicts through the properties below.

    Examples:
        A user writes an internal note:
            activity_type=internal_note, activity_action=create, activity_id=<note id>
        A cron job finds a customer matching a segment:
            activity_type=segment, activity_action=create, activity_id=<segment id>
    """

    __tablename__ = "activity_logs"
    __table_args__ = (
        CheckConstraint(_in_clause("activity_type", ActivityType), name="ck_activity_logs_activity_type"),
        CheckConstraint(_in_clause("activity_action", ActivityAction), name="ck_activity_logs_activity_action"),
        CheckConstraint(_in_clause("performed_by_type", PerformerType), name="ck_activity_logs_performed_by_type"),
        CheckConstraint(_in_clause("coc_type", COCType), name="ck_activity_logs_coc_type"),
        Index("ix_activity_logs_coc", "coc_type", "coc_id", "created_at"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Activity
    activity_type = Column(String(40), nullable=False, index=True)
    activity_action = Column(String(20), nullable=False)
    activity_content = Column(JSON, nullable=True, default=dict)  # str, number, list or map
    activity_id = Column(String(64), nullable=True, index=True)

    # Performer
    performed_by_type = Column(String(20), nullable=False, default=PerformerType.SYSTEM.value)
    performed_by_id = Column(String(64), nullable=True)

    # Customer or company
    coc_id = Column(String(64), nullable=False)
    coc_type = Column(String(20), nullable=False)

    # Only set in strict dedup mode; NULLs never collide
    dedup_key = Column(String(255), nullable=True, unique=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    @property
    def activity(self) -> dict:
        return {
            "type": self.activity_type,
            "action": self.activity_action,
            "content": self.activity_content,
            "id": self.activity_id,
        }

    @property
    def performed_by(self) -> dict:
        return {"type": self.performed_by_type, "id": self.performed_by_id}

    @property
    def coc(self) -> dict:
        return {"id": self.coc_id, "type": self.coc_type}

    def __repr__(self):
        return f"<ActivityLog {self.activity_type}:{self.activity_action} on {self.coc_type} {self.coc_id}>"
