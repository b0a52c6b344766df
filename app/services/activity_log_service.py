"""
Activity Log Service

Append-only writer for the customer/company activity feed. Conversation
messages and segment memberships are deduplicated with a find-then-insert
check. Two concurrent writers can both miss the check and insert twice;
enable strict mode to let a unique dedup key reject the second insert.
"""

from collections.abc import Mapping
from typing import Any, Optional
import logging
import uuid

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import InvalidArgumentError
from app.models.activity_log import (
    ActivityLog,
    ActivityType,
    ActivityAction,
    PerformerType,
    COCType,
)
from app.schemas.activity_log import ActivityLogCreate

logger = logging.getLogger(__name__)


def _field(entity: Any, name: str, default: Any = None) -> Any:
    """Read a field from an ORM object, a plain object or a dict."""
    if isinstance(entity, Mapping):
        return entity.get(name, default)
    return getattr(entity, name, default)


def _entity_id(entity: Any) -> Any:
    value = _field(entity, "id")
    if value is None:
        value = _field(entity, "_id")
    return value


def _value(member: Any) -> Any:
    return member.value if hasattr(member, "value") else member


def _as_id(value: Any) -> Optional[str]:
    """Stored form of a foreign identifier; a missing id stays None so it matches NULL."""
    return None if value is None else str(value)


def _activity(activity_type: ActivityType, entity_id: Any, content: Any) -> dict:
    activity = {"type": activity_type, "action": ActivityAction.CREATE, "id": entity_id}
    # Missing content falls back to the schema default
    if content is not None:
        activity["content"] = content
    return activity


def _user_performer(user: Any) -> Optional[dict]:
    user_id = _entity_id(user) if user is not None else None
    if user_id is None:
        return None
    return {"type": PerformerType.USER, "id": user_id}


def dedup_key(*parts: Any) -> str:
    """Join the identifying fields of a deduplicated log into one key."""
    return "|".join(str(_value(part)) for part in parts)


class ActivityLogService:
    """Record and read activity logs over an injected session."""

    def __init__(self, db: AsyncSession, strict: Optional[bool] = None):
        self.db = db
        self.strict = settings.ACTIVITY_LOG_STRICT_DEDUP if strict is None else strict

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    async def create(self, performer: Optional[Mapping] = None, **fields) -> ActivityLog:
        """
        Insert one activity log.

        ``performer`` defaults to the System actor when omitted or None.
        Raises pydantic.ValidationError for unknown enum values or missing
        required fields.
        """
        return await self._insert(performer, fields)

    async def find_one(self, **filters) -> Optional[ActivityLog]:
        """Return the first log whose columns equal ``filters``, if any."""
        query = select(ActivityLog)
        for column, value in filters.items():
            query = query.where(getattr(ActivityLog, column) == _value(value))
        result = await self.db.execute(query.limit(1))
        return result.scalars().first()

    async def get(self, log_id: uuid.UUID) -> Optional[ActivityLog]:
        result = await self.db.execute(select(ActivityLog).where(ActivityLog.id == log_id))
        return result.scalar_one_or_none()

    async def list_for_coc(
        self,
        coc_type: COCType,
        coc_id: str,
        activity_type: Optional[ActivityType] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[ActivityLog], int]:
        """Activity feed of one customer or company, newest first, with total count."""
        query = select(ActivityLog).where(
            ActivityLog.coc_type == _value(coc_type),
            ActivityLog.coc_id == str(coc_id),
        )
        if activity_type is not None:
            query = query.where(ActivityLog.activity_type == _value(activity_type))

        total_result = await self.db.execute(select(func.count()).select_from(query.subquery()))
        total = total_result.scalar() or 0

        result = await self.db.execute(
            query.order_by(ActivityLog.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total

    async def _insert(
        self,
        performer: Optional[Mapping],
        fields: dict,
        key: Optional[str] = None,
    ) -> ActivityLog:
        payload = ActivityLogCreate(
            performed_by=performer or {"type": PerformerType.SYSTEM},
            **fields,
        )

        log = ActivityLog(
            activity_type=payload.activity.type.value,
            activity_action=payload.activity.action.value,
            activity_content=payload.activity.content,
            activity_id=payload.activity.id,
            performed_by_type=payload.performed_by.type.value,
            performed_by_id=payload.performed_by.id,
            coc_id=payload.coc.id,
            coc_type=payload.coc.type.value,
            dedup_key=key if self.strict else None,
        )
        if payload.created_at is not None:
            log.created_at = payload.created_at

        # Savepoint: a rejected insert must not expire or discard the rest of the session
        try:
            async with self.db.begin_nested():
                self.db.add(log)
        except IntegrityError:
            if not (self.strict and key):
                raise
            existing = await self.find_one(dedup_key=key)
            if existing is None:
                raise
            await self.db.commit()
            logger.warning(f"Concurrent activity log insert lost to {existing.id} ({key})")
            return existing

        await self.db.commit()
        await self.db.refresh(log)
        logger.debug(
            f"Activity log {log.id}: {log.activity_type}:{log.activity_action} "
            f"on {log.coc_type} {log.coc_id}"
        )
        return log

    # ------------------------------------------------------------------
    # Internal notes
    # ------------------------------------------------------------------

    async def record_internal_note(self, internal_note: Any, user: Any) -> ActivityLog:
        """Log that ``user`` wrote ``internal_note`` about a customer or company."""
        return await self._insert(
            {"type": PerformerType.USER, "id": _entity_id(user)},
            {
                "activity": _activity(
                    ActivityType.INTERNAL_NOTE,
                    _entity_id(internal_note),
                    _field(internal_note, "content"),
                ),
                "coc": {
                    "id": _field(internal_note, "content_type_id"),
                    "type": _field(internal_note, "content_type"),
                },
            },
        )

    # ------------------------------------------------------------------
    # Conversation messages
    # ------------------------------------------------------------------

    async def _find_conversation_log(
        self, message_id: Any, coc_id: Any, coc_type: COCType
    ) -> Optional[ActivityLog]:
        return await self.find_one(
            activity_type=ActivityType.CONVERSATION_MESSAGE,
            activity_action=ActivityAction.CREATE,
            activity_id=_as_id(message_id),
            coc_type=coc_type,
            coc_id=_as_id(coc_id),
            performed_by_type=PerformerType.CUSTOMER,
        )

    async def _record_conversation_for(
        self, message: Any, coc_id: Any, coc_type: COCType
    ) -> Optional[ActivityLog]:
        message_id = _entity_id(message)

        if await self._find_conversation_log(message_id, coc_id, coc_type):
            logger.debug(f"Conversation log for message {message_id} on {coc_type.value} {coc_id} exists")
            return None

        return await self._insert(
            {"type": PerformerType.CUSTOMER},
            {
                "activity": _activity(
                    ActivityType.CONVERSATION_MESSAGE, message_id, _field(message, "content")
                ),
                "coc": {"type": coc_type, "id": coc_id},
            },
            key=dedup_key(
                ActivityType.CONVERSATION_MESSAGE,
                ActivityAction.CREATE,
                message_id,
                coc_type,
                coc_id,
                PerformerType.CUSTOMER,
            ),
        )

    async def record_conversation_message(
        self, message: Any, customer: Any
    ) -> Optional[ActivityLog]:
        """
        Log a customer's conversation message on the customer and on every
        company the customer belongs to.

        Returns:
            The customer-level log created by this call, or None when it
            already existed.
        """
        if customer is None or _entity_id(customer) is None:
            raise InvalidArgumentError(
                "customer",
                "'customer' must be supplied when adding activity log for conversations",
            )
        if message is None or _entity_id(message) is None:
            raise InvalidArgumentError(
                "message",
                "'message' must have an id when adding activity log for conversations",
            )

        for company_id in _field(customer, "company_ids") or []:
            await self._record_conversation_for(message, company_id, COCType.COMPANY)

        return await self._record_conversation_for(
            message, _entity_id(customer), COCType.CUSTOMER
        )

    # ------------------------------------------------------------------
    # Segments
    # ------------------------------------------------------------------

    async def record_segment_membership(self, segment: Any, customer: Any) -> ActivityLog:
        """
        Log that a customer or company was found to belong to ``segment``.

        The kind of ``customer`` is taken from ``segment.content_type``. An
        existing log for the same segment and target is returned unchanged.
        """
        if not customer:
            raise InvalidArgumentError("customer")

        segment_id = _entity_id(segment)
        coc_type = _field(segment, "content_type")
        coc_id = _entity_id(customer)

        existing = await self.find_one(
            activity_type=ActivityType.SEGMENT,
            activity_action=ActivityAction.CREATE,
            activity_id=_as_id(segment_id),
            coc_type=coc_type,
            coc_id=_as_id(coc_id),
        )
        if existing:
            logger.debug(f"Segment log for {segment_id} on {_value(coc_type)} {coc_id} exists")
            return existing

        return await self._insert(
            None,
            {
                "activity": _activity(ActivityType.SEGMENT, segment_id, _field(segment, "name")),
                "coc": {"type": coc_type, "id": coc_id},
            },
            key=dedup_key(
                ActivityType.SEGMENT, ActivityAction.CREATE, segment_id, coc_type, coc_id
            ),
        )

    # ------------------------------------------------------------------
    # Registrations
    # ------------------------------------------------------------------

    async def _record_registration(
        self, entity: Any, user: Any, activity_type: ActivityType, coc_type: COCType
    ) -> ActivityLog:
        entity_id = _entity_id(entity)
        return await self._insert(
            _user_performer(user),
            {
                "activity": _activity(activity_type, entity_id, _field(entity, "name")),
                "coc": {"type": coc_type, "id": entity_id},
            },
        )

    async def record_customer_registration(self, customer: Any, user: Any = None) -> ActivityLog:
        """Log a customer registration; System performer when no user is known."""
        return await self._record_registration(
            customer, user, ActivityType.CUSTOMER, COCType.CUSTOMER
        )

    async def record_company_registration(self, company: Any, user: Any = None) -> ActivityLog:
        """Log a company registration; System performer when no user is known."""
        return await self._record_registration(
            company, user, ActivityType.COMPANY, COCType.COMPANY
        )
