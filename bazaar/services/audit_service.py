"""Audit log service."""
import logging
import uuid
from typing import Any

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.models.audit_log import SecurityAuditLog

logger = logging.getLogger(__name__)


class AuditService:
    """Service for the administrative audit trail."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self,
        user_id: uuid.UUID | None,
        action: str,
        table_name: str | None = None,
        record_id: Any = None,
        old_values: dict | None = None,
        new_values: dict | None = None,
    ) -> SecurityAuditLog:
        """Persist an audit entry."""
        entry = SecurityAuditLog(
            user_id=user_id,
            action=action,
            table_name=table_name,
            record_id=str(record_id) if record_id is not None else None,
            old_values=old_values,
            new_values=new_values,
        )
        self.db.add(entry)
        await self.db.commit()
        logger.info(f"Audit: {action} on {table_name}:{record_id} by {user_id}")
        return entry

    async def list_entries(self, search: str | None = None, limit: int = 100, offset: int = 0) -> list[SecurityAuditLog]:
        """Entries newest first, optionally filtered by action or table name."""
        stmt = select(SecurityAuditLog).order_by(SecurityAuditLog.created_at.desc())
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    SecurityAuditLog.action.ilike(pattern),
                    SecurityAuditLog.table_name.ilike(pattern),
                )
            )
        stmt = stmt.offset(offset).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
