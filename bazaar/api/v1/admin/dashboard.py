"""Admin dashboard: statistics and audit trail."""
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.database import get_db
from bazaar.services.audit_service import AuditService
from bazaar.services.stats_service import StatsService

router = APIRouter()


class StatsResponse(BaseModel):
    total_users: int
    total_businesses: int
    pending_businesses: int
    active_businesses: int
    inactive_businesses: int
    total_categories: int
    total_locations: int
    total_reviews: int


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID | None = None
    action: str
    table_name: str | None = None
    record_id: str | None = None
    old_values: dict | None = None
    new_values: dict | None = None
    created_at: datetime | None = None


@router.get("/stats", response_model=StatsResponse)
async def get_stats(db: AsyncSession = Depends(get_db)):
    return StatsResponse(**await StatsService(db).summary())


@router.get("/audit-logs", response_model=list[AuditLogResponse])
async def list_audit_logs(
    search: str | None = Query(None, max_length=100),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Administrative actions, newest first."""
    return await AuditService(db).list_entries(search=search, limit=limit, offset=offset)
