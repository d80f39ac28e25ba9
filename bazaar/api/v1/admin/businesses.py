"""Listing moderation."""
import logging
import uuid
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.cache import cache_service
from bazaar.core.dependencies import require_admin
from bazaar.core.visibility import to_full_view
from bazaar.database import get_db
from bazaar.models.business import BusinessStatus
from bazaar.schemas.business import FullBusinessView
from bazaar.services.audit_service import AuditService
from bazaar.services.business_service import BusinessService

logger = logging.getLogger(__name__)

router = APIRouter()


class UpdateStatusRequest(BaseModel):
    """Approve (active) or reject/hide (inactive) a listing."""

    status: Literal["active", "inactive"]


@router.get("/businesses/pending", response_model=list[FullBusinessView])
async def list_pending_businesses(db: AsyncSession = Depends(get_db)):
    """Listings waiting for approval, newest first."""
    businesses = await BusinessService(db).list_by_status(BusinessStatus.PENDING)
    return [to_full_view(business) for business in businesses]


@router.get("/businesses", response_model=list[FullBusinessView])
async def list_businesses_by_status(
    status_filter: BusinessStatus = Query(BusinessStatus.ACTIVE, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    """All listings in a given status."""
    businesses = await BusinessService(db).list_by_status(status_filter)
    return [to_full_view(business) for business in businesses]


@router.post("/businesses/{business_id}/status", response_model=FullBusinessView)
async def update_business_status(
    business_id: uuid.UUID,
    request: UpdateStatusRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Approve or deactivate a listing."""
    service = BusinessService(db)
    business = await service.get_by_id(business_id)
    if business is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="İşletme bulunamadı")

    old_status = business.status
    business = await service.set_status(business_id, BusinessStatus(request.status))

    await AuditService(db).record(
        user_id=admin_id,
        action="business_approved" if request.status == "active" else "business_deactivated",
        table_name="businesses",
        record_id=business_id,
        old_values={"status": old_status},
        new_values={"status": request.status},
    )
    await cache_service.invalidate_businesses()
    logger.info(f"Business {business_id}: {old_status} -> {request.status} by {admin_id}")

    return to_full_view(business)
