"""Featured listing curation."""
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.cache import cache_service
from bazaar.core.dependencies import require_admin
from bazaar.database import get_db
from bazaar.models.featured import FeaturedBusiness
from bazaar.services.audit_service import AuditService
from bazaar.services.exceptions import DuplicateEntryError
from bazaar.services.featured_service import FeaturedService

router = APIRouter()


class FeaturedResponse(BaseModel):
    id: uuid.UUID
    business_id: uuid.UUID
    business_name_tr: str | None = None
    business_name_en: str | None = None
    business_status: str | None = None
    category_name_tr: str | None = None
    location_name_tr: str | None = None
    sort_order: int
    is_active: bool
    featured_until: datetime | None = None
    created_at: datetime | None = None


class AddFeaturedRequest(BaseModel):
    business_id: uuid.UUID
    featured_until: datetime | None = None


class UpdateFeaturedRequest(BaseModel):
    sort_order: int | None = Field(None, ge=0)
    is_active: bool | None = None
    featured_until: datetime | None = None


def _to_response(featured: FeaturedBusiness) -> FeaturedResponse:
    business = featured.business
    return FeaturedResponse(
        id=featured.id,
        business_id=featured.business_id,
        business_name_tr=business.name_tr if business else None,
        business_name_en=business.name_en if business else None,
        business_status=business.status if business else None,
        category_name_tr=business.category.name_tr if business and business.category else None,
        location_name_tr=business.location.name_tr if business and business.location else None,
        sort_order=featured.sort_order,
        is_active=featured.is_active,
        featured_until=featured.featured_until,
        created_at=featured.created_at,
    )


@router.get("/featured", response_model=list[FeaturedResponse])
async def list_featured(db: AsyncSession = Depends(get_db)):
    """All featured entries, including inactive and expired ones."""
    entries = await FeaturedService(db).list_all()
    return [_to_response(entry) for entry in entries]


@router.post("/featured", response_model=FeaturedResponse, status_code=status.HTTP_201_CREATED)
async def add_featured(
    request: AddFeaturedRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Feature an active business at the end of the list."""
    try:
        featured = await FeaturedService(db).add(request.business_id, request.featured_until)
    except DuplicateEntryError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="İşletme zaten öne çıkanlarda",
        )
    if featured is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Aktif işletme bulunamadı",
        )

    await AuditService(db).record(admin_id, "featured_added", "featured_businesses", featured.id,
                                  new_values={"business_id": str(request.business_id)})
    await cache_service.invalidate_businesses()
    return _to_response(featured)


@router.patch("/featured/{featured_id}", response_model=FeaturedResponse)
async def update_featured(
    featured_id: uuid.UUID,
    request: UpdateFeaturedRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Reorder, pause or change the expiry of a featured entry."""
    changes = request.model_dump(exclude_unset=True)
    for key in ("sort_order", "is_active"):
        if key in changes and changes[key] is None:
            del changes[key]

    featured = await FeaturedService(db).update(featured_id, changes)
    if featured is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kayıt bulunamadı")

    await AuditService(db).record(admin_id, "featured_updated", "featured_businesses", featured_id,
                                  new_values=request.model_dump(mode="json", exclude_unset=True))
    await cache_service.invalidate_businesses()
    return _to_response(featured)


@router.delete("/featured/{featured_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_featured(
    featured_id: uuid.UUID,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    removed = await FeaturedService(db).remove(featured_id)
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kayıt bulunamadı")

    await AuditService(db).record(admin_id, "featured_removed", "featured_businesses", featured_id)
    await cache_service.invalidate_businesses()
    return None
