"""Category and location management."""
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.api.v1.categories import CategoryResponse, build_category_list
from bazaar.api.v1.locations import LocationResponse, build_location_list
from bazaar.core.cache import cache_service, get_cache_key_categories, get_cache_key_locations
from bazaar.core.dependencies import require_admin
from bazaar.database import get_db
from bazaar.services.audit_service import AuditService
from bazaar.services.exceptions import EntityInUseError
from bazaar.services.taxonomy_service import CategoryService, LocationService

router = APIRouter()


class CategoryRequest(BaseModel):
    name_tr: str = Field(..., min_length=1, max_length=100)
    name_en: str = Field(..., min_length=1, max_length=100)
    icon: str | None = None
    color: str | None = None


class UpdateCategoryRequest(BaseModel):
    name_tr: str | None = Field(None, min_length=1, max_length=100)
    name_en: str | None = Field(None, min_length=1, max_length=100)
    icon: str | None = None
    color: str | None = None


class LocationRequest(BaseModel):
    name_tr: str = Field(..., min_length=1, max_length=100)
    name_en: str = Field(..., min_length=1, max_length=100)
    description_tr: str | None = Field(None, max_length=1000)
    description_en: str | None = Field(None, max_length=1000)
    image_url: str | None = None


class UpdateLocationRequest(BaseModel):
    name_tr: str | None = Field(None, min_length=1, max_length=100)
    name_en: str | None = Field(None, min_length=1, max_length=100)
    description_tr: str | None = Field(None, max_length=1000)
    description_en: str | None = Field(None, max_length=1000)
    image_url: str | None = None


def _changes(request: BaseModel) -> dict:
    data = request.model_dump(exclude_unset=True)
    # Names are required, null means "leave unchanged"
    for key in ("name_tr", "name_en"):
        if key in data and data[key] is None:
            del data[key]
    return data


async def _invalidate_categories():
    await cache_service.delete(get_cache_key_categories())
    await cache_service.invalidate_businesses()


async def _invalidate_locations():
    await cache_service.delete(get_cache_key_locations())
    await cache_service.invalidate_businesses()


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await build_category_list(db)


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CategoryRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    category = await CategoryService(db).create(request.model_dump())
    await AuditService(db).record(admin_id, "category_created", "categories", category.id, new_values=request.model_dump())
    await _invalidate_categories()
    return CategoryResponse.model_validate(category)


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    request: UpdateCategoryRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    changes = _changes(request)
    category = await CategoryService(db).update(category_id, changes)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kategori bulunamadı")

    await AuditService(db).record(admin_id, "category_updated", "categories", category_id, new_values=changes)
    await _invalidate_categories()
    return CategoryResponse.model_validate(category)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: uuid.UUID,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a category. Refused while businesses still use it."""
    try:
        deleted = await CategoryService(db).delete(category_id)
    except EntityInUseError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Bu kategoride {e.count} işletme bulunuyor. Önce işletmeleri başka kategorilere taşıyın.",
        )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kategori bulunamadı")

    await AuditService(db).record(admin_id, "category_deleted", "categories", category_id)
    await _invalidate_categories()
    return None


@router.get("/locations", response_model=list[LocationResponse])
async def list_locations(db: AsyncSession = Depends(get_db)):
    return await build_location_list(db)


@router.post("/locations", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    request: LocationRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    location = await LocationService(db).create(request.model_dump())
    await AuditService(db).record(admin_id, "location_created", "locations", location.id, new_values=request.model_dump())
    await _invalidate_locations()
    return LocationResponse.model_validate(location)


@router.patch("/locations/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: uuid.UUID,
    request: UpdateLocationRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    changes = _changes(request)
    location = await LocationService(db).update(location_id, changes)
    if location is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Konum bulunamadı")

    await AuditService(db).record(admin_id, "location_updated", "locations", location_id, new_values=changes)
    await _invalidate_locations()
    return LocationResponse.model_validate(location)


@router.delete("/locations/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(
    location_id: uuid.UUID,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a location. Refused while businesses still use it."""
    try:
        deleted = await LocationService(db).delete(location_id)
    except EntityInUseError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Bu konumda {e.count} işletme bulunuyor. Önce işletmeleri başka konumlara taşıyın.",
        )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Konum bulunamadı")

    await AuditService(db).record(admin_id, "location_deleted", "locations", location_id)
    await _invalidate_locations()
    return None
