"""Categories API."""
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.cache import cache_service, get_cache_key_categories
from bazaar.core.errors import backend_unavailable
from bazaar.database import get_db
from bazaar.services.taxonomy_service import CategoryService

router = APIRouter()


class CategoryResponse(BaseModel):
    """Category with the number of active businesses in it."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name_tr: str
    name_en: str
    icon: str | None = None
    color: str | None = None
    business_count: int = 0
    created_at: datetime | None = None


async def build_category_list(db: AsyncSession) -> list[CategoryResponse]:
    service = CategoryService(db)
    categories = await service.list_all()
    counts = await service.active_business_counts()
    return [
        CategoryResponse.model_validate(category).model_copy(
            update={"business_count": counts.get(category.id, 0)}
        )
        for category in categories
    ]


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """All categories ordered by Turkish name."""
    # Check cache
    cache_key = get_cache_key_categories()
    cached = await cache_service.get(cache_key)
    if cached is not None:
        return [CategoryResponse(**item) for item in cached]

    try:
        result = await build_category_list(db)
    except SQLAlchemyError as e:
        raise backend_unavailable(e, "Category listing")

    # Save to cache (TTL 60 seconds)
    await cache_service.set(cache_key, [item.model_dump(mode="json") for item in result], ttl=60)
    return result
