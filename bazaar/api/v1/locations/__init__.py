"""Locations API."""
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.cache import cache_service, get_cache_key_locations
from bazaar.core.errors import backend_unavailable
from bazaar.database import get_db
from bazaar.services.taxonomy_service import LocationService

router = APIRouter()


class LocationResponse(BaseModel):
    """Location with the number of active businesses in it."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name_tr: str
    name_en: str
    description_tr: str | None = None
    description_en: str | None = None
    image_url: str | None = None
    business_count: int = 0
    created_at: datetime | None = None


async def build_location_list(db: AsyncSession) -> list[LocationResponse]:
    service = LocationService(db)
    locations = await service.list_all()
    counts = await service.active_business_counts()
    return [
        LocationResponse.model_validate(location).model_copy(
            update={"business_count": counts.get(location.id, 0)}
        )
        for location in locations
    ]


@router.get("", response_model=list[LocationResponse])
async def list_locations(db: AsyncSession = Depends(get_db)):
    """All bazaar locations ordered by Turkish name."""
    # Check cache
    cache_key = get_cache_key_locations()
    cached = await cache_service.get(cache_key)
    if cached is not None:
        return [LocationResponse(**item) for item in cached]

    try:
        result = await build_location_list(db)
    except SQLAlchemyError as e:
        raise backend_unavailable(e, "Location listing")

    # Save to cache (TTL 60 seconds)
    await cache_service.set(cache_key, [item.model_dump(mode="json") for item in result], ttl=60)
    return result
