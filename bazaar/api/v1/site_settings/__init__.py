"""Public site settings API."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.cache import cache_service, get_cache_key_site_settings
from bazaar.database import get_db
from bazaar.services.site_setting_service import SiteSettingService

router = APIRouter()


@router.get("", response_model=dict)
async def get_site_settings(db: AsyncSession = Depends(get_db)):
    """Site name, contact details, social links and SEO texts."""
    # Check cache
    cache_key = get_cache_key_site_settings()
    cached = await cache_service.get(cache_key)
    if cached is not None:
        return cached

    result = await SiteSettingService(db).get_all()
    # Save to cache (TTL 600 seconds)
    await cache_service.set(cache_key, result, ttl=600)
    return result
