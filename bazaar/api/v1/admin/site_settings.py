"""Site settings management."""
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.cache import cache_service, get_cache_key_site_settings
from bazaar.core.dependencies import require_admin
from bazaar.database import get_db
from bazaar.services.audit_service import AuditService
from bazaar.services.site_setting_service import KNOWN_KEYS, SiteSettingService

router = APIRouter()


@router.get("/site-settings", response_model=dict)
async def get_site_settings(db: AsyncSession = Depends(get_db)):
    return await SiteSettingService(db).get_all()


@router.put("/site-settings/{key}", response_model=dict)
async def set_site_setting(
    key: str,
    value: dict,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Replace one settings group (site_info, contact_info, social_media, seo_settings)."""
    if key not in KNOWN_KEYS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Bilinmeyen ayar: {key}",
        )

    service = SiteSettingService(db)
    old_value = await service.get_by_key(key)
    setting = await service.set(key, value)

    await AuditService(db).record(admin_id, "site_setting_updated", "site_settings", key,
                                  old_values=old_value, new_values=value)
    await cache_service.delete(get_cache_key_site_settings())
    return {setting.key: setting.value}
