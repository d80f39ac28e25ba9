"""Site settings service."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.models.site_setting import SiteSetting

# Setting groups edited from the admin panel
KNOWN_KEYS = ("site_info", "contact_info", "social_media", "seo_settings")


class SiteSettingService:
    """Service for site-wide settings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> dict:
        """All settings as ``{key: value}``."""
        result = await self.db.execute(select(SiteSetting))
        return {setting.key: setting.value for setting in result.scalars().all()}

    async def get_by_key(self, key: str) -> dict | None:
        stmt = select(SiteSetting).where(SiteSetting.key == key)
        result = await self.db.execute(stmt)
        setting = result.scalar_one_or_none()
        return setting.value if setting else None

    async def set(self, key: str, value: dict) -> SiteSetting:
        """Create or replace a setting."""
        stmt = select(SiteSetting).where(SiteSetting.key == key)
        result = await self.db.execute(stmt)
        setting = result.scalar_one_or_none()

        if setting:
            setting.value = value
        else:
            setting = SiteSetting(key=key, value=value)
            self.db.add(setting)

        await self.db.commit()
        await self.db.refresh(setting)
        return setting
