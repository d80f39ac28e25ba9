"""Featured businesses service."""
import logging
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import select, func, update as sql_update, delete as sql_delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bazaar.core.visibility import redact_all, to_full_view
from bazaar.models.business import Business, BusinessStatus
from bazaar.models.featured import FeaturedBusiness
from bazaar.schemas.business import BusinessView
from bazaar.services.business_service import resolve_viewer
from bazaar.services.exceptions import DuplicateEntryError

logger = logging.getLogger(__name__)


class FeaturedService:
    """Service for featured listings curated by admins."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _with_business(self):
        return select(FeaturedBusiness).options(
            selectinload(FeaturedBusiness.business).selectinload(Business.category),
            selectinload(FeaturedBusiness.business).selectinload(Business.location),
            selectinload(FeaturedBusiness.business).selectinload(Business.images),
        )

    async def list_all(self) -> list[FeaturedBusiness]:
        """Every featured entry ordered by position."""
        stmt = self._with_business().order_by(FeaturedBusiness.sort_order)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_public(self, viewer_id: uuid.UUID | None, now: datetime | None = None) -> list[BusinessView]:
        """Currently featured active businesses, redacted for the viewer."""
        now = now or datetime.utcnow()
        stmt = (
            self._with_business()
            .join(FeaturedBusiness.business)
            .where(
                FeaturedBusiness.is_active.is_(True),
                Business.status == BusinessStatus.ACTIVE.value,
                or_(FeaturedBusiness.featured_until.is_(None), FeaturedBusiness.featured_until > now),
            )
            .order_by(FeaturedBusiness.sort_order)
        )
        result = await self.db.execute(stmt)
        entries = list(result.scalars().all())
        if not entries:
            return []

        access = await resolve_viewer(self.db, viewer_id)
        return redact_all(
            [to_full_view(entry.business) for entry in entries],
            viewer_is_admin=access.is_admin,
            owned_business_id=access.owned_business_id,
        )

    async def get_by_id(self, featured_id: uuid.UUID, refresh: bool = False) -> FeaturedBusiness | None:
        stmt = self._with_business().where(FeaturedBusiness.id == featured_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, business_id: uuid.UUID, featured_until: datetime | None = None) -> FeaturedBusiness | None:
        """
        Feature an active business at the end of the list.

        Returns None if the business does not exist or is not active.
        """
        business = await self.db.get(Business, business_id)
        if not business or business.status != BusinessStatus.ACTIVE.value:
            return None

        existing = await self.db.execute(
            select(FeaturedBusiness.id).where(FeaturedBusiness.business_id == business_id)
        )
        if existing.scalar_one_or_none() is not None:
            raise DuplicateEntryError(f"Business {business_id} is already featured")

        max_order = await self.db.execute(select(func.max(FeaturedBusiness.sort_order)))
        current_max = max_order.scalar_one_or_none()
        next_order = current_max + 1 if current_max is not None else 0

        featured = FeaturedBusiness(
            business_id=business_id,
            sort_order=next_order,
            is_active=True,
            featured_until=featured_until,
        )
        self.db.add(featured)
        await self.db.commit()
        return await self.get_by_id(featured.id, refresh=True)

    async def update(self, featured_id: uuid.UUID, data: dict[str, Any]) -> FeaturedBusiness | None:
        """Change position, active flag or expiry of an entry."""
        featured = await self.db.get(FeaturedBusiness, featured_id)
        if not featured:
            return None

        for key in ("sort_order", "is_active", "featured_until"):
            if key in data:
                setattr(featured, key, data[key])

        await self.db.commit()
        return await self.get_by_id(featured_id, refresh=True)

    async def remove(self, featured_id: uuid.UUID) -> bool:
        result = await self.db.execute(sql_delete(FeaturedBusiness).where(FeaturedBusiness.id == featured_id))
        await self.db.commit()
        return result.rowcount > 0

    async def expire_past_due(self, now: datetime | None = None) -> int:
        """Deactivate entries whose ``featured_until`` has passed."""
        now = now or datetime.utcnow()
        stmt = (
            sql_update(FeaturedBusiness)
            .where(
                FeaturedBusiness.is_active.is_(True),
                FeaturedBusiness.featured_until.is_not(None),
                FeaturedBusiness.featured_until <= now,
            )
            .values(is_active=False, updated_at=now)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount
