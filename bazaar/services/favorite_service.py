"""Favorites service."""
import uuid

from sqlalchemy import select, delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bazaar.core.visibility import redact_all, to_full_view
from bazaar.models.business import Business, BusinessStatus
from bazaar.models.favorite import UserFavorite
from bazaar.schemas.business import BusinessView
from bazaar.services.business_service import resolve_viewer
from bazaar.services.exceptions import DuplicateEntryError


class FavoriteService:
    """Service for the viewer's bookmarked businesses."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: uuid.UUID) -> list[BusinessView]:
        """Active favorite businesses of the user, redacted for that user."""
        stmt = (
            select(Business)
            .join(UserFavorite, UserFavorite.business_id == Business.id)
            .options(
                selectinload(Business.category),
                selectinload(Business.location),
                selectinload(Business.images),
            )
            .where(
                UserFavorite.user_id == user_id,
                Business.status == BusinessStatus.ACTIVE.value,
            )
            .order_by(UserFavorite.created_at.desc())
        )
        result = await self.db.execute(stmt)
        businesses = list(result.scalars().all())
        if not businesses:
            return []

        access = await resolve_viewer(self.db, user_id)
        return redact_all(
            [to_full_view(business) for business in businesses],
            viewer_is_admin=access.is_admin,
            owned_business_id=access.owned_business_id,
        )

    async def add(self, user_id: uuid.UUID, business_id: uuid.UUID) -> UserFavorite | None:
        """Bookmark an active business. Returns None if it is not listed."""
        business = await self.db.get(Business, business_id)
        if not business or business.status != BusinessStatus.ACTIVE.value:
            return None

        existing = await self.db.execute(
            select(UserFavorite.id).where(
                UserFavorite.user_id == user_id,
                UserFavorite.business_id == business_id,
            )
        )
        if existing.scalar_one_or_none() is not None:
            raise DuplicateEntryError(f"Business {business_id} is already a favorite")

        favorite = UserFavorite(user_id=user_id, business_id=business_id)
        self.db.add(favorite)
        await self.db.commit()
        await self.db.refresh(favorite)
        return favorite

    async def remove(self, user_id: uuid.UUID, business_id: uuid.UUID) -> bool:
        stmt = sql_delete(UserFavorite).where(
            UserFavorite.user_id == user_id,
            UserFavorite.business_id == business_id,
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount > 0
