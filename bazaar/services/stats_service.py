"""Admin dashboard statistics."""
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.models.category import Category
from bazaar.models.location import Location
from bazaar.models.profile import Profile
from bazaar.models.review import Review
from bazaar.services.business_service import BusinessService


class StatsService:
    """Aggregate counts for the admin dashboard."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, column) -> int:
        result = await self.db.execute(select(func.count(column)))
        return result.scalar_one()

    async def summary(self) -> dict[str, int]:
        by_status = await BusinessService(self.db).count_by_status()
        return {
            "total_users": await self._count(Profile.id),
            "total_businesses": sum(by_status.values()),
            "pending_businesses": by_status["pending"],
            "active_businesses": by_status["active"],
            "inactive_businesses": by_status["inactive"],
            "total_categories": await self._count(Category.id),
            "total_locations": await self._count(Location.id),
            "total_reviews": await self._count(Review.id),
        }
