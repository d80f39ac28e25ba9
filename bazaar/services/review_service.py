"""Review service."""
import uuid

from sqlalchemy import select, delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.models.business import Business
from bazaar.models.profile import Profile
from bazaar.models.review import Review


class ReviewService:
    """Service for business reviews."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_business(self, business_id: uuid.UUID) -> list[tuple[Review, str | None]]:
        """Reviews of a business with the reviewer's display name, newest first."""
        stmt = (
            select(Review, Profile.full_name)
            .outerjoin(Profile, Profile.id == Review.user_id)
            .where(Review.business_id == business_id)
            .order_by(Review.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return [(review, name) for review, name in result.all()]

    async def list_all(self, rating: int | None = None) -> list[tuple[Review, str | None, str | None]]:
        """
        All reviews for moderation, newest first.

        Each row carries the reviewer's display name and the business name.
        """
        stmt = (
            select(Review, Profile.full_name, Business.name_tr)
            .outerjoin(Profile, Profile.id == Review.user_id)
            .outerjoin(Business, Business.id == Review.business_id)
            .order_by(Review.created_at.desc())
        )
        if rating is not None:
            stmt = stmt.where(Review.rating == rating)
        result = await self.db.execute(stmt)
        return [(review, name, business_name) for review, name, business_name in result.all()]

    async def create(
        self,
        business_id: uuid.UUID,
        user_id: uuid.UUID,
        rating: int,
        comment: str | None = None,
    ) -> Review:
        review = Review(business_id=business_id, user_id=user_id, rating=rating, comment=comment)
        self.db.add(review)
        await self.db.commit()
        await self.db.refresh(review)
        return review

    async def delete(self, review_id: uuid.UUID) -> bool:
        result = await self.db.execute(sql_delete(Review).where(Review.id == review_id))
        await self.db.commit()
        return result.rowcount > 0
