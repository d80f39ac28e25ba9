"""Profile service."""
import asyncio
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.models.profile import Profile

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for user profiles and business ownership."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def owned_business_id(self, user_id: uuid.UUID | None) -> uuid.UUID | None:
        """
        Id of the business the user owns, if any.

        Returns None for anonymous viewers, for users without a profile and
        when the lookup fails.
        """
        if user_id is None:
            return None

        stmt = select(Profile.business_id).where(Profile.id == user_id)
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(stmt)
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.warning(f"Ownership lookup failed for {user_id}, treating as owning nothing: {e}")
            return None

    async def get_by_id(self, user_id: uuid.UUID) -> Profile | None:
        """Get a profile by user id."""
        return await self.db.get(Profile, user_id)

    async def get_or_create(self, user_id: uuid.UUID) -> Profile:
        """Get the profile, creating an empty one on first use."""
        profile = await self.get_by_id(user_id)
        if profile is None:
            profile = Profile(id=user_id)
            self.db.add(profile)
            await self.db.flush()
        return profile

    async def list_all(self) -> list[Profile]:
        """All profiles, newest first."""
        stmt = select(Profile).order_by(Profile.created_at.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update(
        self,
        user_id: uuid.UUID,
        full_name: str | None = None,
        username: str | None = None,
        avatar_url: str | None = None,
    ) -> Profile:
        """Update editable profile fields."""
        profile = await self.get_or_create(user_id)
        if full_name is not None:
            profile.full_name = full_name
        if username is not None:
            profile.username = username
        if avatar_url is not None:
            profile.avatar_url = avatar_url
        await self.db.commit()
        await self.db.refresh(profile)
        return profile
