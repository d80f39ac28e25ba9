"""Role assignment service."""
import asyncio
import logging
import uuid

from sqlalchemy import select, delete as sql_delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.models.user_role import UserRole, AppRole

logger = logging.getLogger(__name__)

# Highest privilege first
ROLE_PRECEDENCE = (AppRole.ADMIN.value, AppRole.MODERATOR.value)


class RoleService:
    """Service for user role assignments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def is_admin(self, user_id: uuid.UUID | None) -> bool:
        """
        Whether the user holds the admin role.

        Anonymous viewers are never admins and cause no lookup. A failed
        lookup is treated as "not admin".
        """
        if user_id is None:
            return False

        stmt = select(UserRole.id).where(
            UserRole.user_id == user_id,
            UserRole.role == AppRole.ADMIN.value,
        ).limit(1)
        # Savepoint keeps the request transaction usable if the lookup fails
        try:
            async with self.db.begin_nested():
                result = await self.db.execute(stmt)
                return result.scalar_one_or_none() is not None
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.warning(f"Admin role lookup failed for {user_id}, treating as non-admin: {e}")
            return False

    async def get_role(self, user_id: uuid.UUID) -> str:
        """Effective role of the user; ``user`` when nothing is assigned."""
        roles = await self.get_roles_by_user([user_id])
        return roles.get(user_id, AppRole.USER.value)

    async def get_roles_by_user(self, user_ids: list[uuid.UUID]) -> dict[uuid.UUID, str]:
        """Effective role for each user that has an assignment."""
        if not user_ids:
            return {}
        stmt = select(UserRole).where(UserRole.user_id.in_(user_ids))
        result = await self.db.execute(stmt)

        assigned: dict[uuid.UUID, set[str]] = {}
        for row in result.scalars().all():
            assigned.setdefault(row.user_id, set()).add(row.role)

        effective = {}
        for user_id, roles in assigned.items():
            effective[user_id] = next(
                (role for role in ROLE_PRECEDENCE if role in roles),
                AppRole.USER.value,
            )
        return effective

    async def set_role(self, user_id: uuid.UUID, role: AppRole) -> None:
        """Replace the user's role assignment. ``user`` just removes it."""
        await self.db.execute(sql_delete(UserRole).where(UserRole.user_id == user_id))
        if role != AppRole.USER:
            self.db.add(UserRole(user_id=user_id, role=role.value))
        await self.db.commit()
