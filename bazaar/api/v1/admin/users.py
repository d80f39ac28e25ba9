"""User and role management."""
import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.cache import cache_service
from bazaar.core.dependencies import require_admin
from bazaar.database import get_db
from bazaar.models.user_role import AppRole
from bazaar.services.audit_service import AuditService
from bazaar.services.profile_service import ProfileService
from bazaar.services.role_service import RoleService

logger = logging.getLogger(__name__)

router = APIRouter()


class UserResponse(BaseModel):
    id: uuid.UUID
    username: str | None = None
    full_name: str | None = None
    business_id: uuid.UUID | None = None
    role: str
    created_at: datetime | None = None


class SetRoleRequest(BaseModel):
    role: AppRole


@router.get("/users", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    """Profiles with their effective role."""
    profiles = await ProfileService(db).list_all()
    roles = await RoleService(db).get_roles_by_user([profile.id for profile in profiles])
    return [
        UserResponse(
            id=profile.id,
            username=profile.username,
            full_name=profile.full_name,
            business_id=profile.business_id,
            role=roles.get(profile.id, AppRole.USER.value),
            created_at=profile.created_at,
        )
        for profile in profiles
    ]


@router.put("/users/{user_id}/role", response_model=UserResponse)
async def set_user_role(
    user_id: uuid.UUID,
    request: SetRoleRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Replace the user's role. Cached listings are dropped since contact visibility may change."""
    profile = await ProfileService(db).get_by_id(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kullanıcı bulunamadı")

    role_service = RoleService(db)
    old_role = await role_service.get_role(user_id)
    await role_service.set_role(user_id, request.role)

    await AuditService(db).record(
        admin_id,
        "user_role_changed",
        "user_roles",
        user_id,
        old_values={"role": old_role},
        new_values={"role": request.role.value},
    )
    await cache_service.invalidate_businesses()
    logger.info(f"Role of {user_id}: {old_role} -> {request.role.value} by {admin_id}")

    return UserResponse(
        id=profile.id,
        username=profile.username,
        full_name=profile.full_name,
        business_id=profile.business_id,
        role=request.role.value,
        created_at=profile.created_at,
    )
