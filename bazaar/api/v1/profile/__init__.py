"""Own profile API."""
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.api.v1.businesses import BusinessResponse
from bazaar.core.dependencies import require_viewer_id
from bazaar.database import get_db
from bazaar.services.business_service import BusinessService
from bazaar.services.profile_service import ProfileService
from bazaar.services.role_service import RoleService

router = APIRouter()


class ProfileResponse(BaseModel):
    id: uuid.UUID
    username: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    role: str
    business_id: uuid.UUID | None = None
    business: BusinessResponse | None = None
    created_at: datetime | None = None


class UpdateProfileRequest(BaseModel):
    username: str | None = Field(None, min_length=3, max_length=50)
    full_name: str | None = Field(None, max_length=100)
    avatar_url: str | None = None


async def _build_profile(db: AsyncSession, viewer_id: uuid.UUID) -> ProfileResponse:
    profile = await ProfileService(db).get_by_id(viewer_id)
    role = await RoleService(db).get_role(viewer_id)

    business = None
    if profile and profile.business_id:
        business = await BusinessService(db).get_detail(profile.business_id, viewer_id)

    return ProfileResponse(
        id=viewer_id,
        username=profile.username if profile else None,
        full_name=profile.full_name if profile else None,
        avatar_url=profile.avatar_url if profile else None,
        role=role,
        business_id=profile.business_id if profile else None,
        business=business,
        created_at=profile.created_at if profile else None,
    )


@router.get("", response_model=ProfileResponse)
async def get_profile(
    viewer_id: uuid.UUID = Depends(require_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """The viewer's profile, role and own business (with contact details)."""
    return await _build_profile(db, viewer_id)


@router.patch("", response_model=ProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    viewer_id: uuid.UUID = Depends(require_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """Update display name, username or avatar."""
    await ProfileService(db).update(
        viewer_id,
        full_name=request.full_name,
        username=request.username,
        avatar_url=request.avatar_url,
    )
    return await _build_profile(db, viewer_id)
