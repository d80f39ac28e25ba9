"""FastAPI dependencies for the viewer identity."""
import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.security import decode_access_token, subject_from_payload
from bazaar.database import get_db
from bazaar.services.role_service import RoleService

security = HTTPBearer(auto_error=False)


async def get_viewer_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> uuid.UUID | None:
    """
    Id of the current viewer, or None for anonymous requests.

    A token that is present but invalid is rejected rather than downgraded
    to anonymous.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    user_id = subject_from_payload(payload) if payload else None
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Geçersiz veya süresi dolmuş oturum",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


async def require_viewer_id(
    viewer_id: uuid.UUID | None = Depends(get_viewer_id),
) -> uuid.UUID:
    """Reject anonymous requests."""
    if viewer_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Bu işlem için giriş yapmalısınız",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return viewer_id


async def require_admin(
    viewer_id: uuid.UUID = Depends(require_viewer_id),
    db: AsyncSession = Depends(get_db),
) -> uuid.UUID:
    """Allow only viewers with the admin role."""
    if not await RoleService(db).is_admin(viewer_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Yetkiniz yok",
        )
    return viewer_id
