"""Favorites API."""
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.api.v1.businesses import BusinessResponse
from bazaar.core.dependencies import require_viewer_id
from bazaar.core.errors import backend_unavailable
from bazaar.database import get_db
from bazaar.services.exceptions import DuplicateEntryError
from bazaar.services.favorite_service import FavoriteService

router = APIRouter()


class AddFavoriteRequest(BaseModel):
    business_id: uuid.UUID


@router.get("", response_model=list[BusinessResponse])
async def list_favorites(
    viewer_id: uuid.UUID = Depends(require_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """The viewer's favorite businesses."""
    try:
        return await FavoriteService(db).list_for_user(viewer_id)
    except SQLAlchemyError as e:
        raise backend_unavailable(e, "Favorites listing")


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_favorite(
    request: AddFavoriteRequest,
    viewer_id: uuid.UUID = Depends(require_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """Add a business to favorites."""
    try:
        favorite = await FavoriteService(db).add(viewer_id, request.business_id)
    except DuplicateEntryError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="İşletme zaten favorilerinizde",
        )

    if favorite is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="İşletme bulunamadı")
    return {"ok": True, "business_id": str(request.business_id)}


@router.delete("/{business_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    business_id: uuid.UUID,
    viewer_id: uuid.UUID = Depends(require_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """Remove a business from favorites."""
    removed = await FavoriteService(db).remove(viewer_id, business_id)
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favori bulunamadı")
    return None
