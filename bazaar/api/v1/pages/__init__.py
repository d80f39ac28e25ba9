"""Page content API."""
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.database import get_db
from bazaar.services.page_service import PageService

router = APIRouter()


class PageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    slug: str
    title_tr: str
    title_en: str | None = None
    content_tr: str | None = None
    content_en: str | None = None
    meta_description_tr: str | None = None
    meta_description_en: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


@router.get("/{slug}", response_model=PageResponse)
async def get_page(slug: str, db: AsyncSession = Depends(get_db)):
    """A published page by slug."""
    page = await PageService(db).get_active_by_slug(slug)
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sayfa bulunamadı")
    return page
