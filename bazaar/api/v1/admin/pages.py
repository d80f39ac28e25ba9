"""Page content management."""
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.api.v1.pages import PageResponse
from bazaar.core.dependencies import require_admin
from bazaar.database import get_db
from bazaar.services.audit_service import AuditService
from bazaar.services.exceptions import DuplicateEntryError
from bazaar.services.page_service import PageService

router = APIRouter()

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class PageRequest(BaseModel):
    slug: str = Field(..., pattern=SLUG_PATTERN, max_length=100)
    title_tr: str = Field(..., min_length=1, max_length=200)
    title_en: str | None = Field(None, max_length=200)
    content_tr: str | None = None
    content_en: str | None = None
    meta_description_tr: str | None = Field(None, max_length=300)
    meta_description_en: str | None = Field(None, max_length=300)
    is_active: bool = True


class UpdatePageRequest(BaseModel):
    slug: str | None = Field(None, pattern=SLUG_PATTERN, max_length=100)
    title_tr: str | None = Field(None, min_length=1, max_length=200)
    title_en: str | None = Field(None, max_length=200)
    content_tr: str | None = None
    content_en: str | None = None
    meta_description_tr: str | None = Field(None, max_length=300)
    meta_description_en: str | None = Field(None, max_length=300)
    is_active: bool | None = None


@router.get("/pages", response_model=list[PageResponse])
async def list_pages(db: AsyncSession = Depends(get_db)):
    """All pages, drafts included."""
    return await PageService(db).list_all()


@router.post("/pages", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
async def create_page(
    request: PageRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    try:
        page = await PageService(db).create(request.model_dump())
    except DuplicateEntryError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Bu adres zaten kullanılıyor")

    await AuditService(db).record(admin_id, "page_created", "page_contents", page.id, new_values={"slug": page.slug})
    return page


@router.patch("/pages/{page_id}", response_model=PageResponse)
async def update_page(
    page_id: uuid.UUID,
    request: UpdatePageRequest,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    changes = {key: value for key, value in request.model_dump(exclude_unset=True).items()
               if value is not None or key not in ("slug", "title_tr", "is_active")}
    try:
        page = await PageService(db).update(page_id, changes)
    except DuplicateEntryError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Bu adres zaten kullanılıyor")
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sayfa bulunamadı")

    await AuditService(db).record(admin_id, "page_updated", "page_contents", page_id)
    return page


@router.delete("/pages/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page(
    page_id: uuid.UUID,
    admin_id: uuid.UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    deleted = await PageService(db).delete(page_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sayfa bulunamadı")

    await AuditService(db).record(admin_id, "page_deleted", "page_contents", page_id)
    return None
