"""Page content service."""
import uuid
from typing import Any

from sqlalchemy import select, delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.models.page_content import PageContent
from bazaar.services.exceptions import DuplicateEntryError

EDITABLE_FIELDS = frozenset({
    "slug", "title_tr", "title_en", "content_tr", "content_en",
    "meta_description_tr", "meta_description_en", "is_active",
})


class PageService:
    """Service for CMS pages."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_slug(self, slug: str) -> PageContent | None:
        stmt = select(PageContent).where(PageContent.slug == slug)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_slug(self, slug: str) -> PageContent | None:
        """Published page by slug."""
        page = await self.get_by_slug(slug)
        if page is None or not page.is_active:
            return None
        return page

    async def list_all(self) -> list[PageContent]:
        stmt = select(PageContent).order_by(PageContent.created_at.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, data: dict[str, Any]) -> PageContent:
        if await self.get_by_slug(data["slug"]):
            raise DuplicateEntryError(f"Page '{data['slug']}' already exists")

        page = PageContent(**{key: value for key, value in data.items() if key in EDITABLE_FIELDS})
        self.db.add(page)
        await self.db.commit()
        await self.db.refresh(page)
        return page

    async def update(self, page_id: uuid.UUID, data: dict[str, Any]) -> PageContent | None:
        page = await self.db.get(PageContent, page_id)
        if not page:
            return None

        new_slug = data.get("slug")
        if new_slug and new_slug != page.slug and await self.get_by_slug(new_slug):
            raise DuplicateEntryError(f"Page '{new_slug}' already exists")

        for key, value in data.items():
            if key in EDITABLE_FIELDS:
                setattr(page, key, value)

        await self.db.commit()
        await self.db.refresh(page)
        return page

    async def delete(self, page_id: uuid.UUID) -> bool:
        result = await self.db.execute(sql_delete(PageContent).where(PageContent.id == page_id))
        await self.db.commit()
        return result.rowcount > 0
