"""Category and location services."""
import uuid
from typing import Any

from sqlalchemy import select, func, delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.models.business import Business, BusinessStatus
from bazaar.models.category import Category
from bazaar.models.location import Location
from bazaar.services.exceptions import EntityInUseError


class _TaxonomyService:
    """Shared CRUD for localized lookup tables referenced by businesses."""

    model: Any = None
    reference_field: str = ""
    editable_fields: frozenset[str] = frozenset()

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def reference_column(self):
        """Business column pointing at this table."""
        return getattr(Business, self.reference_field)

    async def list_all(self) -> list:
        """All entries ordered by Turkish name."""
        stmt = select(self.model).order_by(self.model.name_tr)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def active_business_counts(self) -> dict[uuid.UUID, int]:
        """Number of active businesses per entry."""
        stmt = (
            select(self.reference_column, func.count(Business.id))
            .where(
                Business.status == BusinessStatus.ACTIVE.value,
                self.reference_column.is_not(None),
            )
            .group_by(self.reference_column)
        )
        result = await self.db.execute(stmt)
        return {entry_id: count for entry_id, count in result.all()}

    async def get_by_id(self, entry_id: uuid.UUID):
        return await self.db.get(self.model, entry_id)

    async def create(self, data: dict[str, Any]):
        entry = self.model(**{key: value for key, value in data.items() if key in self.editable_fields})
        self.db.add(entry)
        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def update(self, entry_id: uuid.UUID, data: dict[str, Any]):
        entry = await self.get_by_id(entry_id)
        if not entry:
            return None

        for key, value in data.items():
            if key in self.editable_fields:
                setattr(entry, key, value)

        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def count_references(self, entry_id: uuid.UUID) -> int:
        """Businesses of any status that point at the entry."""
        stmt = select(func.count(Business.id)).where(self.reference_column == entry_id)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def delete(self, entry_id: uuid.UUID) -> bool:
        """
        Delete an entry.

        Raises EntityInUseError while businesses still reference it; they
        have to be reassigned first.
        """
        entry = await self.get_by_id(entry_id)
        if not entry:
            return False

        references = await self.count_references(entry_id)
        if references > 0:
            raise EntityInUseError(self.model.__tablename__, references)

        result = await self.db.execute(sql_delete(self.model).where(self.model.id == entry_id))
        await self.db.commit()
        return result.rowcount > 0


class CategoryService(_TaxonomyService):
    """Service for categories."""

    model = Category
    reference_field = "category_id"
    editable_fields = frozenset({"name_tr", "name_en", "icon", "color"})


class LocationService(_TaxonomyService):
    """Service for locations."""

    model = Location
    reference_field = "location_id"
    editable_fields = frozenset({"name_tr", "name_en", "description_tr", "description_en", "image_url"})
