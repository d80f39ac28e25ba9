"""Business listing and management service."""
import logging
import uuid
from typing import Any

from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bazaar.core.visibility import ViewerAccess, ANONYMOUS, redact, redact_all, to_full_view
from bazaar.models.business import Business, BusinessStatus
from bazaar.models.business_image import BusinessImage
from bazaar.schemas.business import BusinessView
from bazaar.services.exceptions import OwnershipConflictError
from bazaar.services.profile_service import ProfileService
from bazaar.services.role_service import RoleService

logger = logging.getLogger(__name__)

SORT_NEWEST = "newest"
SORT_NAME = "name"
SORT_RATING = "rating"
SORT_DISTANCE = "distance"

# Columns a create/update payload may touch
EDITABLE_FIELDS = frozenset({
    "name_tr", "name_en", "description_tr", "description_en",
    "category_id", "location_id", "logo_url", "cover_image_url",
    "working_hours", "accepts_online_orders", "delivery_available",
    "business_type", "payment_methods", "languages", "established_year",
    "min_order_amount", "phone", "email", "whatsapp", "website", "address",
    "shop_number", "owner_name", "social_media",
})


async def resolve_viewer(db: AsyncSession, viewer_id: uuid.UUID | None) -> ViewerAccess:
    """Resolve admin role and owned business once per request."""
    if viewer_id is None:
        return ANONYMOUS
    is_admin = await RoleService(db).is_admin(viewer_id)
    owned_business_id = await ProfileService(db).owned_business_id(viewer_id)
    return ViewerAccess(is_admin=is_admin, owned_business_id=owned_business_id)


class BusinessService:
    """Service for businesses."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        return select(Business).options(
            selectinload(Business.category),
            selectinload(Business.location),
            selectinload(Business.images),
        )

    async def get_by_id(self, business_id: uuid.UUID, refresh: bool = False) -> Business | None:
        """Get a business by id with category, location and images loaded."""
        stmt = self._base_query().where(Business.id == business_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active(
        self,
        viewer_id: uuid.UUID | None,
        search: str | None = None,
        category_id: uuid.UUID | None = None,
        location_id: uuid.UUID | None = None,
        accepts_online_orders: bool | None = None,
        delivery_available: bool | None = None,
        sort: str = SORT_NEWEST,
        limit: int = 50,
        offset: int = 0,
    ) -> list[BusinessView]:
        """
        Active businesses matching the filters, redacted for the viewer.

        Database errors propagate: an empty list always means no matches.
        Rating and distance ordering fall back to newest first.
        """
        stmt = self._base_query().where(Business.status == BusinessStatus.ACTIVE.value)

        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    Business.name_tr.ilike(pattern),
                    Business.name_en.ilike(pattern),
                    Business.description_tr.ilike(pattern),
                    Business.description_en.ilike(pattern),
                )
            )
        if category_id:
            stmt = stmt.where(Business.category_id == category_id)
        if location_id:
            stmt = stmt.where(Business.location_id == location_id)
        if accepts_online_orders is not None:
            stmt = stmt.where(Business.accepts_online_orders == accepts_online_orders)
        if delivery_available is not None:
            stmt = stmt.where(Business.delivery_available == delivery_available)

        if sort == SORT_NAME:
            stmt = stmt.order_by(Business.name_tr, Business.created_at.desc(), Business.id)
        else:
            if sort in (SORT_RATING, SORT_DISTANCE):
                logger.debug(f"No {sort} data for listings, ordering by creation time")
            stmt = stmt.order_by(Business.created_at.desc(), Business.id)

        stmt = stmt.offset(offset).limit(limit)

        result = await self.db.execute(stmt)
        businesses = list(result.scalars().all())
        if not businesses:
            return []

        access = await resolve_viewer(self.db, viewer_id)
        return redact_all(
            [to_full_view(business) for business in businesses],
            viewer_is_admin=access.is_admin,
            owned_business_id=access.owned_business_id,
        )

    async def get_detail(self, business_id: uuid.UUID, viewer_id: uuid.UUID | None) -> BusinessView | None:
        """
        A single business as the viewer may see it.

        Returns None when the business does not exist, or when it is not
        active and the viewer is neither an admin nor its owner.
        """
        business = await self.get_by_id(business_id)
        if business is None:
            return None

        access = await resolve_viewer(self.db, viewer_id)
        if business.status != BusinessStatus.ACTIVE.value and not access.is_privileged_for(business.id):
            return None

        return redact(
            to_full_view(business),
            viewer_is_admin=access.is_admin,
            viewer_owns_business=access.owns(business.id),
        )

    async def create(self, owner_id: uuid.UUID, data: dict[str, Any], image_urls: list[str] | None = None) -> Business:
        """
        Submit a new listing. It starts as pending and is linked to the
        submitter's profile.
        """
        profile_service = ProfileService(self.db)
        profile = await profile_service.get_or_create(owner_id)
        if profile.business_id is not None:
            raise OwnershipConflictError(f"User {owner_id} already owns business {profile.business_id}")

        values = {key: value for key, value in data.items() if key in EDITABLE_FIELDS}
        business = Business(**values, status=BusinessStatus.PENDING.value)
        if image_urls:
            business.images = [
                BusinessImage(image_url=url, sort_order=position)
                for position, url in enumerate(image_urls)
            ]
        self.db.add(business)
        await self.db.flush()

        profile.business_id = business.id
        await self.db.commit()
        logger.info(f"Business {business.id} submitted by {owner_id}, awaiting approval")

        return await self.get_by_id(business.id, refresh=True)

    async def update(
        self,
        business_id: uuid.UUID,
        data: dict[str, Any],
        image_urls: list[str] | None = None,
    ) -> Business | None:
        """Update listing fields. A non-None ``image_urls`` replaces the gallery."""
        business = await self.get_by_id(business_id, refresh=True)
        if not business:
            return None

        for key, value in data.items():
            if key in EDITABLE_FIELDS:
                setattr(business, key, value)

        if image_urls is not None:
            business.images.clear()
            business.images.extend(
                BusinessImage(image_url=url, sort_order=position)
                for position, url in enumerate(image_urls)
            )

        await self.db.commit()
        return await self.get_by_id(business_id, refresh=True)

    async def set_status(self, business_id: uuid.UUID, status: BusinessStatus) -> Business | None:
        """Change the lifecycle status of a listing."""
        business = await self.get_by_id(business_id, refresh=True)
        if not business:
            return None

        business.status = status.value
        await self.db.commit()
        return await self.get_by_id(business_id, refresh=True)

    async def list_by_status(self, status: BusinessStatus) -> list[Business]:
        """Businesses in the given status, newest first."""
        stmt = (
            self._base_query()
            .where(Business.status == status.value)
            .order_by(Business.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(self) -> dict[str, int]:
        """Number of businesses per status."""
        stmt = select(Business.status, func.count(Business.id)).group_by(Business.status)
        result = await self.db.execute(stmt)
        counts = {status.value: 0 for status in BusinessStatus}
        for status, count in result.all():
            counts[status] = count
        return counts
