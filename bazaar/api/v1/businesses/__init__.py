"""Businesses API."""
import logging
import re
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.core.cache import (
    cache_service,
    get_cache_key_business_detail,
    get_cache_key_business_list,
    get_cache_key_featured,
)
from bazaar.core.dependencies import get_viewer_id, require_viewer_id
from bazaar.core.errors import backend_unavailable
from bazaar.core.visibility import to_full_view
from bazaar.database import get_db
from bazaar.models.business import BusinessStatus, BusinessType, PaymentMethod
from bazaar.schemas.business import (
    SOCIAL_NETWORKS,
    FullBusinessView,
    PublicBusinessView,
    WorkingHours,
    dump_working_hours,
    load_view,
)
from bazaar.services.business_service import BusinessService, resolve_viewer
from bazaar.services.exceptions import OwnershipConflictError
from bazaar.services.featured_service import FeaturedService
from bazaar.services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter()

PHONE_RE = re.compile(r"^\+?[0-9\s\-\(\)]{10,15}$")
EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
URL_RE = re.compile(
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._\+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_\+.~#?&/=]*)$"
)

SortOption = Literal["newest", "name", "rating", "distance"]

# Columns that cannot be cleared once set
NON_NULLABLE_FIELDS = ("name_tr", "category_id", "location_id", "accepts_online_orders", "delivery_available")

BusinessResponse = FullBusinessView | PublicBusinessView


def _blank_to_none(v):
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class BusinessFields(BaseModel):
    """Fields shared by listing submission and update."""

    name_en: str | None = Field(None, max_length=100)
    description_tr: str | None = Field(None, max_length=1000)
    description_en: str | None = Field(None, max_length=1000)
    logo_url: str | None = None
    cover_image_url: str | None = None
    working_hours: WorkingHours | None = None
    accepts_online_orders: bool | None = None
    delivery_available: bool | None = None
    business_type: BusinessType | None = None
    payment_methods: list[PaymentMethod] | None = None
    languages: list[str] | None = None
    established_year: int | None = Field(None, ge=1400, le=2100)
    min_order_amount: Decimal | None = Field(None, ge=0)

    phone: str | None = None
    email: str | None = Field(None, max_length=255)
    whatsapp: str | None = None
    website: str | None = Field(None, max_length=500)
    address: str | None = None
    shop_number: str | None = Field(None, max_length=20)
    owner_name: str | None = Field(None, max_length=100)
    social_media: dict[str, str | None] | None = None

    images: list[str] | None = None  # gallery image URLs, replaces existing

    @field_validator(
        "name_en", "description_tr", "description_en", "logo_url", "cover_image_url",
        "phone", "email", "whatsapp", "website", "address", "shop_number", "owner_name",
        mode="before",
    )
    @classmethod
    def _strip(cls, v):
        return _blank_to_none(v)

    @field_validator("phone", "whatsapp")
    @classmethod
    def _validate_phone(cls, v: str | None) -> str | None:
        if v is not None and not PHONE_RE.match(v):
            raise ValueError("Geçerli bir telefon numarası giriniz")
        return v

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str | None) -> str | None:
        if v is not None and not EMAIL_RE.match(v):
            raise ValueError("Geçerli bir e-posta adresi giriniz")
        return v

    @field_validator("website")
    @classmethod
    def _validate_website(cls, v: str | None) -> str | None:
        if v is not None and not URL_RE.match(v):
            raise ValueError("Geçerli bir website URL'si giriniz (http:// veya https:// ile başlamalı)")
        return v

    @field_validator("social_media")
    @classmethod
    def _validate_social_media(cls, v: dict | None) -> dict | None:
        if v is None:
            return None
        cleaned = {}
        for network, handle in v.items():
            if network not in SOCIAL_NETWORKS:
                raise ValueError(f"Desteklenmeyen sosyal medya: {network}")
            handle = _blank_to_none(handle)
            if handle is not None and len(handle) > 100:
                raise ValueError(f"{network} hesabı en fazla 100 karakter olabilir")
            cleaned[network] = handle
        return cleaned if any(cleaned.values()) else None

    def to_columns(self) -> dict:
        """Column values for the fields the client actually sent."""
        data = self.model_dump(exclude_unset=True, exclude={"images", "working_hours"})
        if "working_hours" in self.model_fields_set:
            data["working_hours"] = dump_working_hours(self.working_hours)
        if data.get("business_type") is not None:
            data["business_type"] = self.business_type.value
        if data.get("payment_methods") is not None:
            data["payment_methods"] = [method.value for method in self.payment_methods]
        for key in NON_NULLABLE_FIELDS:
            if key in data and data[key] is None:
                del data[key]
        return data


class CreateBusinessRequest(BusinessFields):
    """Listing submission."""

    name_tr: str = Field(..., min_length=1, max_length=100)
    category_id: uuid.UUID
    location_id: uuid.UUID

    @field_validator("name_tr", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class UpdateBusinessRequest(BusinessFields):
    """Listing update. Only the fields sent are changed."""

    name_tr: str | None = Field(None, min_length=1, max_length=100)
    category_id: uuid.UUID | None = None
    location_id: uuid.UUID | None = None

    @field_validator("name_tr", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class ReviewResponse(BaseModel):
    id: uuid.UUID
    business_id: uuid.UUID
    rating: int
    comment: str | None = None
    user_name: str | None = None
    created_at: datetime | None = None


class CreateReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(None, max_length=1000)


@router.get("", response_model=list[BusinessResponse])
async def list_businesses(
    q: str | None = Query(None, max_length=100, description="Search in names and descriptions"),
    category_id: uuid.UUID | None = None,
    location_id: uuid.UUID | None = None,
    accepts_online_orders: bool | None = None,
    delivery_available: bool | None = None,
    sort: SortOption = "newest",
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    viewer_id: uuid.UUID | None = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """
    List active businesses.

    Contact details are only included for admins and for the viewer's own
    business.
    """
    filters = {
        "search": q,
        "category_id": category_id,
        "location_id": location_id,
        "accepts_online_orders": accepts_online_orders,
        "delivery_available": delivery_available,
        "sort": sort,
        "limit": limit,
        "offset": offset,
    }
    # Check cache
    cache_key = get_cache_key_business_list(viewer_id, filters)
    cached = await cache_service.get(cache_key)
    if cached is not None:
        return [load_view(item) for item in cached]

    try:
        businesses = await BusinessService(db).list_active(viewer_id=viewer_id, **filters)
    except SQLAlchemyError as e:
        raise backend_unavailable(e, "Business listing")

    # Save to cache (default TTL)
    await cache_service.set(cache_key, [item.model_dump(mode="json") for item in businesses])
    return businesses


@router.get("/featured", response_model=list[BusinessResponse])
async def list_featured_businesses(
    viewer_id: uuid.UUID | None = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """Featured businesses for the home page."""
    # Check cache
    cache_key = get_cache_key_featured(viewer_id)
    cached = await cache_service.get(cache_key)
    if cached is not None:
        return [load_view(item) for item in cached]

    try:
        businesses = await FeaturedService(db).list_public(viewer_id)
    except SQLAlchemyError as e:
        raise backend_unavailable(e, "Featured listing")

    # Save to cache (default TTL)
    await cache_service.set(cache_key, [item.model_dump(mode="json") for item in businesses])
    return businesses


@router.get("/{business_id}", response_model=BusinessResponse)
async def get_business(
    business_id: uuid.UUID,
    viewer_id: uuid.UUID | None = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """Business details. Pending and inactive listings are only shown to their owner and admins."""
    # Check cache
    cache_key = get_cache_key_business_detail(business_id, viewer_id)
    cached = await cache_service.get(cache_key)
    if cached is not None:
        return load_view(cached)

    try:
        business = await BusinessService(db).get_detail(business_id, viewer_id)
    except SQLAlchemyError as e:
        raise backend_unavailable(e, f"Business {business_id} detail")

    if business is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="İşletme bulunamadı",
        )

    # Save to cache (default TTL)
    await cache_service.set(cache_key, business.model_dump(mode="json"))
    return business


@router.post("", response_model=FullBusinessView, status_code=status.HTTP_201_CREATED)
async def create_business(
    request: CreateBusinessRequest,
    viewer_id: uuid.UUID = Depends(require_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Submit a new listing.

    The listing is created as pending and becomes public once an admin
    approves it.
    """
    data = request.to_columns()

    try:
        business = await BusinessService(db).create(viewer_id, data, image_urls=request.images)
    except OwnershipConflictError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Hesabınıza zaten bir işletme kayıtlı",
        )

    await cache_service.invalidate_businesses()
    return to_full_view(business)


@router.patch("/{business_id}", response_model=FullBusinessView)
async def update_business(
    business_id: uuid.UUID,
    request: UpdateBusinessRequest,
    viewer_id: uuid.UUID = Depends(require_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """Update a listing. Only its owner or an admin may do this."""
    access = await resolve_viewer(db, viewer_id)
    if not access.is_privileged_for(business_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Bu işletmeyi düzenleme yetkiniz yok",
        )

    data = request.to_columns()

    business = await BusinessService(db).update(business_id, data, image_urls=request.images)
    if business is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="İşletme bulunamadı",
        )

    await cache_service.invalidate_businesses()
    return to_full_view(business)


@router.get("/{business_id}/reviews", response_model=list[ReviewResponse])
async def list_reviews(
    business_id: uuid.UUID,
    viewer_id: uuid.UUID | None = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """Reviews of a business the viewer can see."""
    try:
        business = await BusinessService(db).get_detail(business_id, viewer_id)
        if business is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="İşletme bulunamadı")
        rows = await ReviewService(db).list_for_business(business_id)
    except SQLAlchemyError as e:
        raise backend_unavailable(e, f"Reviews of {business_id}")

    return [
        ReviewResponse(
            id=review.id,
            business_id=review.business_id,
            rating=review.rating,
            comment=review.comment,
            user_name=user_name,
            created_at=review.created_at,
        )
        for review, user_name in rows
    ]


@router.post("/{business_id}/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    business_id: uuid.UUID,
    request: CreateReviewRequest,
    viewer_id: uuid.UUID = Depends(require_viewer_id),
    db: AsyncSession = Depends(get_db),
):
    """Review an active business."""
    business = await BusinessService(db).get_by_id(business_id)
    if business is None or business.status != BusinessStatus.ACTIVE.value:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="İşletme bulunamadı")

    review = await ReviewService(db).create(
        business_id=business_id,
        user_id=viewer_id,
        rating=request.rating,
        comment=_blank_to_none(request.comment),
    )
    return ReviewResponse(
        id=review.id,
        business_id=review.business_id,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
    )
