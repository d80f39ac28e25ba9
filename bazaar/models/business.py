"""Business model."""
import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import String, Text, ForeignKey, Numeric, Integer, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bazaar.database import Base

if TYPE_CHECKING:
    from bazaar.models.business_image import BusinessImage
    from bazaar.models.category import Category
    from bazaar.models.location import Location


class BusinessStatus(str, enum.Enum):
    """Listing lifecycle status."""

    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


class BusinessType(str, enum.Enum):
    RETAIL = "retail"
    WHOLESALE = "wholesale"
    BOTH = "both"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    CRYPTO = "crypto"


class Business(Base):
    """A registered bazaar business."""

    __tablename__ = "businesses"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name_tr: Mapped[str] = mapped_column(String(100), nullable=False)
    name_en: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description_tr: Mapped[str | None] = mapped_column(Text, nullable=True)
    description_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("categories.id"), nullable=True, index=True)
    location_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("locations.id"), nullable=True, index=True)
    logo_url: Mapped[str | None] = mapped_column(String, nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    working_hours: Mapped[dict | None] = mapped_column(JSON, nullable=True)  # {"general": ...} | {"detailed": {...}}
    accepts_online_orders: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    delivery_available: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    business_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    payment_methods: Mapped[list | None] = mapped_column(JSON, nullable=True)
    languages: Mapped[list | None] = mapped_column(JSON, nullable=True)
    established_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    min_order_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=BusinessStatus.PENDING.value, nullable=False, index=True)

    # Contact details, visible only to the owner and admins
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    whatsapp: Mapped[str | None] = mapped_column(String(20), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    shop_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    owner_name: Mapped[str | None] = mapped_column(String, nullable=True)
    social_media: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="businesses")
    location: Mapped["Location"] = relationship("Location", back_populates="businesses")
    images: Mapped[list["BusinessImage"]] = relationship(
        "BusinessImage",
        back_populates="business",
        order_by="BusinessImage.sort_order",
        cascade="all, delete-orphan",
    )
