"""User favorite model."""
import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from bazaar.database import Base


class UserFavorite(Base):
    """Business bookmarked by a user."""

    __tablename__ = "user_favorites"
    __table_args__ = (UniqueConstraint("user_id", "business_id", name="uq_user_favorites_user_business"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    business_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("businesses.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
