"""Static page content model."""
import uuid
from datetime import datetime

from sqlalchemy import String, Text, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from bazaar.database import Base


class PageContent(Base):
    """CMS page (about, blog post, terms, ...)."""

    __tablename__ = "page_contents"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    slug: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    title_tr: Mapped[str] = mapped_column(String, nullable=False)
    title_en: Mapped[str | None] = mapped_column(String, nullable=True)
    content_tr: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_description_tr: Mapped[str | None] = mapped_column(String, nullable=True)
    meta_description_en: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
