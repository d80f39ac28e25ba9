"""Shared fixtures: in-memory database, API client and data factories."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import uuid
from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import bazaar.models  # noqa: F401
from bazaar.config import settings
from bazaar.database import Base, get_db
from bazaar.main import app
from bazaar.models.business import Business, BusinessStatus
from bazaar.models.category import Category
from bazaar.models.location import Location
from bazaar.models.profile import Profile
from bazaar.models.user_role import AppRole, UserRole

settings.cache_enabled = False

GOLD_PHONE = "+90 212 555 0000"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def make_token(user_id: uuid.UUID, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Access token as the auth provider would issue it."""
    payload = {"sub": str(user_id), "exp": datetime.utcnow() + expires_in}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth_headers(user_id: uuid.UUID) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
async def category(db):
    category = Category(name_tr="Kuyumcu", name_en="Jeweller", icon="gem")
    db.add(category)
    await db.commit()
    return category


@pytest.fixture
async def location(db):
    location = Location(name_tr="Kapalıçarşı", name_en="Grand Bazaar")
    db.add(location)
    await db.commit()
    return location


@pytest.fixture
def make_business(db, category, location):
    """Factory for businesses; later calls get later creation times."""
    counter = {"n": 0}

    async def _make(**overrides) -> Business:
        counter["n"] += 1
        values = {
            "name_tr": f"İşletme {counter['n']}",
            "name_en": f"Business {counter['n']}",
            "category_id": category.id,
            "location_id": location.id,
            "status": BusinessStatus.ACTIVE.value,
            "phone": GOLD_PHONE,
            "email": f"info{counter['n']}@example.com",
            "whatsapp": "+90 532 555 0000",
            "website": "https://example.com",
            "address": "Kalpakçılar Cd. No:1",
            "shop_number": "A-12",
            "owner_name": "Mehmet Usta",
            "social_media": {"instagram": "@kuyumcu"},
            "working_hours": {"general": "Pazartesi-Cumartesi 09:00-19:00"},
            "created_at": datetime(2024, 1, 1) + timedelta(days=counter["n"]),
        }
        values.update(overrides)
        business = Business(**values)
        db.add(business)
        await db.commit()
        db.expunge(business)
        return business

    return _make


@pytest.fixture
def make_user(db):
    """Factory for users: a profile, an optional owned business and an optional role."""

    async def _make(business_id: uuid.UUID | None = None, role: AppRole | None = None, full_name: str | None = None) -> uuid.UUID:
        user_id = uuid.uuid4()
        db.add(Profile(id=user_id, business_id=business_id, full_name=full_name))
        if role is not None and role != AppRole.USER:
            db.add(UserRole(user_id=user_id, role=role.value))
        await db.commit()
        return user_id

    return _make
