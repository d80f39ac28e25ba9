"""Role and ownership lookups, including failure handling."""
import asyncio
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from bazaar.core.visibility import ANONYMOUS
from bazaar.models.user_role import AppRole
from bazaar.services.business_service import resolve_viewer
from bazaar.services.profile_service import ProfileService
from bazaar.services.role_service import RoleService


def failing_session(error: Exception) -> AsyncMock:
    session = AsyncMock()
    session.begin_nested = MagicMock()
    session.execute.side_effect = error
    return session


async def test_admin_lookup(db, make_user):
    admin_id = await make_user(role=AppRole.ADMIN)
    moderator_id = await make_user(role=AppRole.MODERATOR)
    user_id = await make_user()

    service = RoleService(db)
    assert await service.is_admin(admin_id) is True
    assert await service.is_admin(moderator_id) is False
    assert await service.is_admin(user_id) is False
    assert await service.is_admin(uuid.uuid4()) is False


async def test_anonymous_is_never_admin_and_causes_no_lookup():
    session = AsyncMock()

    assert await RoleService(session).is_admin(None) is False
    assert await ProfileService(session).owned_business_id(None) is None
    session.execute.assert_not_called()


@pytest.mark.parametrize("error", [
    OperationalError("SELECT 1", {}, Exception("connection reset")),
    ConnectionResetError("network unreachable"),
    asyncio.TimeoutError(),
])
async def test_failed_lookups_fail_closed(error):
    session = failing_session(error)
    user_id = uuid.uuid4()

    assert await RoleService(session).is_admin(user_id) is False
    assert await ProfileService(session).owned_business_id(user_id) is None


async def test_owned_business_lookup(db, make_business, make_user):
    business = await make_business()
    owner_id = await make_user(business_id=business.id)
    user_id = await make_user()

    service = ProfileService(db)
    assert await service.owned_business_id(owner_id) == business.id
    assert await service.owned_business_id(user_id) is None
    assert await service.owned_business_id(uuid.uuid4()) is None


async def test_effective_role_precedence(db, make_user):
    user_id = await make_user(role=AppRole.MODERATOR)
    service = RoleService(db)

    assert await service.get_role(user_id) == "moderator"

    await service.set_role(user_id, AppRole.ADMIN)
    assert await service.get_role(user_id) == "admin"
    assert await service.is_admin(user_id) is True

    await service.set_role(user_id, AppRole.USER)
    assert await service.get_role(user_id) == "user"
    assert await service.is_admin(user_id) is False


async def test_resolve_viewer(db, make_business, make_user):
    business = await make_business()
    owner_id = await make_user(business_id=business.id)
    admin_id = await make_user(role=AppRole.ADMIN)

    assert await resolve_viewer(db, None) == ANONYMOUS

    owner = await resolve_viewer(db, owner_id)
    assert owner.is_admin is False
    assert owner.owned_business_id == business.id

    admin = await resolve_viewer(db, admin_id)
    assert admin.is_admin is True
    assert admin.owned_business_id is None


async def test_resolve_viewer_fails_closed():
    session = failing_session(OperationalError("SELECT 1", {}, Exception("timeout")))

    access = await resolve_viewer(session, uuid.uuid4())

    assert access == ANONYMOUS
