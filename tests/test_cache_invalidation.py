"""Business writes and role changes drop cached listings."""
import fnmatch

import pytest

import grant_admin
from bazaar.config import settings
from bazaar.core.cache import cache_service
from bazaar.models.user_role import AppRole
from tests.conftest import GOLD_PHONE, auth_headers


class InMemoryRedis:
    """The subset of the redis.asyncio client the cache uses."""

    def __init__(self):
        self.store: dict[str, str] = {}

    async def ping(self):
        return True

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value
        return True

    async def delete(self, *keys):
        return sum(1 for key in keys if self.store.pop(key, None) is not None)

    async def scan_iter(self, match="*"):
        for key in list(self.store):
            if fnmatch.fnmatchcase(key, match):
                yield key

    async def close(self):
        pass

    def business_keys(self) -> list[str]:
        return [key for key in self.store if key.startswith(("businesses:list:", "businesses:detail:"))]


@pytest.fixture
def redis_store(monkeypatch):
    store = InMemoryRedis()
    monkeypatch.setattr(settings, "cache_enabled", True)
    monkeypatch.setattr(cache_service, "_redis", store)
    return store


@pytest.fixture
async def admin_headers(make_user):
    admin_id = await make_user(role=AppRole.ADMIN)
    return auth_headers(admin_id)


async def fill_cache(client, business_id, headers):
    await client.get("/api/v1/businesses", headers=headers)
    await client.get(f"/api/v1/businesses/{business_id}", headers=headers)


async def test_role_change_drops_cached_redactions(client, redis_store, admin_headers, make_business, make_user):
    business = await make_business()
    viewer_id = await make_user()
    viewer = auth_headers(viewer_id)

    before = await client.get(f"/api/v1/businesses/{business.id}", headers=viewer)
    await client.get("/api/v1/businesses", headers=viewer)
    assert before.json()["phone"] is None
    assert len(redis_store.business_keys()) == 2

    changed = await client.put(f"/api/v1/admin/users/{viewer_id}/role", json={"role": "admin"}, headers=admin_headers)
    assert changed.status_code == 200
    assert redis_store.business_keys() == []

    after = await client.get(f"/api/v1/businesses/{business.id}", headers=viewer)
    assert after.json()["phone"] == GOLD_PHONE


async def test_status_change_drops_cached_listings(client, redis_store, admin_headers, make_business):
    business = await make_business()
    await fill_cache(client, business.id, {})
    assert redis_store.business_keys()

    response = await client.post(
        f"/api/v1/admin/businesses/{business.id}/status",
        json={"status": "inactive"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert redis_store.business_keys() == []

    listing = await client.get("/api/v1/businesses")
    assert listing.json() == []


async def test_business_update_drops_cached_listings(client, redis_store, make_business, make_user):
    business = await make_business()
    owner_id = await make_user(business_id=business.id)
    await fill_cache(client, business.id, {})
    assert redis_store.business_keys()

    response = await client.patch(
        f"/api/v1/businesses/{business.id}",
        json={"name_en": "Golden Jeweller"},
        headers=auth_headers(owner_id),
    )
    assert response.status_code == 200
    assert redis_store.business_keys() == []

    detail = await client.get(f"/api/v1/businesses/{business.id}")
    assert detail.json()["name_en"] == "Golden Jeweller"


async def test_grant_admin_script_drops_cached_listings(client, redis_store, session_factory, make_business, make_user, monkeypatch):
    business = await make_business()
    user_id = await make_user()
    await fill_cache(client, business.id, auth_headers(user_id))
    assert redis_store.business_keys()

    monkeypatch.setattr(grant_admin, "AsyncSessionLocal", session_factory)
    await grant_admin.grant_admin(user_id, AppRole.ADMIN)

    assert redis_store.business_keys() == []
    assert cache_service._redis is None
