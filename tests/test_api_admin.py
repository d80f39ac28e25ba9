"""Admin endpoints: moderation, taxonomy, featured listings and users."""
import uuid
from datetime import datetime, timedelta

import pytest

from bazaar.models.business import BusinessStatus
from bazaar.models.user_role import AppRole
from bazaar.services.featured_service import FeaturedService
from tests.conftest import GOLD_PHONE, auth_headers


@pytest.fixture
async def admin_headers(make_user):
    admin_id = await make_user(role=AppRole.ADMIN, full_name="Yönetici")
    return auth_headers(admin_id)


@pytest.mark.parametrize("path", [
    "/api/v1/admin/businesses/pending",
    "/api/v1/admin/stats",
    "/api/v1/admin/users",
    "/api/v1/admin/audit-logs",
])
async def test_admin_routes_require_admin(client, make_user, path):
    anonymous = await client.get(path)
    assert anonymous.status_code == 401

    moderator_id = await make_user(role=AppRole.MODERATOR)
    moderator = await client.get(path, headers=auth_headers(moderator_id))
    assert moderator.status_code == 403


async def test_approval_flow(client, admin_headers, make_business):
    pending = await make_business(status=BusinessStatus.PENDING.value)

    queue = await client.get("/api/v1/admin/businesses/pending", headers=admin_headers)
    assert [item["id"] for item in queue.json()] == [str(pending.id)]
    assert queue.json()[0]["phone"] == GOLD_PHONE

    approved = await client.post(
        f"/api/v1/admin/businesses/{pending.id}/status",
        json={"status": "active"},
        headers=admin_headers,
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "active"

    listing = await client.get("/api/v1/businesses")
    assert [item["id"] for item in listing.json()] == [str(pending.id)]

    audit = await client.get("/api/v1/admin/audit-logs", params={"search": "business"}, headers=admin_headers)
    assert audit.json()[0]["action"] == "business_approved"
    assert audit.json()[0]["new_values"] == {"status": "active"}


async def test_status_cannot_go_back_to_pending(client, admin_headers, make_business):
    business = await make_business()

    response = await client.post(
        f"/api/v1/admin/businesses/{business.id}/status",
        json={"status": "pending"},
        headers=admin_headers,
    )

    assert response.status_code == 422


async def test_businesses_by_status(client, admin_headers, make_business):
    await make_business()
    inactive = await make_business(status=BusinessStatus.INACTIVE.value)

    response = await client.get("/api/v1/admin/businesses", params={"status": "inactive"}, headers=admin_headers)

    assert [item["id"] for item in response.json()] == [str(inactive.id)]


async def test_category_lifecycle(client, admin_headers):
    created = await client.post(
        "/api/v1/admin/categories",
        json={"name_tr": "Halıcı", "name_en": "Carpet dealer", "icon": "rug"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    category_id = created.json()["id"]

    updated = await client.patch(
        f"/api/v1/admin/categories/{category_id}",
        json={"name_en": "Carpets", "name_tr": None},
        headers=admin_headers,
    )
    assert updated.json()["name_en"] == "Carpets"
    assert updated.json()["name_tr"] == "Halıcı"

    deleted = await client.delete(f"/api/v1/admin/categories/{category_id}", headers=admin_headers)
    assert deleted.status_code == 204

    missing = await client.delete(f"/api/v1/admin/categories/{category_id}", headers=admin_headers)
    assert missing.status_code == 404


async def test_taxonomy_in_use_cannot_be_deleted(client, admin_headers, make_business, category, location):
    await make_business(status=BusinessStatus.PENDING.value)

    category_response = await client.delete(f"/api/v1/admin/categories/{category.id}", headers=admin_headers)
    location_response = await client.delete(f"/api/v1/admin/locations/{location.id}", headers=admin_headers)

    assert category_response.status_code == 409
    assert "1 işletme" in category_response.json()["detail"]
    assert location_response.status_code == 409


async def test_featured_management(client, admin_headers, make_business):
    first = await make_business()
    second = await make_business()
    pending = await make_business(status=BusinessStatus.PENDING.value)

    added = await client.post("/api/v1/admin/featured", json={"business_id": str(first.id)}, headers=admin_headers)
    assert added.status_code == 201
    assert added.json()["sort_order"] == 0

    second_added = await client.post(
        "/api/v1/admin/featured", json={"business_id": str(second.id)}, headers=admin_headers
    )
    assert second_added.json()["sort_order"] == 1

    duplicate = await client.post("/api/v1/admin/featured", json={"business_id": str(first.id)}, headers=admin_headers)
    assert duplicate.status_code == 409

    not_active = await client.post(
        "/api/v1/admin/featured", json={"business_id": str(pending.id)}, headers=admin_headers
    )
    assert not_active.status_code == 404

    public = await client.get("/api/v1/businesses/featured")
    assert [item["id"] for item in public.json()] == [str(first.id), str(second.id)]
    assert all(item["phone"] is None for item in public.json())

    paused = await client.patch(
        f"/api/v1/admin/featured/{added.json()['id']}",
        json={"is_active": False},
        headers=admin_headers,
    )
    assert paused.json()["is_active"] is False

    public = await client.get("/api/v1/businesses/featured")
    assert [item["id"] for item in public.json()] == [str(second.id)]

    removed = await client.delete(f"/api/v1/admin/featured/{second_added.json()['id']}", headers=admin_headers)
    assert removed.status_code == 204
    assert (await client.get("/api/v1/businesses/featured")).json() == []


async def test_expire_past_due(db, make_business):
    business = await make_business()
    service = FeaturedService(db)
    featured = await service.add(business.id, featured_until=datetime(2024, 1, 10))

    assert await service.expire_past_due(now=datetime(2024, 1, 5)) == 0
    assert len(await service.list_public(None, now=datetime(2024, 1, 5))) == 1

    assert await service.expire_past_due(now=datetime(2024, 1, 11)) == 1
    refreshed = await service.get_by_id(featured.id, refresh=True)
    assert refreshed.is_active is False
    assert await service.list_public(None, now=datetime(2024, 1, 11)) == []


async def test_role_change_grants_contact_access(client, admin_headers, make_business, make_user):
    business = await make_business()
    user_id = await make_user(full_name="Zeynep")

    before = await client.get(f"/api/v1/businesses/{business.id}", headers=auth_headers(user_id))
    assert before.json()["phone"] is None

    changed = await client.put(f"/api/v1/admin/users/{user_id}/role", json={"role": "admin"}, headers=admin_headers)
    assert changed.status_code == 200
    assert changed.json()["role"] == "admin"

    after = await client.get(f"/api/v1/businesses/{business.id}", headers=auth_headers(user_id))
    assert after.json()["phone"] == GOLD_PHONE

    users = await client.get("/api/v1/admin/users", headers=admin_headers)
    roles = {item["full_name"]: item["role"] for item in users.json()}
    assert roles == {"Yönetici": "admin", "Zeynep": "admin"}

    unknown = await client.put(f"/api/v1/admin/users/{uuid.uuid4()}/role", json={"role": "admin"}, headers=admin_headers)
    assert unknown.status_code == 404


async def test_review_moderation(client, admin_headers, make_business, make_user):
    business = await make_business(name_tr="Altın Kuyumcu")
    reviewer_id = await make_user(full_name="Ali")
    for rating in (1, 5):
        await client.post(
            f"/api/v1/businesses/{business.id}/reviews",
            json={"rating": rating},
            headers=auth_headers(reviewer_id),
        )

    low = await client.get("/api/v1/admin/reviews", params={"rating": 1}, headers=admin_headers)
    assert len(low.json()) == 1
    assert low.json()[0]["business_name"] == "Altın Kuyumcu"
    assert low.json()[0]["user_name"] == "Ali"

    deleted = await client.delete(f"/api/v1/admin/reviews/{low.json()[0]['id']}", headers=admin_headers)
    assert deleted.status_code == 204

    remaining = await client.get("/api/v1/admin/reviews", headers=admin_headers)
    assert [item["rating"] for item in remaining.json()] == [5]


async def test_pages(client, admin_headers):
    created = await client.post(
        "/api/v1/admin/pages",
        json={"slug": "hakkimizda", "title_tr": "Hakkımızda", "content_tr": "Kapalıçarşı rehberi", "is_active": False},
        headers=admin_headers,
    )
    assert created.status_code == 201
    page_id = created.json()["id"]

    assert (await client.get("/api/v1/pages/hakkimizda")).status_code == 404

    await client.patch(f"/api/v1/admin/pages/{page_id}", json={"is_active": True}, headers=admin_headers)
    published = await client.get("/api/v1/pages/hakkimizda")
    assert published.status_code == 200
    assert published.json()["title_tr"] == "Hakkımızda"

    duplicate = await client.post(
        "/api/v1/admin/pages",
        json={"slug": "hakkimizda", "title_tr": "Kopya"},
        headers=admin_headers,
    )
    assert duplicate.status_code == 409

    bad_slug = await client.post("/api/v1/admin/pages", json={"slug": "Bad Slug", "title_tr": "X"}, headers=admin_headers)
    assert bad_slug.status_code == 422


async def test_site_settings(client, admin_headers):
    saved = await client.put(
        "/api/v1/admin/site-settings/contact_info",
        json={"email": "info@bazaar.example", "phone": "+90 212 000 0000"},
        headers=admin_headers,
    )
    assert saved.status_code == 200

    unknown = await client.put("/api/v1/admin/site-settings/theme", json={"dark": "yes"}, headers=admin_headers)
    assert unknown.status_code == 404

    public = await client.get("/api/v1/site-settings")
    assert public.json() == {"contact_info": {"email": "info@bazaar.example", "phone": "+90 212 000 0000"}}


async def test_stats(client, admin_headers, make_business, make_user):
    await make_business()
    await make_business(status=BusinessStatus.PENDING.value)
    await make_user()

    response = await client.get("/api/v1/admin/stats", headers=admin_headers)

    assert response.json() == {
        "total_users": 2,
        "total_businesses": 2,
        "pending_businesses": 1,
        "active_businesses": 1,
        "inactive_businesses": 0,
        "total_categories": 1,
        "total_locations": 1,
        "total_reviews": 0,
    }
