"""Public business endpoints."""
import uuid
from datetime import timedelta

from sqlalchemy.exc import OperationalError

from bazaar.models.business import BusinessStatus
from bazaar.models.user_role import AppRole
from bazaar.services.business_service import BusinessService
from tests.conftest import GOLD_PHONE, auth_headers, make_token


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_anonymous_listing_hides_contacts(client, make_business):
    await make_business(name_tr="Altın Kuyumcu")
    await make_business(status=BusinessStatus.PENDING.value)

    response = await client.get("/api/v1/businesses")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["name_tr"] == "Altın Kuyumcu"
    assert data[0]["phone"] is None
    assert data[0]["social_media"] is None
    assert data[0]["contact_visible"] is False
    assert data[0]["working_hours"] == {"kind": "simple", "text": "Pazartesi-Cumartesi 09:00-19:00"}


async def test_owner_listing_shows_own_contacts(client, make_business, make_user):
    own = await make_business()
    await make_business()
    owner_id = await make_user(business_id=own.id)

    response = await client.get("/api/v1/businesses", headers=auth_headers(owner_id))

    assert response.status_code == 200
    phones = {item["id"]: item["phone"] for item in response.json()}
    assert phones.pop(str(own.id)) == GOLD_PHONE
    assert list(phones.values()) == [None]


async def test_invalid_token_is_rejected(client):
    response = await client.get("/api/v1/businesses", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


async def test_expired_token_is_rejected(client):
    token = make_token(uuid.uuid4(), expires_in=timedelta(minutes=-5))

    response = await client.get("/api/v1/businesses", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_invalid_sort_is_rejected(client):
    response = await client.get("/api/v1/businesses", params={"sort": "popularity"})
    assert response.status_code == 422


async def test_listing_backend_failure_returns_503(client, monkeypatch):
    async def broken_list_active(self, *args, **kwargs):
        raise OperationalError("SELECT businesses", {}, Exception("connection refused"))

    monkeypatch.setattr(BusinessService, "list_active", broken_list_active)

    response = await client.get("/api/v1/businesses")

    assert response.status_code == 503


async def test_detail(client, make_business, make_user):
    business = await make_business()
    pending = await make_business(status=BusinessStatus.PENDING.value)
    owner_id = await make_user(business_id=pending.id)
    admin_id = await make_user(role=AppRole.ADMIN)

    public = await client.get(f"/api/v1/businesses/{business.id}")
    assert public.status_code == 200
    assert public.json()["phone"] is None

    as_admin = await client.get(f"/api/v1/businesses/{business.id}", headers=auth_headers(admin_id))
    assert as_admin.json()["phone"] == GOLD_PHONE

    hidden = await client.get(f"/api/v1/businesses/{pending.id}")
    assert hidden.status_code == 404

    as_owner = await client.get(f"/api/v1/businesses/{pending.id}", headers=auth_headers(owner_id))
    assert as_owner.status_code == 200
    assert as_owner.json()["status"] == "pending"
    assert as_owner.json()["phone"] == GOLD_PHONE


async def test_submit_business(client, category, location):
    user_id = uuid.uuid4()
    payload = {
        "name_tr": "  Baharatçı Hasan ",
        "category_id": str(category.id),
        "location_id": str(location.id),
        "phone": "+90 212 555 1234",
        "email": "hasan@example.com",
        "website": "",
        "working_hours": {"kind": "detailed", "days": {"monday": {"open": "09:00", "close": "18:00"}}},
        "social_media": {"instagram": "@baharatci", "facebook": ""},
        "payment_methods": ["cash", "credit_card"],
        "images": ["https://cdn.example.com/1.jpg"],
    }

    response = await client.post("/api/v1/businesses", json=payload, headers=auth_headers(user_id))

    assert response.status_code == 201
    data = response.json()
    assert data["name_tr"] == "Baharatçı Hasan"
    assert data["status"] == "pending"
    assert data["website"] is None
    assert data["social_media"] == {"instagram": "@baharatci", "facebook": None}
    assert data["working_hours"]["days"]["monday"]["open"] == "09:00"
    assert data["images"][0]["image_url"] == "https://cdn.example.com/1.jpg"

    listing = await client.get("/api/v1/businesses")
    assert listing.json() == []

    profile = await client.get("/api/v1/profile", headers=auth_headers(user_id))
    assert profile.json()["business_id"] == data["id"]
    assert profile.json()["business"]["phone"] == "+90 212 555 1234"

    second = await client.post("/api/v1/businesses", json=payload, headers=auth_headers(user_id))
    assert second.status_code == 409


async def test_submit_requires_login(client, category, location):
    payload = {"name_tr": "Dükkan", "category_id": str(category.id), "location_id": str(location.id)}

    response = await client.post("/api/v1/businesses", json=payload)

    assert response.status_code == 401


async def test_submit_validates_contacts(client, category, location):
    payload = {
        "name_tr": "Dükkan",
        "category_id": str(category.id),
        "location_id": str(location.id),
        "phone": "12",
        "website": "example",
    }

    response = await client.post("/api/v1/businesses", json=payload, headers=auth_headers(uuid.uuid4()))

    assert response.status_code == 422
    fields = {error["loc"][-1] for error in response.json()["detail"]}
    assert {"phone", "website"} <= fields


async def test_update_only_by_owner_or_admin(client, make_business, make_user):
    business = await make_business()
    owner_id = await make_user(business_id=business.id)
    stranger_id = await make_user()

    forbidden = await client.patch(
        f"/api/v1/businesses/{business.id}",
        json={"name_en": "Hacked"},
        headers=auth_headers(stranger_id),
    )
    assert forbidden.status_code == 403

    response = await client.patch(
        f"/api/v1/businesses/{business.id}",
        json={"name_en": "Golden Jeweller", "name_tr": None, "phone": "+90 212 999 8877"},
        headers=auth_headers(owner_id),
    )
    assert response.status_code == 200
    assert response.json()["name_en"] == "Golden Jeweller"
    assert response.json()["name_tr"] == business.name_tr
    assert response.json()["phone"] == "+90 212 999 8877"


async def test_reviews(client, make_business, make_user):
    business = await make_business()
    reviewer_id = await make_user(full_name="Ayşe")

    created = await client.post(
        f"/api/v1/businesses/{business.id}/reviews",
        json={"rating": 5, "comment": "Harika"},
        headers=auth_headers(reviewer_id),
    )
    assert created.status_code == 201

    invalid = await client.post(
        f"/api/v1/businesses/{business.id}/reviews",
        json={"rating": 6},
        headers=auth_headers(reviewer_id),
    )
    assert invalid.status_code == 422

    response = await client.get(f"/api/v1/businesses/{business.id}/reviews")
    assert response.status_code == 200
    assert response.json()[0]["user_name"] == "Ayşe"
    assert response.json()[0]["rating"] == 5


async def test_favorites(client, make_business, make_user):
    business = await make_business()
    pending = await make_business(status=BusinessStatus.PENDING.value)
    user_id = await make_user()
    headers = auth_headers(user_id)

    added = await client.post("/api/v1/favorites", json={"business_id": str(business.id)}, headers=headers)
    assert added.status_code == 201

    duplicate = await client.post("/api/v1/favorites", json={"business_id": str(business.id)}, headers=headers)
    assert duplicate.status_code == 409

    not_listed = await client.post("/api/v1/favorites", json={"business_id": str(pending.id)}, headers=headers)
    assert not_listed.status_code == 404

    favorites = await client.get("/api/v1/favorites", headers=headers)
    assert [item["id"] for item in favorites.json()] == [str(business.id)]
    assert favorites.json()[0]["phone"] is None

    removed = await client.delete(f"/api/v1/favorites/{business.id}", headers=headers)
    assert removed.status_code == 204


async def test_categories_and_locations_count_active_businesses(client, make_business, category, location):
    await make_business()
    await make_business(status=BusinessStatus.PENDING.value)

    categories = await client.get("/api/v1/categories")
    locations = await client.get("/api/v1/locations")

    assert categories.json()[0]["name_en"] == "Jeweller"
    assert categories.json()[0]["business_count"] == 1
    assert locations.json()[0]["business_count"] == 1
