"""
Tests for the admin dashboard: moderation, user management, categories and site content.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company
from app.models.listing import ListingStatus
from app.models.user import User
from app.services.forms import build_listing_payload


@pytest.mark.asyncio
async def test_admin_routes_reject_non_admins(async_client: AsyncClient, employer_client: AsyncClient):
    for path in ("/api/admin/jobs", "/api/admin/users", "/api/admin/statistics", "/api/admin/featured-sections"):
        assert (await async_client.get(path)).status_code == 403
        assert (await employer_client.get(path)).status_code == 403


# ============================================================
# LISTING MODERATION
# ============================================================

@pytest.mark.asyncio
async def test_admin_sees_every_listing(admin_client: AsyncClient, make_listing):
    pending = await make_listing(status=ListingStatus.PENDING)
    inactive = await make_listing(is_active=False)

    response = await admin_client.get("/api/admin/jobs")
    assert {job["id"] for job in response.json()} == {pending.id, inactive.id}

    response = await admin_client.get("/api/admin/jobs", params={"status": "pending"})
    assert [job["id"] for job in response.json()] == [pending.id]


@pytest.mark.asyncio
async def test_admin_listing_shows_current_company_name(
    admin_client: AsyncClient, company: Company, make_listing, db: AsyncSession
):
    await make_listing(company_id=company.id, company_name="Old Name")
    company.name = "Kigali Tech Group"
    await db.commit()

    response = await admin_client.get("/api/admin/jobs")

    assert response.json()[0]["companyName"] == "Kigali Tech Group"


@pytest.mark.asyncio
async def test_deactivating_rejects_and_hides(admin_client: AsyncClient, async_client: AsyncClient, make_listing):
    listing = await make_listing()

    response = await admin_client.patch(f"/api/admin/jobs/{listing.id}", json={"isActive": False})

    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["isActive"] is False
    assert (await async_client.get("/api/jobs")).json() == []

    response = await admin_client.patch(
        f"/api/admin/jobs/{listing.id}", json={"isActive": True, "isFeatured": True, "adminNotes": "Checked"}
    )
    data = response.json()
    assert data["status"] == "approved"
    assert data["isFeatured"] is True
    assert data["adminNotes"] == "Checked"
    assert [job["id"] for job in (await async_client.get("/api/jobs")).json()] == [listing.id]


@pytest.mark.asyncio
async def test_moderate_missing_listing(admin_client: AsyncClient):
    response = await admin_client.patch("/api/admin/jobs/404", json={"isActive": True})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_is_soft(admin_client: AsyncClient, async_client: AsyncClient, make_listing, db: AsyncSession):
    listing = await make_listing(title="Warehouse Supervisor")

    response = await admin_client.delete(f"/api/admin/jobs/{listing.id}")

    assert response.status_code == 200
    assert response.json()["message"] == "Job successfully deleted"

    await db.refresh(listing)
    assert listing.deleted_at is not None
    assert listing.status == ListingStatus.REJECTED
    assert listing.title == "Warehouse Supervisor"
    assert "Marked as deleted by admin" in listing.admin_notes

    assert (await async_client.get(f"/api/jobs/{listing.id}")).status_code == 404
    assert (await admin_client.get("/api/admin/jobs")).json() == []
    assert len((await admin_client.get("/api/admin/jobs", params={"includeDeleted": True})).json()) == 1
    assert (await admin_client.get(f"/api/admin/jobs/{listing.id}")).status_code == 200


@pytest.mark.asyncio
async def test_admin_creates_listing_for_company(
    admin_client: AsyncClient, company: Company, job_payload, db: AsyncSession
):
    response = await admin_client.post("/api/admin/jobs", json=job_payload(companyId=company.id))

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["companyName"] == "Kigali Tech Ltd"
    assert data["adminNotes"] == "Created by admin admin@example.com"


@pytest.mark.asyncio
async def test_admin_creates_listing_for_individual(admin_client: AsyncClient):
    response = await admin_client.post("/api/admin/jobs", json={
        "postType": "announcement",
        "title": "Community meeting",
        "location": "Musanze",
        "description": "Town hall meeting on the new market building.",
        "category": "Management & Admin",
        "individualName": "Jean Claude",
        "announcementType": "event",
    })

    assert response.status_code == 201
    assert response.json()["ownerType"] == "individual"
    assert response.json()["companyName"] is None


@pytest.mark.asyncio
async def test_admin_create_listing_unknown_company(admin_client: AsyncClient, job_payload):
    response = await admin_client.post("/api/admin/jobs", json=job_payload(companyId=321))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_replace_listing_from_edit_form(admin_client: AsyncClient, make_listing):
    listing = await make_listing(is_featured=True)

    form = (await admin_client.get(f"/api/admin/jobs/{listing.id}/form")).json()
    form.update({"title": "Senior Backend Engineer", "salary": "900000"})
    response = await admin_client.put(f"/api/admin/jobs/{listing.id}", json=build_listing_payload(form))

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Senior Backend Engineer"
    assert data["additionalData"]["salary"] == "900000"
    assert data["isFeatured"] is True
    assert data["status"] == "approved"


@pytest.mark.asyncio
async def test_replace_listing_can_change_post_type(admin_client: AsyncClient, make_listing, db: AsyncSession):
    listing = await make_listing()

    form = (await admin_client.get(f"/api/admin/jobs/{listing.id}/form")).json()
    form.update({"postType": "auction", "auctionItems": "Tractor\nPlough"})
    response = await admin_client.put(f"/api/admin/jobs/{listing.id}", json=build_listing_payload(form))

    assert response.status_code == 200
    assert response.json()["postType"] == "auction"
    assert response.json()["additionalData"]["auctionItems"] == ["Tractor", "Plough"]
    assert "experienceLevel" not in response.json()["additionalData"]


@pytest.mark.asyncio
async def test_replace_listing_validates(admin_client: AsyncClient, make_listing):
    listing = await make_listing()

    form = (await admin_client.get(f"/api/admin/jobs/{listing.id}/form")).json()
    form["description"] = "Too short"
    response = await admin_client.put(f"/api/admin/jobs/{listing.id}", json=build_listing_payload(form))

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "description"


# ============================================================
# USERS
# ============================================================

@pytest.mark.asyncio
async def test_list_and_get_users(admin_client: AsyncClient, admin: User, job_seeker: User):
    users = (await admin_client.get("/api/admin/users")).json()
    assert {user["email"] for user in users} == {"admin@example.com", "seeker@example.com"}
    assert all("password" not in user for user in users)

    assert (await admin_client.get(f"/api/admin/users/{job_seeker.id}")).json()["fullName"] == "Aline Uwase"
    assert (await admin_client.get("/api/admin/users/999")).status_code == 404


@pytest.mark.asyncio
async def test_update_user(admin_client: AsyncClient, job_seeker: User):
    response = await admin_client.patch(
        f"/api/admin/users/{job_seeker.id}", json={"role": "employer", "location": "Huye"}
    )

    assert response.status_code == 200
    assert response.json()["role"] == "employer"
    assert response.json()["location"] == "Huye"
    assert response.json()["email"] == "seeker@example.com"


@pytest.mark.asyncio
async def test_admin_cannot_change_own_role(admin_client: AsyncClient, admin: User):
    response = await admin_client.patch(f"/api/admin/users/{admin.id}", json={"role": "job_seeker"})

    assert response.status_code == 403
    assert response.json()["detail"] == "You cannot change your own admin role"

    response = await admin_client.patch(f"/api/admin/users/{admin.id}", json={"fullName": "Head Admin"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_update_user_duplicate_email(admin_client: AsyncClient, job_seeker: User, employer: User):
    response = await admin_client.patch(f"/api/admin/users/{job_seeker.id}", json={"email": "EMPLOYER@example.com"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already in use"


@pytest.mark.asyncio
async def test_list_companies(admin_client: AsyncClient, company: Company):
    response = await admin_client.get("/api/admin/companies")

    assert [item["name"] for item in response.json()] == ["Kigali Tech Ltd"]


@pytest.mark.asyncio
async def test_statistics(
    admin_client: AsyncClient, job_seeker_client: AsyncClient, employer: User, company: Company, make_listing
):
    listing = await make_listing(company_id=company.id)
    deleted = await make_listing()
    await job_seeker_client.post(f"/api/jobs/{listing.id}/apply", json={})
    await admin_client.delete(f"/api/admin/jobs/{deleted.id}")

    data = (await admin_client.get("/api/admin/statistics")).json()

    assert data["totalUsers"] == 3
    assert data["totalJobs"] == 2
    assert data["totalCompanies"] == 1
    assert data["totalApplications"] == 1
    assert {entry["role"]: entry["count"] for entry in data["usersByRole"]} == {
        "admin": 1, "employer": 1, "job_seeker": 1,
    }
    assert [job["id"] for job in data["recentJobs"]] == [listing.id]
    assert [application["jobId"] for application in data["recentApplications"]] == [listing.id]


# ============================================================
# CATEGORIES
# ============================================================

@pytest.mark.asyncio
async def test_category_crud(admin_client: AsyncClient, async_client: AsyncClient, categories):
    created = await admin_client.post("/api/admin/categories", json={"name": "Tourism", "icon": "flight"})
    assert created.status_code == 201
    category_id = created.json()["id"]

    duplicate = await admin_client.post("/api/admin/categories", json={"name": "tourism", "icon": "hotel"})
    assert duplicate.status_code == 409

    renamed = await admin_client.patch(f"/api/admin/categories/{category_id}", json={"name": "Tourism & Travel"})
    assert renamed.json()["name"] == "Tourism & Travel"
    assert renamed.json()["icon"] == "flight"

    clash = await admin_client.patch(f"/api/admin/categories/{category_id}", json={"name": "Healthcare"})
    assert clash.status_code == 409

    assert (await admin_client.delete(f"/api/admin/categories/{category_id}")).status_code == 204
    assert (await admin_client.delete(f"/api/admin/categories/{category_id}")).status_code == 404
    names = {category["name"] for category in (await async_client.get("/api/categories")).json()}
    assert "Tourism & Travel" not in names
    assert len(names) == 8


# ============================================================
# SITE CONTENT
# ============================================================

@pytest.mark.asyncio
async def test_featured_sections_defaults_and_partial_update(admin_client: AsyncClient):
    defaults = (await admin_client.get("/api/admin/featured-sections")).json()
    assert defaults["featuredJobs"] == []
    assert defaults["featuredCompanies"] == []
    assert defaults["homepageHero"]["enabled"] is True

    await admin_client.patch("/api/admin/featured-sections", json={
        "homepageHero": {"title": "Find work in Rwanda", "subtitle": "Jobs, tenders and more"},
    })
    response = await admin_client.patch("/api/admin/featured-sections", json={"featuredJobs": [3, 1]})

    data = response.json()
    assert data["featuredJobs"] == [3, 1]
    assert data["homepageHero"]["title"] == "Find work in Rwanda"


@pytest.mark.asyncio
async def test_notifications_crud(admin_client: AsyncClient, async_client: AsyncClient):
    live = (await admin_client.post("/api/admin/notifications", json={
        "message": "Site maintenance on Saturday", "type": "warning",
    })).json()
    expired = await admin_client.post("/api/admin/notifications", json={
        "message": "Old news", "expiresAt": "2020-01-01T00:00:00",
    })
    assert expired.status_code == 201
    assert expired.json()["type"] == "info"

    public = (await async_client.get("/api/notifications")).json()
    assert [notification["id"] for notification in public] == [live["id"]]

    response = await admin_client.patch(f"/api/admin/notifications/{live['id']}", json={"enabled": False})
    assert response.json()["enabled"] is False
    assert response.json()["message"] == "Site maintenance on Saturday"
    assert (await async_client.get("/api/notifications")).json() == []

    assert len((await admin_client.get("/api/admin/notifications")).json()) == 2
    assert (await admin_client.delete(f"/api/admin/notifications/{live['id']}")).status_code == 204
    assert (await admin_client.patch("/api/admin/notifications/999", json={"enabled": True})).status_code == 404
