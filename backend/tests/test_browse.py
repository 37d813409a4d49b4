"""
Tests for pagination and the /api/opportunities browse endpoint.
"""
import pytest
from httpx import AsyncClient

from app.models.listing import PostType
from app.services.pagination import paginate, total_pages


def test_paginate_slices_one_based_pages():
    items = list(range(1, 24))

    assert paginate(items, 1, 10) == list(range(1, 11))
    assert paginate(items, 3, 10) == [21, 22, 23]
    assert total_pages(len(items), 10) == 3


def test_page_past_the_end_is_empty():
    assert paginate([1, 2, 3], 5, 10) == []
    assert total_pages(0, 10) == 0


def test_invalid_page_arguments():
    with pytest.raises(ValueError):
        paginate([1], 0, 10)
    with pytest.raises(ValueError):
        paginate([1], 1, 0)


@pytest.mark.asyncio
async def test_browse_paginates_filtered_results(async_client: AsyncClient, make_listing):
    created = [await make_listing() for _ in range(12)]
    await make_listing(post_type=PostType.TENDER, additional_data={})

    response = await async_client.get("/api/opportunities", params={"postType": "job", "page": 2, "pageSize": 5})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 12
    assert data["totalPages"] == 3
    assert data["page"] == 2
    assert data["pageSize"] == 5
    newest_first = [listing.id for listing in reversed(created)]
    assert [item["id"] for item in data["items"]] == newest_first[5:10]


@pytest.mark.asyncio
async def test_browse_oldest_first_and_default_page_size(async_client: AsyncClient, make_listing):
    created = [await make_listing() for _ in range(11)]

    response = await async_client.get("/api/opportunities", params={"sort": "oldest"})

    data = response.json()
    assert data["pageSize"] == 10
    assert [item["id"] for item in data["items"]] == [listing.id for listing in created[:10]]


@pytest.mark.asyncio
async def test_browse_page_beyond_end(async_client: AsyncClient, make_listing):
    await make_listing()

    response = await async_client.get("/api/opportunities", params={"page": 9})

    assert response.status_code == 200
    assert response.json()["items"] == []
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_browse_rejects_page_zero(async_client: AsyncClient):
    response = await async_client.get("/api/opportunities", params={"page": 0})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "query.page"
