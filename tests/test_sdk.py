# tests/test_sdk.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from sdk.pyproducts import ClientError, ProductClient, _check


@pytest.fixture
def sdk(app, settings):
    return ProductClient(base_url="http://testserver", api_key=settings.API_KEY, session=TestClient(app))


def test_sdk_crud_roundtrip(sdk):
    created = sdk.create_product("Webcam HD", "1080p.", 60, "Electronics", True)
    assert created["inStock"] is True

    assert sdk.get_product(created["id"]) == created

    updated = sdk.update_product(created["id"], "Webcam HD", "1080p.", 55, "Electronics", False)
    assert updated["price"] == 55
    assert updated["inStock"] is False

    assert sdk.delete_product(created["id"]) is None
    with pytest.raises(ClientError) as exc_info:
        sdk.get_product(created["id"])
    assert exc_info.value.status_code == 404
    assert exc_info.value.name == "NotFoundError"


def test_sdk_list_and_statistics(sdk):
    page = sdk.list_products(category="electronics", page=1, limit=2)
    assert page["totalProducts"] == 3
    assert page["totalPages"] == 2
    assert len(page["products"]) == 2

    assert sdk.list_products(search="lamp")["products"][0]["name"] == "Desk Lamp LED"
    assert sdk.statistics()["totalProducts"] == 5


def test_sdk_surfaces_validation_errors(sdk):
    with pytest.raises(ClientError) as exc_info:
        sdk.create_product("laptop pro x", "dup", 1, "Electronics")
    assert exc_info.value.status_code == 400
    assert "already exists" in exc_info.value.message


def test_sdk_without_key(app):
    anon = ProductClient(base_url="http://testserver", session=TestClient(app))
    with pytest.raises(ClientError) as exc_info:
        anon.statistics()
    assert exc_info.value.status_code == 401


def test_sdk_async_create(app, settings, store):
    sdk = ProductClient(base_url="http://test", api_key=settings.API_KEY)

    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport) as ac:
            return await sdk.create_product_async("Async Speaker", "Bluetooth.", 35, "Audio", client=ac)

    r = asyncio.run(run())
    assert r.status_code == 201
    assert store.find_by_id(r.json()["id"]) is not None


def test_sdk_tolerates_non_object_error_bodies():
    with pytest.raises(ClientError) as exc_info:
        _check(httpx.Response(502, json=["upstream down"]))
    assert exc_info.value.status_code == 502
    assert exc_info.value.name == "HTTPError"

    with pytest.raises(ClientError) as exc_info:
        _check(httpx.Response(503, text="maintenance"))
    assert exc_info.value.message == "maintenance"
