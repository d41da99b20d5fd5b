# tests/test_concurrency.py
import asyncio
from concurrent.futures import ThreadPoolExecutor

import httpx

from app.database import ProductStore
from app.errors import DuplicateProductError, ProductNotFoundError
from app.handlers import create_product_logic, delete_product_logic

PAYLOAD = {"name": "Last One", "description": "Only one may exist.", "price": 10,
           "category": "Limited", "inStock": True}


async def _create_task(app, api_key, name):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.post("/api/products", json={**PAYLOAD, "name": name}, headers={"X-API-Key": api_key})


def test_concurrent_same_name_creates(app, settings, store):
    async def run():
        return await asyncio.gather(*[
            _create_task(app, settings.API_KEY, "Last One" if i % 2 else "LAST ONE")
            for i in range(6)
        ])

    results = asyncio.run(run())
    statuses = sorted(r.status_code for r in results)
    assert statuses == [201, 400, 400, 400, 400, 400]
    assert sum(1 for p in store.list() if p.name.casefold() == "last one") == 1


def test_threaded_creates_keep_names_unique():
    store = ProductStore()

    def create(i):
        try:
            create_product_logic(store, {**PAYLOAD, "name": f"Item {i % 5}"})
            return True
        except DuplicateProductError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(create, range(200)))

    assert outcomes.count(True) == 5
    names = [p.name for p in store.list()]
    assert sorted(names) == [f"Item {i}" for i in range(5)]


def test_threaded_deletes_succeed_once():
    store = ProductStore.seeded()
    target = store.list()[0].id

    def delete(_):
        try:
            delete_product_logic(store, target)
            return True
        except ProductNotFoundError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(delete, range(50)))

    assert outcomes.count(True) == 1
    assert len(store) == 4
