# tests/test_statistics.py
from app.database import ProductStore
from app.handlers import create_product_logic, statistics_logic


def test_statistics_on_seed(client):
    r = client.get("/api/products/statistics")
    assert r.status_code == 200
    assert r.json() == {
        "totalProducts": 5,
        "productsByCategory": {"Electronics": 3, "Home & Office": 1, "Wearables": 1},
        "inStockCount": 4,
        "outOfStockCount": 1,
    }


def test_statistics_track_changes(client, new_product):
    client.post("/api/products", json={**new_product, "category": "Audio", "inStock": False})
    stats = client.get("/api/products/statistics").json()
    assert stats["totalProducts"] == 6
    assert stats["productsByCategory"]["Audio"] == 1
    assert stats["outOfStockCount"] == 2
    assert stats["inStockCount"] + stats["outOfStockCount"] == stats["totalProducts"]
    assert sum(stats["productsByCategory"].values()) == stats["totalProducts"]


def test_statistics_groups_categories_verbatim():
    # grouping keys are the stored category strings, case included
    store = ProductStore.seeded()
    create_product_logic(store, {"name": "Cable", "description": "USB-C", "price": 5,
                                 "category": "electronics", "inStock": True})
    stats = statistics_logic(store)
    assert stats.productsByCategory["Electronics"] == 3
    assert stats.productsByCategory["electronics"] == 1


def test_statistics_on_empty_store():
    stats = statistics_logic(ProductStore())
    assert stats.totalProducts == 0
    assert stats.productsByCategory == {}
    assert stats.inStockCount == 0
    assert stats.outOfStockCount == 0
