# tests/test_auth.py
import pytest

from app.auth import authenticate
from app.errors import UnauthorizedError

UNAUTHORIZED = {
    "status": "error",
    "name": "UnauthorizedError",
    "message": "Unauthorized: Invalid or missing API key.",
}


def test_authenticate_exact_match():
    authenticate("s3cret", "s3cret")
    for bad in (None, "", "S3CRET", "s3cret ", "s3cre"):
        with pytest.raises(UnauthorizedError):
            authenticate(bad, "s3cret")


@pytest.mark.parametrize("method, path", [
    ("GET", "/api/products"),
    ("GET", "/api/products/statistics"),
    ("GET", "/api/products/anything"),
    ("POST", "/api/products"),
    ("PUT", "/api/products/anything"),
    ("DELETE", "/api/products/anything"),
    ("GET", "/api"),
    ("GET", "/api/nothing-here"),
    ("PATCH", "/api/products/anything"),
    ("GET", "/api/products/"),
])
def test_missing_key_is_rejected(anon_client, method, path):
    r = anon_client.request(method, path, follow_redirects=False)
    assert r.status_code == 401
    assert r.json() == UNAUTHORIZED


def test_wrong_key_is_rejected(anon_client, store):
    r = anon_client.delete(f"/api/products/{store.list()[0].id}", headers={"X-API-Key": "wrong"})
    assert r.status_code == 401
    assert len(store) == 5


def test_auth_runs_before_validation(anon_client):
    r = anon_client.post("/api/products", json={"name": ""}, headers={"X-API-Key": "wrong"})
    assert r.status_code == 401


def test_key_comes_from_settings(app, anon_client):
    r = anon_client.get("/api/products", headers={"X-API-Key": app.state.settings.API_KEY})
    assert r.status_code == 200


def test_docs_are_public(anon_client):
    assert anon_client.get("/openapi.json").status_code == 200


def test_rest_of_prefix_behaves_normally_with_key(client):
    r = client.get("/api/nothing-here")
    assert r.status_code == 404
    assert r.json()["name"] == "NotFoundError"

    r = client.get("/api/products/", follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"].endswith("/api/products")

    assert client.get("/api/products/").json()["totalProducts"] == 5
