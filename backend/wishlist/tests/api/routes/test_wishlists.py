from fastapi.testclient import TestClient

from wishlist.api.deps import get_wishlist_service
from wishlist.core.config import Settings
from wishlist.domain.wishlist.entities import wishlist_id_for
from wishlist.infrastructure.database.repositories import InMemoryWishlistRepository
from wishlist.main import create_app

from ...application.fakes import BrokenRepository, InterferingRepository

BASE = "/api/v1/customers/c1/wishlist"


def test_empty_wishlist_for_unknown_customer(client: TestClient) -> None:
    r = client.get(BASE)
    assert r.status_code == 200
    body = r.json()
    assert body["customer_id"] == "c1"
    assert body["wishlist_id"] == wishlist_id_for("c1")
    assert body["items"] == []
    assert body["max_items"] == 20
    assert body["version"] == 0


def test_add_reorder_and_read_back(client: TestClient) -> None:
    r = client.post(f"{BASE}/products/p1", json={"quantity": 2})
    assert r.status_code == 201
    assert r.json()["created"] is True
    assert client.post(f"{BASE}/products/p2").status_code == 201

    r = client.put(f"{BASE}/order", json={"product_ids": ["p2", "p1"]})
    assert r.status_code == 200
    body = r.json()
    assert [item["product_id"] for item in body["items"]] == ["p2", "p1"]
    assert body["version"] == 3

    r = client.get(BASE)
    assert [item["quantity"] for item in r.json()["items"]] == [1, 2]


def test_duplicate_add_is_bad_request(client: TestClient) -> None:
    client.post(f"{BASE}/products/p1")

    r = client.post(f"{BASE}/products/p1")
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "DUPLICATE_ITEM"
    assert body["path"] == f"{BASE}/products/p1"
    assert body["details"] == {"product_id": "p1"}


def test_idempotent_re_add_returns_ok(
    client: TestClient, repository: InMemoryWishlistRepository
) -> None:
    client.post(f"{BASE}/products/p1")

    r = client.post(f"{BASE}/products/p1", json={"idempotent": True})
    assert r.status_code == 200
    assert r.json()["created"] is False
    assert r.json()["version"] == 1
    assert repository.save_calls == 1


def test_invalid_identifiers(client: TestClient) -> None:
    r = client.get("/api/v1/customers/bad%20id/wishlist")
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_CUSTOMER_ID"

    r = client.post(f"{BASE}/products/{'x' * 101}")
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_PRODUCT_ID"


def test_invalid_quantity(client: TestClient) -> None:
    r = client.post(f"{BASE}/products/p1", json={"quantity": 0})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_QUANTITY"


def test_non_integer_quantity_is_bad_request(client: TestClient) -> None:
    r = client.post(f"{BASE}/products/p1", json={"quantity": 1.5})
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "INVALID_QUANTITY"
    assert body["path"] == f"{BASE}/products/p1"
    assert body["details"]["errors"][0]["field"].endswith("quantity")

    r = client.patch(f"{BASE}/products/p1", json={"quantity": "many"})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_QUANTITY"


def test_oversized_quantity_is_bad_request(client: TestClient) -> None:
    r = client.post(f"{BASE}/products/p1", json={"quantity": 2**63})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_QUANTITY"


def test_malformed_order_body_is_bad_request(client: TestClient) -> None:
    r = client.put(f"{BASE}/order", json={"product_ids": "p1"})
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]["errors"][0]["type"] == "list_type"


def test_check_product(client: TestClient) -> None:
    r = client.get(f"{BASE}/products/p1")
    assert r.status_code == 404
    assert r.json()["code"] == "ITEM_NOT_FOUND"

    client.post(f"{BASE}/products/p1")
    r = client.get(f"{BASE}/products/p1")
    assert r.status_code == 200
    assert r.json()["exists"] is True


def test_set_quantity(client: TestClient) -> None:
    client.post(f"{BASE}/products/p1")

    r = client.patch(f"{BASE}/products/p1", json={"quantity": 5})
    assert r.status_code == 200
    assert r.json()["items"][0]["quantity"] == 5

    r = client.patch(f"{BASE}/products/p9", json={"quantity": 5})
    assert r.status_code == 404


def test_remove_product(client: TestClient) -> None:
    r = client.delete(f"{BASE}/products/p1")
    assert r.status_code == 404
    assert r.json()["code"] == "WISHLIST_NOT_FOUND"

    client.post(f"{BASE}/products/p1")
    client.post(f"{BASE}/products/p2")
    r = client.delete(f"{BASE}/products/p1")
    assert r.status_code == 204
    assert [item["product_id"] for item in client.get(BASE).json()["items"]] == ["p2"]


def test_invalid_order(client: TestClient) -> None:
    client.post(f"{BASE}/products/p1")
    client.post(f"{BASE}/products/p2")

    r = client.put(f"{BASE}/order", json={"product_ids": ["p1", "p1"]})
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "INVALID_ORDER"
    assert body["details"]["missing"] == ["p2"]
    assert body["details"]["duplicated"] == ["p1"]


def test_clear(client: TestClient) -> None:
    assert client.delete(BASE).status_code == 404

    client.post(f"{BASE}/products/p1")
    r = client.delete(BASE)
    assert r.status_code == 204
    assert client.get(BASE).json()["items"] == []


def test_persistent_conflicts_return_conflict(test_settings: Settings) -> None:
    app = create_app(
        settings=test_settings, repository=InterferingRepository(interferences=100)
    )
    with TestClient(app) as client:
        r = client.post(f"{BASE}/products/p1")

    assert r.status_code == 409
    assert r.json()["code"] == "CONCURRENCY_EXHAUSTED"


def test_store_failure_returns_service_unavailable(test_settings: Settings) -> None:
    app = create_app(settings=test_settings, repository=BrokenRepository())
    with TestClient(app) as client:
        r = client.post(f"{BASE}/products/p1")

    assert r.status_code == 503
    assert r.json()["code"] == "STORAGE_FAILURE"


def test_unexpected_error_returns_internal_error(test_settings: Settings) -> None:
    class ExplodingService:
        async def get_wishlist(self, customer_id: str):
            raise RuntimeError("boom")

    app = create_app(settings=test_settings, repository=InMemoryWishlistRepository())
    app.dependency_overrides[get_wishlist_service] = lambda: ExplodingService()
    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.get(BASE)

    assert r.status_code == 500
    assert r.json()["code"] == "INTERNAL_SERVER_ERROR"
    assert "boom" not in r.json()["message"]
