import pytest

from src.errors import StorageError


class FailingStore:
    def _fail(self, *args, **kwargs):
        raise StorageError(details="connection reset")

    list_all = create_or_append = delete_child = update_child = _fail


class BrokenStore:
    def list_all(self, spec):
        raise RuntimeError("disk on fire")


class UnreachableStore:
    def ping(self):
        return False


def _delete(client, path, payload):
    return client.request("DELETE", path, json=payload)


def test_library_create_twice_appends(client):
    first = client.post("/library", json={"companyName": "Acme", "item": "Gloves", "price": 5, "note": "nitrile"})
    second = client.post("/library", json={"companyName": "Acme", "item": "Masks", "price": 2.5})

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["_id"] == second.json()["_id"]

    records = client.get("/library").json()
    assert len(records) == 1
    products = records[0]["products"]
    assert [p["item"] for p in products] == ["Gloves", "Masks"]
    assert products[0]["price"] == 5
    assert isinstance(products[0]["price"], int)
    assert products[1]["price"] == 2.5
    assert products[1]["note"] is None


def test_library_update_and_delete(client):
    record = client.post("/library", json={"companyName": "Acme", "item": "Gloves", "price": 5}).json()
    company_id = record["_id"]
    product_id = record["products"][0]["_id"]

    response = client.put(
        "/library",
        json={"companyId": company_id, "productId": product_id, "updates": {"item": "Gloves L", "note": "restocked"}},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Product updated successfully"}
    product = client.get("/library").json()[0]["products"][0]
    assert product == {"_id": product_id, "item": "Gloves L", "price": None, "note": "restocked"}

    response = _delete(client, "/library", {"companyId": company_id, "productId": product_id})
    assert response.json() == {"message": "Product deleted successfully"}
    assert client.get("/library").json()[0]["products"] == []


def test_delete_of_unknown_ids_still_succeeds(client):
    response = _delete(client, "/library", {"companyId": "nope", "productId": "nope"})
    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted successfully"}


def test_rfq_crud(client):
    record = client.post("/rfq", json={"QuoteRequest": "500 syringes", "quotedItem": "10ml", "quotedPrice": 3.2}).json()
    assert record["QuoteRequest"] == "500 syringes"
    item_id = record["quotation"][0]["_id"]

    response = client.put(
        "/rfq",
        json={"quoteId": record["_id"], "itemId": item_id, "updates": {"quotedPrice": 3.0}},
    )
    assert response.json() == {"message": "Quotation updated successfully"}
    assert client.get("/rfq").json()[0]["quotation"][0]["quotedItem"] is None

    response = _delete(client, "/rfq", {"quoteId": record["_id"], "itemId": item_id})
    assert response.json() == {"message": "Quote item deleted successfully"}


def test_open_tender_crud(client):
    client.post("/open", json={"BidRequest": "ICU beds", "bidItem": "bed A", "bidPrice": 900})
    record = client.post("/open", json={"BidRequest": "ICU beds", "bidItem": "bed B", "bidNote": "delivery 2w"}).json()
    assert [b["bidItem"] for b in record["bids"]] == ["bed A", "bed B"]
    bid_id = record["bids"][0]["_id"]

    response = client.put("/open", json={"tenderId": record["_id"], "bidId": bid_id, "updates": {"bidItem": "bed A+"}})
    assert response.json() == {"message": "Bid updated successfully"}

    response = _delete(client, "/open", {"tenderId": record["_id"], "bidId": bid_id})
    assert response.json() == {"message": "Bid deleted successfully"}
    assert [b["bidItem"] for b in client.get("/open").json()[0]["bids"]] == ["bed B"]


@pytest.mark.parametrize(
    "path, payload",
    [
        ("/library", {"item": "no company"}),
        ("/library", {"companyName": "Acme", "colour": "red"}),
        ("/rfq", {"QuoteRequest": "x", "quotedPrice": "cheap"}),
        ("/open", {"bidItem": "no request"}),
    ],
)
def test_invalid_create_bodies_are_400(client, path, payload):
    response = client.post(path, json=payload)
    assert response.status_code == 400
    assert response.json()["error"].startswith("Valid ")
    assert client.get(path).json() == []


def test_update_requires_updates_object(client):
    response = client.put("/library", json={"companyId": "a", "productId": "b"})
    assert response.status_code == 400
    assert response.json()["error"] == "Valid updates required"


def test_storage_failures_are_500(client):
    from src.api.dependencies import get_db
    from src.api.main import app

    app.dependency_overrides[get_db] = lambda: FailingStore()

    assert client.get("/library").status_code == 500
    assert client.get("/library").json() == {"error": "Server error"}

    response = client.post("/rfq", json={"QuoteRequest": "x"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save data"}

    response = client.put("/open", json={"tenderId": "t", "bidId": "b", "updates": {}})
    assert response.status_code == 500


def test_library_search_placeholder(client):
    assert client.get("/library/search").json() == {"message": "Working"}
    response = client.post("/library/search", json={"q": "gloves"})
    assert response.json() == {"message": "Search endpoint working", "searchQuery": {"q": "gloves"}}


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "healthy"
    health = client.get("/health").json()
    assert set(health) == {"status", "database", "telegram", "timestamp"}
    assert health["status"] == "healthy"
    assert health["database"] == "connected"


def test_health_reports_unreachable_store(client):
    from src.api.dependencies import get_db
    from src.api.main import app

    app.dependency_overrides[get_db] = lambda: UnreachableStore()

    health = client.get("/health").json()
    assert health["status"] == "degraded"
    assert health["database"] == "unreachable"


def test_unexpected_error_is_generic_500(client):
    from fastapi.testclient import TestClient

    from src.api.dependencies import get_db
    from src.api.main import app

    app.dependency_overrides[get_db] = lambda: BrokenStore()
    response = TestClient(app, raise_server_exceptions=False).get("/library")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "Traceback" not in response.text
    assert "disk on fire" not in response.text
