from fastapi.testclient import TestClient


def test_frame_size_price_fallback(client: TestClient, monkeypatch):
    monkeypatch.setattr("backend.pricing.service.repository.fetch_category_price", lambda c, s: None)
    resp = client.get("/api/v1/pricing/frame-size", params={"frameSize": '12" x 12"'})
    assert resp.status_code == 200
    assert resp.json() == {"price": 299.61, "source": "fallback"}

def test_frame_size_price_database(client: TestClient, monkeypatch):
    prices = {("Star Maps", "SIZE_16X20"): 420.0}
    monkeypatch.setattr("backend.pricing.service.repository.fetch_category_price", lambda c, s: prices.get((c, s)))
    resp = client.get("/api/v1/pricing/frame-size", params={"frameSize": "16x20", "category": "Star Maps"})
    assert resp.json() == {"price": 420.0, "source": "database"}

def test_frame_size_unknown_token(client: TestClient):
    resp = client.get("/api/v1/pricing/frame-size", params={"frameSize": "13x13"})
    assert resp.status_code == 400

def test_lowest_price(client: TestClient, monkeypatch):
    monkeypatch.setattr("backend.pricing.service.repository.fetch_category_prices", lambda name: [])
    resp = client.get("/api/v1/pricing/lowest", params={"category": "Key holders"})
    assert resp.json() == {"price": 104.34}

def test_admin_routes_require_auth(client: TestClient):
    assert client.get("/api/v1/admin/categories/cat-1/frame-prices").status_code == 401

def test_admin_save_frame_price(admin_client: TestClient, monkeypatch):
    monkeypatch.setattr("backend.pricing.views.pricing_repository.get_category", lambda cid: {"id": cid, "name": "City Maps"})
    saved = {}

    def _upsert(category_id, frame_size, price):
        saved.update(category_id=category_id, frame_size=frame_size, price=price)
        return {"id": "fp-1", "version": 1, **saved}

    monkeypatch.setattr("backend.pricing.service.repository.upsert_frame_price", _upsert)
    resp = admin_client.post("/api/v1/admin/categories/cat-1/frame-prices", json={"frameSize": "12x12", "price": 310})
    assert resp.status_code == 200
    assert saved == {"category_id": "cat-1", "frame_size": "SIZE_12X12", "price": 310.0}

def test_admin_save_frame_price_invalid(admin_client: TestClient, monkeypatch):
    monkeypatch.setattr("backend.pricing.views.pricing_repository.get_category", lambda cid: {"id": cid})
    assert admin_client.post("/api/v1/admin/categories/cat-1/frame-prices", json={"frameSize": "12x12", "price": 0}).status_code == 400
    assert admin_client.post("/api/v1/admin/categories/cat-1/frame-prices", json={"frameSize": "nope", "price": 10}).status_code == 400

def test_admin_unknown_category(admin_client: TestClient, monkeypatch):
    monkeypatch.setattr("backend.pricing.views.pricing_repository.get_category", lambda cid: None)
    assert admin_client.get("/api/v1/admin/categories/nope/frame-prices").status_code == 404

def test_admin_delete_frame_price(admin_client: TestClient, monkeypatch):
    monkeypatch.setattr("backend.pricing.service.repository.delete_frame_price", lambda cid, pid: pid == "fp-1")
    assert admin_client.delete("/api/v1/admin/categories/cat-1/frame-prices/fp-1").status_code == 200
    assert admin_client.delete("/api/v1/admin/categories/cat-1/frame-prices/fp-2").status_code == 404

def test_all_prices_grid(client: TestClient, monkeypatch):
    monkeypatch.setattr(
        "backend.pricing.service.repository.list_categories",
        lambda: [
            {"id": "cat-keys", "name": "Key holders", "slug": "key-holders"},
            {"id": "cat-star", "name": "Star Maps", "slug": "star-maps"},
        ],
    )
    monkeypatch.setattr(
        "backend.pricing.service.repository.fetch_all_frame_prices",
        lambda: [
            {"category_id": "cat-star", "frame_size": "SIZE_12X12", "price": 250.0},
            {"category_id": "cat-star", "frame_size": "SIZE_6X6", "price": 0},
        ],
    )
    resp = client.get("/api/v1/pricing/all")
    assert resp.status_code == 200
    keys, star = resp.json()
    assert (keys["id"], keys["name"], keys["slug"]) == ("cat-keys", "Key holders", "key-holders")
    assert {p["frameSize"]: p["price"] for p in keys["frameSizePrices"]} == {"SIZE_4_5X8_5": 104.34, "SIZE_6X12": 184.43}
    star_prices = {p["frameSize"]: p for p in star["frameSizePrices"]}
    assert star_prices["SIZE_12X12"]["price"] == 250.0
    assert star_prices["SIZE_12X12"]["source"] == "database"
    # Un prix persisté à 0 est ignoré au profit de la table statique
    assert star_prices["SIZE_6X6"]["price"] == 179.00
    assert star_prices["SIZE_6X6"]["source"] == "fallback"

def test_all_prices_static_when_price_table_fails(client: TestClient, monkeypatch):
    monkeypatch.setattr(
        "backend.pricing.service.repository.list_categories",
        lambda: [{"id": "cat-city", "name": "City Maps", "slug": "city-maps"}],
    )

    def _down():
        raise ConnectionError("supabase unreachable")

    monkeypatch.setattr("backend.pricing.service.repository.fetch_all_frame_prices", _down)
    resp = client.get("/api/v1/pricing/all")
    assert resp.status_code == 200
    prices = resp.json()[0]["frameSizePrices"]
    assert all(p["source"] == "fallback" for p in prices)
    assert {"id": "cat-city-SIZE_12X12", "frameSize": "SIZE_12X12", "price": 299.61, "source": "fallback"} in prices

def test_all_prices_categories_unavailable(client: TestClient, monkeypatch):
    def _down():
        raise ConnectionError("supabase unreachable")

    monkeypatch.setattr("backend.pricing.service.repository.list_categories", _down)
    resp = client.get("/api/v1/pricing/all")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to fetch pricing data"}
