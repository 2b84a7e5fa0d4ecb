from fastapi.testclient import TestClient

from backend.orders import service as orders_service


def _seed(orders_store, status="PROCESSING"):
    return orders_service.create_order_header({
        "customer_name": "Jane Doe",
        "customer_email": "jane@example.com",
        "payment_intent_id": "pi_seed",
        "total": 67.99,
        "status": status,
        "payment_status": "PAID",
    })

def test_get_order_404(client: TestClient, orders_store):
    assert client.get("/api/v1/orders/missing").status_code == 404

def test_patch_requires_authentication(client: TestClient, orders_store):
    order = _seed(orders_store)
    resp = client.patch(f"/api/v1/orders/{order['id']}", json={"status": "SHIPPED"})
    assert resp.status_code == 401

def test_patch_shipped_sends_update(admin_client: TestClient, orders_store, sent_emails):
    order = _seed(orders_store)
    resp = admin_client.patch(f"/api/v1/orders/{order['id']}", json={"status": "SHIPPED", "paymentStatus": "PAID"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "SHIPPED"
    assert orders_store.orders[order["id"]]["status"] == "SHIPPED"
    assert len(sent_emails) == 1
    assert "Shipped" in sent_emails[0]["subject"]

def test_patch_same_status_does_not_notify_twice(admin_client: TestClient, orders_store, sent_emails):
    order = _seed(orders_store, status="SHIPPED")
    resp = admin_client.patch(f"/api/v1/orders/{order['id']}", json={"status": "SHIPPED"})
    assert resp.status_code == 200
    assert sent_emails == []

def test_patch_address_only(admin_client: TestClient, orders_store, sent_emails):
    order = _seed(orders_store)
    resp = admin_client.patch(f"/api/v1/orders/{order['id']}", json={"shippingAddress": "2 Elm St", "city": "Shelbyville"})
    assert resp.status_code == 200
    assert orders_store.orders[order["id"]]["shipping_address"] == "2 Elm St"
    assert sent_emails == []

def test_patch_rejects_unknown_status(admin_client: TestClient, orders_store):
    order = _seed(orders_store)
    assert admin_client.patch(f"/api/v1/orders/{order['id']}", json={"status": "LOST"}).status_code == 400
    assert admin_client.patch(f"/api/v1/orders/{order['id']}", json={"total": 1}).status_code == 400

def test_patch_missing_order(admin_client: TestClient, orders_store):
    assert admin_client.patch("/api/v1/orders/missing", json={"status": "SHIPPED"}).status_code == 404
