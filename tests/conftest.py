import os

# Avant l'import de l'app: pas de Redis ni de clés réelles en tests
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")
os.environ.setdefault("APP_ENV", "test")

import pytest
from types import SimpleNamespace
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from backend import config
from backend.app import app as fastapi_app
from backend.utils.security import require_admin
from backend.orders.repository import DuplicateOrderError

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture
def admin_client(app, client):
    def _override_require_admin():
        return {"id": "admin-user-id", "role": "admin", "email": "admin@example.com"}
    app.dependency_overrides[require_admin] = _override_require_admin
    yield client
    app.dependency_overrides.pop(require_admin, None)

def _empty_supabase() -> MagicMock:
    """Client Supabase factice: toute requête chaînée renvoie data=[]."""
    query = MagicMock()
    for name in ("select", "eq", "limit", "order", "insert", "update", "delete"):
        getattr(query, name).return_value = query
    query.execute.return_value = SimpleNamespace(data=[])
    client = MagicMock()
    client.table.return_value = query
    return client

# Mock database dependency for all tests
@pytest.fixture(scope="function", autouse=True)
def mock_db_dependency(monkeypatch):
    """Aucun test n'atteint Supabase: les deux clients sont remplacés."""
    monkeypatch.setattr("backend.infra.supabase_client.get_supabase", lambda: _empty_supabase())
    monkeypatch.setattr("backend.infra.supabase_client.get_service_supabase", lambda: _empty_supabase())

@pytest.fixture(autouse=True)
def sent_emails(monkeypatch) -> List[Dict[str, Any]]:
    """Remplace l'envoi Resend et enregistre les e-mails envoyés."""
    sent: List[Dict[str, Any]] = []

    def _fake_send_email(*, to, subject, html, text=None):
        sent.append({"to": to, "subject": subject, "html": html, "text": text})
        return {"id": f"email-{len(sent)}"}

    monkeypatch.setattr("backend.notifications.email_client.send_email", _fake_send_email)
    return sent


class FakeStripe:
    """PaymentIntents factices: statut configurable, erreur optionnelle."""

    def __init__(self):
        self.status = "succeeded"
        self.error: Optional[Exception] = None
        self.retrieved: List[str] = []

    def retrieve_payment_intent(self, payment_intent_id: str) -> Dict[str, Any]:
        self.retrieved.append(payment_intent_id)
        if self.error is not None:
            raise self.error
        return {"id": payment_intent_id, "status": self.status, "amount": 0, "currency": "usd"}


@pytest.fixture
def fake_stripe(monkeypatch) -> FakeStripe:
    fake = FakeStripe()
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "sk_test_dummy")
    monkeypatch.setattr("backend.payments.stripe_client.retrieve_payment_intent", fake.retrieve_payment_intent)
    return fake


class FakeOrdersStore:
    """Stockage en mémoire des tables orders / order_items / products."""

    def __init__(self):
        self.orders: Dict[str, Dict[str, Any]] = {}
        self.items: List[Dict[str, Any]] = []
        self.products: Dict[str, Dict[str, Any]] = {}
        self.fail_header = False
        self.failing_products: set = set()
        self.header_writes = 0

    def insert_order(self, row: Dict[str, Any]) -> Dict[str, Any]:
        self.header_writes += 1
        if self.fail_header:
            raise RuntimeError("connection refused")
        ref = row.get("payment_intent_id")
        if any(o.get("payment_intent_id") == ref for o in self.orders.values()):
            raise DuplicateOrderError(ref)
        self.orders[row["id"]] = dict(row)
        return dict(row)

    def insert_order_item(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if row.get("product_id") in self.failing_products:
            raise RuntimeError("insert or update on table order_items violates foreign key constraint")
        self.items.append(dict(row))
        return dict(row)

    def get_order(self, order_id: str) -> Optional[dict]:
        row = self.orders.get(order_id)
        return dict(row) if row else None

    def list_order_items(self, order_id: str) -> List[dict]:
        return [dict(i) for i in self.items if i["order_id"] == order_id]

    def find_order_by_payment_intent(self, payment_intent_id: str) -> Optional[dict]:
        for row in self.orders.values():
            if row.get("payment_intent_id") == payment_intent_id:
                return dict(row)
        return None

    def update_order(self, order_id: str, data: Dict[str, Any]) -> Optional[dict]:
        if order_id not in self.orders:
            return None
        self.orders[order_id].update(data)
        return dict(self.orders[order_id])

    def get_product(self, product_id: str) -> Optional[dict]:
        return self.products.get(product_id)

    def insert_product(self, row: Dict[str, Any]) -> Dict[str, Any]:
        self.products[row["id"]] = dict(row)
        return dict(row)


@pytest.fixture
def orders_store(monkeypatch) -> FakeOrdersStore:
    store = FakeOrdersStore()
    for name in (
        "insert_order",
        "insert_order_item",
        "get_order",
        "list_order_items",
        "find_order_by_payment_intent",
        "update_order",
        "get_product",
        "insert_product",
    ):
        monkeypatch.setattr(f"backend.orders.repository.{name}", getattr(store, name))
    return store
