import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock

from backend.pricing import repository as pricing_repository


def _client_returning(rows):
    query = MagicMock()
    for name in ("select", "eq", "limit", "order"):
        getattr(query, name).return_value = query
    query.execute.return_value = SimpleNamespace(data=rows)
    client = MagicMock()
    client.table.return_value = query
    return client

def test_fetch_category_price_returns_persisted_price(monkeypatch):
    client = _client_returning([{"id": "fp-1", "price": 250, "version": 3}])
    monkeypatch.setattr("backend.infra.supabase_client.get_supabase", lambda: client)
    assert pricing_repository.fetch_category_price("Star Maps", "SIZE_12X12") == 250.0
    client.table.assert_called_with("frame_size_prices")

def test_fetch_category_price_no_row(monkeypatch):
    monkeypatch.setattr("backend.infra.supabase_client.get_supabase", lambda: _client_returning([]))
    assert pricing_repository.fetch_category_price("Star Maps", "SIZE_12X12") is None

@pytest.mark.parametrize("stored", [None, 0, -5])
def test_fetch_category_price_non_positive_is_a_miss(monkeypatch, stored):
    client = _client_returning([{"id": "fp-1", "price": stored, "version": 1}])
    monkeypatch.setattr("backend.infra.supabase_client.get_supabase", lambda: client)
    assert pricing_repository.fetch_category_price("Star Maps", "SIZE_12X12") is None

def test_list_categories(monkeypatch):
    rows = [{"id": "cat-1", "name": "City Maps", "slug": "city-maps"}]
    client = _client_returning(rows)
    monkeypatch.setattr("backend.infra.supabase_client.get_supabase", lambda: client)
    assert pricing_repository.list_categories() == rows
    client.table.assert_called_with("categories")
