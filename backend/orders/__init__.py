"""
Module 'orders' (feature-first): écriture/lecture des commandes et de leurs articles.
"""

from .models import OrderStatus, PaymentStatus, OrderUpdate
from .fixtures import TestFixtureStrategy, NoFixtures, AutoCreateMissingProducts, get_fixture_strategy
from .repository import DuplicateOrderError
from .service import (
    OrderPersistenceError,
    create_order_header,
    create_order_item,
    find_order_by_payment_ref,
    get_order_with_items,
    update_order,
)

__all__ = [
    # models
    "OrderStatus",
    "PaymentStatus",
    "OrderUpdate",
    # fixtures
    "TestFixtureStrategy",
    "NoFixtures",
    "AutoCreateMissingProducts",
    "get_fixture_strategy",
    # services
    "DuplicateOrderError",
    "OrderPersistenceError",
    "create_order_header",
    "create_order_item",
    "find_order_by_payment_ref",
    "get_order_with_items",
    "update_order",
]
