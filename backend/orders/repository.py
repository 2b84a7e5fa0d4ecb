"""
Accès aux données pour la feature 'orders' (tables orders, order_items, products).
Écritures via le client service-role (bypass RLS). Les erreurs d'écriture remontent
à l'appelant: c'est le service qui décide (fatal pour l'en-tête, ignoré pour un article).
"""
from typing import Any, Dict, List, Optional
import logging

from postgrest.exceptions import APIError

import backend.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"

ORDER_COLUMNS = (
    "id, customer_name, customer_email, phone, shipping_address, city, postal_code, country, "
    "latitude, longitude, map_address, total, status, payment_status, payment_intent_id, created_at"
)
ITEM_COLUMNS = "id, order_id, product_id, quantity, price, frame_size, frame_type, engraving_text"

class DuplicateOrderError(Exception):
    """Une commande existe déjà pour ce payment_intent_id (contrainte d'unicité)."""

def is_unique_violation(exc: BaseException) -> bool:
    return isinstance(exc, APIError) and str(getattr(exc, "code", "") or "") == UNIQUE_VIOLATION

def _first_row(res, fallback: Dict[str, Any]) -> Dict[str, Any]:
    # Certaines versions de supabase-py ne renvoient pas les lignes insérées
    rows = getattr(res, "data", None) or []
    if isinstance(rows, list) and rows:
        return rows[0]
    return fallback

# module backend.orders.repository
def insert_order(row: Dict[str, Any]) -> Dict[str, Any]:
    """Insère l'en-tête de commande. DuplicateOrderError si payment_intent_id existe déjà."""
    try:
        res = supabase_client.get_service_supabase().table("orders").insert(row).execute()
    except APIError as e:
        if is_unique_violation(e):
            raise DuplicateOrderError(row.get("payment_intent_id") or "") from e
        raise
    return _first_row(res, dict(row))

def insert_order_item(row: Dict[str, Any]) -> Dict[str, Any]:
    res = supabase_client.get_service_supabase().table("order_items").insert(row).execute()
    return _first_row(res, dict(row))

def get_order(order_id: str) -> Optional[dict]:
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("orders")
            .select(ORDER_COLUMNS)
            .eq("id", order_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("orders.repository.get_order failed id=%s", order_id)
        return None

def find_order_by_payment_intent(payment_intent_id: str) -> Optional[dict]:
    """Lit la commande liée à un PaymentIntent (laisse remonter les erreurs)."""
    res = (
        supabase_client.get_service_supabase()
        .table("orders")
        .select(ORDER_COLUMNS)
        .eq("payment_intent_id", payment_intent_id)
        .limit(1)
        .execute()
    )
    rows = res.data or []
    return rows[0] if rows else None

def list_order_items(order_id: str) -> List[dict]:
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("order_items")
            .select(ITEM_COLUMNS + ", products(name, images)")
            .eq("order_id", order_id)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("orders.repository.list_order_items failed order_id=%s", order_id)
        return []

def update_order(order_id: str, data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("orders")
            .update(data)
            .eq("id", order_id)
            .execute()
        )
        rows = getattr(res, "data", None) or []
        if isinstance(rows, list) and rows:
            return rows[0]
        return None
    except Exception:
        logger.exception("orders.repository.update_order failed id=%s data=%s", order_id, data)
        return None

# --- Produits (lecture / création de données de test) ---

def get_product(product_id: str) -> Optional[dict]:
    res = (
        supabase_client.get_service_supabase()
        .table("products")
        .select("id, name, price, categories(name)")
        .eq("id", product_id)
        .limit(1)
        .execute()
    )
    rows = res.data or []
    return rows[0] if rows else None

def insert_product(row: Dict[str, Any]) -> Dict[str, Any]:
    res = supabase_client.get_service_supabase().table("products").insert(row).execute()
    return _first_row(res, dict(row))
