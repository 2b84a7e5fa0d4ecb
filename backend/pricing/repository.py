"""
Accès aux données pour la feature 'pricing' (tables categories, frame_size_prices).
- Les lectures utilisées par le résolveur de prix laissent remonter les erreurs:
  c'est le service qui décide du repli sur la table statique.
- Les écritures (admin) sont versionnées: chaque mise à jour incrémente 'version'.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

import backend.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

# module backend.pricing.repository
def fetch_category_price(category_name: str, frame_size: str) -> Optional[float]:
    """
    Prix persisté pour le couple (catégorie, format), ou None si aucune ligne
    ou si le prix enregistré est nul ou négatif (la cascade continue).
    Jointure interne sur categories pour filtrer par nom.
    """
    res = (
        supabase_client.get_supabase()
        .table("frame_size_prices")
        .select("id, price, version, categories!inner(name)")
        .eq("categories.name", category_name)
        .eq("frame_size", frame_size)
        .limit(1)
        .execute()
    )
    rows = res.data or []
    if not rows:
        return None
    price = float(rows[0].get("price") or 0)
    if price <= 0:
        logger.warning("pricing.repository.non_positive_price category=%s frame_size=%s", category_name, frame_size)
        return None
    return price

def fetch_category_prices(category_name: str) -> List[Dict[str, Any]]:
    """Toutes les lignes de prix d'une catégorie (par nom)."""
    res = (
        supabase_client.get_supabase()
        .table("frame_size_prices")
        .select("id, frame_size, price, version, categories!inner(name)")
        .eq("categories.name", category_name)
        .execute()
    )
    return res.data or []

def list_categories() -> List[Dict[str, Any]]:
    res = (
        supabase_client.get_supabase()
        .table("categories")
        .select("id, name, slug")
        .order("name")
        .execute()
    )
    return res.data or []

def fetch_all_frame_prices() -> List[Dict[str, Any]]:
    """Toutes les lignes frame_size_prices, toutes catégories confondues."""
    res = (
        supabase_client.get_supabase()
        .table("frame_size_prices")
        .select("category_id, frame_size, price")
        .execute()
    )
    return res.data or []

def get_category(category_id: str) -> Optional[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("categories")
            .select("id, name, slug")
            .eq("id", category_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("pricing.repository.get_category failed id=%s", category_id)
        return None

def list_frame_prices(category_id: str) -> List[dict]:
    try:
        res = (
            supabase_client.get_supabase()
            .table("frame_size_prices")
            .select("id, category_id, frame_size, price, version, updated_at")
            .eq("category_id", category_id)
            .order("frame_size")
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("pricing.repository.list_frame_prices failed category_id=%s", category_id)
        return []

def upsert_frame_price(category_id: str, frame_size: str, price: float) -> Optional[dict]:
    """
    Crée ou met à jour le prix (catégorie, format) en incrémentant la version.
    Retourne la ligne écrite, ou None en cas d'erreur.
    """
    now = datetime.now(timezone.utc).isoformat()
    try:
        client = supabase_client.get_service_supabase()
        existing = (
            client.table("frame_size_prices")
            .select("id, version")
            .eq("category_id", category_id)
            .eq("frame_size", frame_size)
            .limit(1)
            .execute()
        )
        rows = existing.data or []
        if rows:
            current = rows[0]
            payload = {"price": price, "version": int(current.get("version") or 0) + 1, "updated_at": now}
            res = client.table("frame_size_prices").update(payload).eq("id", current["id"]).execute()
            written = {"id": current["id"], "category_id": category_id, "frame_size": frame_size, **payload}
        else:
            payload = {"category_id": category_id, "frame_size": frame_size, "price": price, "version": 1, "updated_at": now}
            res = client.table("frame_size_prices").insert(payload).execute()
            written = dict(payload)
        data = getattr(res, "data", None) or []
        return data[0] if isinstance(data, list) and data else written
    except Exception:
        logger.exception("pricing.repository.upsert_frame_price failed category_id=%s frame_size=%s", category_id, frame_size)
        return None

def delete_frame_price(category_id: str, price_id: str) -> bool:
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("frame_size_prices")
            .delete()
            .eq("id", price_id)
            .eq("category_id", category_id)
            .execute()
        )
        return bool(res.data)
    except Exception:
        logger.exception("pricing.repository.delete_frame_price failed id=%s", price_id)
        return False
