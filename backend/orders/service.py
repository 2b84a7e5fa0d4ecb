"""Couche service de la feature Orders (écriture et lecture des commandes).
Rôles:
- Écrire l'en-tête de commande (une seule écriture, pas de retry, échec fatal pour l'appelant).
- Écrire un article de commande (une écriture par article; l'appelant décide d'ignorer l'échec).
- Relire une commande avec ses articles, retrouver une commande par PaymentIntent.
- Appliquer une mise à jour admin (statuts, adresse).
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4
import logging

from backend.pricing import service as pricing_service
from . import repository
from .fixtures import NoFixtures, TestFixtureStrategy
from .repository import DuplicateOrderError

logger = logging.getLogger(__name__)

class OrderPersistenceError(Exception):
    pass

def create_order_header(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Insère l'en-tête (id et created_at générés ici) et retourne la ligne écrite.
    - DuplicateOrderError si une commande existe déjà pour ce payment_intent_id.
    - OrderPersistenceError pour toute autre erreur d'écriture.
    """
    row = {
        "id": str(uuid4()),
        "created_at": datetime.now(timezone.utc).isoformat(),
        **fields,
    }
    try:
        return repository.insert_order(row)
    except DuplicateOrderError:
        raise
    except Exception as e:
        logger.exception("orders.create_order_header failed payment_intent_id=%s", row.get("payment_intent_id"))
        raise OrderPersistenceError(str(e) or "Erreur d'écriture de la commande") from e

def _authoritative_price(line: Mapping[str, Any]) -> float:
    # Catégorie du produit pour la cascade de prix (catégorie par défaut si inconnue)
    product = repository.get_product(str(line.get("product_id") or ""))
    category = ((product or {}).get("categories") or {}).get("name")
    return pricing_service.resolve_price(str(line.get("frame_size") or ""), category)

def create_order_item(order_id: str, line: Mapping[str, Any], fixtures: Optional[TestFixtureStrategy] = None) -> Dict[str, Any]:
    """Insère un article de commande et retourne la ligne écrite.
    - Le prix unitaire du panier est conservé; s'il manque, le prix de référence est résolu.
    - Un prix résolu à 0 refuse l'écriture (ValueError).
    - Les erreurs remontent: l'orchestrateur transforme l'échec en article ignoré.
    """
    (fixtures or NoFixtures()).prepare_item(line)

    unit_price = line.get("unit_price")
    if unit_price is None:
        unit_price = _authoritative_price(line)
        if unit_price <= 0:
            raise ValueError(f"Prix introuvable pour le format {line.get('frame_size')}")

    row = {
        "id": str(uuid4()),
        "order_id": order_id,
        "product_id": line.get("product_id"),
        "quantity": int(line.get("quantity") or 0),
        "price": float(unit_price),
        "frame_size": line.get("frame_size"),
        "frame_type": line.get("frame_type"),
        "engraving_text": line.get("engraving_text") or None,
    }
    return repository.insert_order_item(row)

def find_order_by_payment_ref(payment_ref: str) -> Optional[dict]:
    """Commande existante pour ce PaymentIntent, None si absente ou si la lecture échoue."""
    try:
        return repository.find_order_by_payment_intent(payment_ref)
    except Exception:
        logger.exception("orders.find_order_by_payment_ref failed payment_intent_id=%s", payment_ref)
        return None

def list_items(order_id: str) -> List[dict]:
    """Articles enregistrés pour une commande ([] si la lecture échoue)."""
    return repository.list_order_items(order_id)

def get_order_with_items(order_id: str) -> Optional[dict]:
    order = repository.get_order(order_id)
    if not order:
        return None
    items: List[dict] = repository.list_order_items(order_id)
    return {**order, "items": items}

def update_order(order_id: str, changes: Mapping[str, Any]) -> Optional[dict]:
    """Applique une mise à jour partielle; None si la commande n'existe pas."""
    existing = repository.get_order(order_id)
    if not existing:
        return None
    if not changes:
        return existing
    updated = repository.update_order(order_id, dict(changes))
    if updated is None:
        raise OrderPersistenceError(f"Mise à jour impossible pour la commande {order_id}")
    return updated
