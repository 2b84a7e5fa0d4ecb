"""
Cas d'usage 'pricing': résolution du prix unitaire d'un format de cadre.
Cascade (premier résultat gagnant):
  1) prix persisté (catégorie, format)
  2) prix persisté (catégorie par défaut, format)
  3) table statique (porte-clés si alias, sinon table par défaut)
Une erreur de base ne remonte jamais: on loggue et on bascule sur la table statique.
"""
from typing import Any, Dict, List, Optional, Tuple
import logging

from backend import config
from . import repository
from . import fallback
from .sizes import FrameSize

logger = logging.getLogger(__name__)

SOURCE_DATABASE = "database"
SOURCE_DEFAULT_CATEGORY = "default_category"
SOURCE_FALLBACK = "fallback"

def _size_value(frame_size: FrameSize | str) -> str:
    return frame_size.value if isinstance(frame_size, FrameSize) else str(frame_size)

def resolve_price_with_source(frame_size: FrameSize | str, category_name: Optional[str] = None) -> Tuple[float, str]:
    """
    Retourne (prix, source) avec source in {"database", "default_category", "fallback"}.
    - category_name absent => catégorie par défaut (config.DEFAULT_CATEGORY_NAME).
    - Ne lève jamais d'exception; prix 0.0 si le format est inconnu partout (alerte loggée).
    """
    size = _size_value(frame_size)
    default_category = config.DEFAULT_CATEGORY_NAME
    category = category_name or default_category
    try:
        price = repository.fetch_category_price(category, size)
        if price is not None:
            return price, SOURCE_DATABASE
        if category != default_category:
            price = repository.fetch_category_price(default_category, size)
            if price is not None:
                return price, SOURCE_DEFAULT_CATEGORY
    except Exception as e:
        logger.warning("pricing.store_unavailable category=%s frame_size=%s error=%s", category, size, e)

    price = fallback.static_price(size, category, config.KEY_HOLDER_CATEGORY_NAME)
    if price <= 0:
        logger.error("pricing.zero_price category=%s frame_size=%s", category, size)
        return 0.0, SOURCE_FALLBACK
    return price, SOURCE_FALLBACK

def resolve_price(frame_size: FrameSize | str, category_name: Optional[str] = None) -> float:
    price, _ = resolve_price_with_source(frame_size, category_name)
    return price

def lowest_price(category_name: Optional[str] = None) -> float:
    """Prix le plus bas d'une catégorie (base, sinon table statique)."""
    category = category_name or config.DEFAULT_CATEGORY_NAME
    try:
        rows = repository.fetch_category_prices(category)
        prices = [p for p in (float(r.get("price") or 0) for r in rows) if p > 0]
        if prices:
            return min(prices)
    except Exception as e:
        logger.warning("pricing.store_unavailable category=%s error=%s", category, e)
    return fallback.static_lowest(category, config.KEY_HOLDER_CATEGORY_NAME)

def all_category_prices() -> List[Dict[str, Any]]:
    """
    Grille complète: chaque catégorie avec le prix de chaque format.
    Un prix persisté (> 0) l'emporte; sinon la table statique de la catégorie.
    - La lecture des catégories laisse remonter l'erreur (la vue répond 500).
    - Une erreur sur frame_size_prices bascule toute la grille sur la table statique.
    """
    categories = repository.list_categories()
    try:
        rows = repository.fetch_all_frame_prices()
    except Exception as e:
        logger.warning("pricing.store_unavailable scope=all error=%s", e)
        rows = []

    persisted: Dict[str, Dict[str, float]] = {}
    for row in rows:
        price = float(row.get("price") or 0)
        if price > 0:
            persisted.setdefault(str(row.get("category_id")), {})[str(row.get("frame_size"))] = price

    grid: List[Dict[str, Any]] = []
    for category in categories:
        category_id = str(category.get("id"))
        stored = persisted.get(category_id, {})
        static = fallback.STATIC_PRICES[fallback.table_key(category.get("name"), config.KEY_HOLDER_CATEGORY_NAME)]
        prices = []
        for size in FrameSize:
            if size.value in stored:
                price, source = stored[size.value], SOURCE_DATABASE
            elif size.value in static:
                price, source = static[size.value], SOURCE_FALLBACK
            else:
                continue
            prices.append({"id": f"{category_id}-{size.value}", "frameSize": size.value, "price": price, "source": source})
        grid.append({
            "id": category_id,
            "name": category.get("name"),
            "slug": category.get("slug"),
            "frameSizePrices": prices,
        })
    return grid

# --- Écritures explicites (administration des prix) ---

def list_frame_prices(category_id: str) -> List[dict]:
    return repository.list_frame_prices(category_id)

def save_frame_price(category_id: str, frame_size: FrameSize | str, price: float) -> Optional[Dict[str, Any]]:
    """Crée/met à jour le prix d'un format pour une catégorie (version incrémentée)."""
    if price <= 0:
        raise ValueError("Le prix doit être strictement positif")
    return repository.upsert_frame_price(category_id, _size_value(frame_size), float(price))

def delete_frame_price(category_id: str, price_id: str) -> bool:
    return repository.delete_frame_price(category_id, price_id)
