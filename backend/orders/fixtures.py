"""
Stratégies de données de test pour l'écriture des articles de commande.
- NoFixtures: comportement de production, ne fait rien.
- AutoCreateMissingProducts: crée le produit référencé s'il n'existe pas, pour garder
  des données de test ad hoc cohérentes. Interdit en production.
La stratégie est injectée (dépendance FastAPI get_fixture_strategy), le chemin d'écriture
ne teste aucun drapeau d'environnement.
"""
from typing import Any, Mapping
import logging

from backend import config
from . import repository

logger = logging.getLogger(__name__)


class TestFixtureStrategy:
    """Hook appelé avant l'écriture de chaque article de commande."""

    __test__ = False  # pas une classe de test pytest

    def prepare_item(self, line: Mapping[str, Any]) -> None:
        raise NotImplementedError


class NoFixtures(TestFixtureStrategy):
    def prepare_item(self, line: Mapping[str, Any]) -> None:
        return None


class AutoCreateMissingProducts(TestFixtureStrategy):
    def __init__(self):
        if config.is_production():
            raise RuntimeError("AutoCreateMissingProducts est interdit en production")

    def prepare_item(self, line: Mapping[str, Any]) -> None:
        product_id = str(line.get("product_id") or "")
        if not product_id or repository.get_product(product_id):
            return
        logger.info("orders.fixtures creating test product product_id=%s", product_id)
        repository.insert_product({
            "id": product_id,
            "name": line.get("name") or "Test product",
            "slug": f"test-product-{line.get('line_id') or product_id}",
            "description": "Test product created for order processing",
            "price": line.get("unit_price"),
            "images": [],
            "stock": 10,
            "frame_types": line.get("frame_type"),
            "frame_sizes": line.get("frame_size"),
        })


def get_fixture_strategy() -> TestFixtureStrategy:
    """
    Sélectionne la stratégie selon la configuration:
    AutoCreateMissingProducts seulement hors production ET si AUTO_CREATE_TEST_PRODUCTS=1.
    """
    if not config.is_production() and config.AUTO_CREATE_TEST_PRODUCTS:
        return AutoCreateMissingProducts()
    return NoFixtures()
