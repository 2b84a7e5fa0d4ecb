# module backend.checkout.views

"""Endpoint de finalisation du checkout.
- POST /api/v1/orders: vérifie le paiement Stripe, crée la commande et ses articles, envoie la confirmation.
Les erreurs CheckoutError (400/500) sont rendues par le handler de app_setup.exceptions.
"""
from typing import Any, Dict
import logging

from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from backend.utils.rate_limit import optional_rate_limit
from backend.orders.fixtures import TestFixtureStrategy, get_fixture_strategy
from backend.checkout import service as checkout_service
from backend.checkout.errors import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/orders", tags=["Checkout API"])


@router.post("", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_order(request: Request, fixtures: TestFixtureStrategy = Depends(get_fixture_strategy)):
    """Crée la commande à partir du panier et du PaymentIntent confirmé.
    Body attendu:
    {
      "items": [{id, productId, name, price, quantity, frameSize, frameType, engravingText?, location?}, ...],
      "shippingInfo": {fullName, email, phone, address, city, postalCode, country},
      "paymentIntentId": "pi_..."
    }
    - 201 {id, status: "success", message, total}
    - 400 panier invalide ou paiement non confirmé, 500 si l'en-tête de commande n'a pas pu être écrit
    """
    try:
        body: Dict[str, Any] = await request.json()
    except Exception:
        raise ValidationError("Corps JSON invalide")
    if not isinstance(body, dict):
        raise ValidationError("Corps JSON invalide")

    confirmation = await run_in_threadpool(
        checkout_service.finalize_checkout,
        body.get("items"),
        body.get("shippingInfo"),
        body.get("paymentIntentId"),
        fixtures,
    )
    return JSONResponse(status_code=201, content=confirmation.to_response())
