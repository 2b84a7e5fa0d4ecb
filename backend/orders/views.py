# module backend.orders.views

"""Endpoints de consultation et de suivi des commandes.
- GET /api/v1/orders/{order_id}: commande + articles (total tel qu'enregistré au checkout).
- PATCH /api/v1/orders/{order_id}: mise à jour admin (statut, paiement, adresse).
  Le passage à SHIPPED/DELIVERED déclenche l'e-mail de suivi (best-effort).
"""
from typing import Any, Dict
import logging

from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from backend.utils.security import require_admin
from backend.orders import service as orders_service
from backend.orders.models import OrderUpdate, SHIPPING_NOTIFY_STATUSES
from backend.notifications import service as notifications_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/orders", tags=["Orders API"])


@router.get("/{order_id}")
def get_order(order_id: str):
    order = orders_service.get_order_with_items(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return JSONResponse(order)


@router.patch("/{order_id}")
async def patch_order(order_id: str, request: Request, user: dict = Depends(require_admin)):
    """Met à jour une commande.
    - 400 si le body est invalide (champ inconnu, statut hors enum)
    - 404 si la commande n'existe pas
    """
    try:
        body: Dict[str, Any] = await request.json()
        update = OrderUpdate.model_validate(body)
    except PydanticValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False, include_input=False))
    except Exception:
        raise HTTPException(status_code=400, detail="Invalid request data")

    before = orders_service.get_order_with_items(order_id)
    if not before:
        raise HTTPException(status_code=404, detail="Order not found")

    try:
        updated = orders_service.update_order(order_id, update.to_row())
    except orders_service.OrderPersistenceError as e:
        logger.exception("orders.patch failed order_id=%s", order_id)
        raise HTTPException(status_code=500, detail=str(e))
    if not updated:
        raise HTTPException(status_code=404, detail="Order not found")

    logger.info("orders.patch order_id=%s by=%s fields=%s", order_id, user.get("email"), sorted(update.to_row()))

    if update.status in SHIPPING_NOTIFY_STATUSES and before.get("status") != update.status.value:
        try:
            result = notifications_service.send_shipping_update(updated, update.status.value)
            if not (result or {}).get("success"):
                logger.warning("orders.shipping_notification_failed order_id=%s error=%s", order_id, (result or {}).get("error"))
        except Exception:
            logger.exception("orders.shipping_notification_failed order_id=%s", order_id)

    return JSONResponse(updated)
