"""Cas d'usage 'checkout': finalisation d'une commande après paiement.
Étapes (linéaires, sans retour arrière):
  1) validation du panier et des coordonnées         -> ValidationError
  2) vérification du PaymentIntent auprès de Stripe  -> PaymentRejected
  3) calcul des totaux (sous-total + frais de port fixes)
  4) écriture de l'en-tête de commande               -> PersistenceError
  5) écriture des articles, un par un: un échec est loggé et l'article ignoré
  6) e-mail de confirmation best-effort
  7) réponse OrderConfirmation
Le total est calculé une fois depuis le panier vérifié et n'est jamais recalculé
depuis les articles enregistrés.
"""
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging

from pydantic import ValidationError as PydanticValidationError

from backend import config
from backend.orders import service as orders_service
from backend.orders.fixtures import TestFixtureStrategy
from backend.orders.models import OrderStatus, PaymentStatus
from backend.orders.repository import DuplicateOrderError
from backend.payments import service as payments_service
from backend.notifications import service as notifications_service
from .errors import ValidationError, PaymentRejected, PersistenceError
from .models import CheckoutRequest, OrderConfirmation, Totals

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Précision suffisante pour quantifier au centime tout total borné par le panier
TOTALS_PRECISION = 50

def validate_checkout(items: Any, shipping_info: Any, payment_ref: Any) -> CheckoutRequest:
    try:
        return CheckoutRequest.model_validate({
            "items": items,
            "shippingInfo": shipping_info,
            "paymentIntentId": payment_ref,
        })
    except PydanticValidationError as e:
        details = e.errors(include_url=False, include_context=False, include_input=False)
        logger.info("checkout.validation_failed errors=%s", len(details))
        raise ValidationError(details=details) from e

def compute_totals(lines: Sequence[Mapping[str, Any]]) -> Totals:
    """Sous-total = somme(prix unitaire x quantité); total = sous-total + frais de port."""
    with localcontext() as ctx:
        ctx.prec = TOTALS_PRECISION
        subtotal = sum(
            (Decimal(str(line["unit_price"])) * int(line["quantity"]) for line in lines),
            Decimal("0"),
        )
        shipping = Decimal(str(config.SHIPPING_FEE))
        total = (subtotal + shipping).quantize(CENT, rounding=ROUND_HALF_UP)
        return Totals(
            subtotal=float(subtotal.quantize(CENT, rounding=ROUND_HALF_UP)),
            shipping=float(shipping),
            total=float(total),
        )

def _verify_payment(payment_ref: str) -> None:
    try:
        verification = payments_service.verify_payment(payment_ref)
    except payments_service.PaymentVerificationFailed as e:
        logger.warning("checkout.payment_rejected payment_intent_id=%s kind=%s error=%s", payment_ref, e.kind, e)
        raise PaymentRejected("Payment verification error", reason=e.kind) from e
    if not verification.succeeded:
        logger.warning(
            "checkout.payment_rejected payment_intent_id=%s kind=status status=%s",
            payment_ref, verification.raw_status,
        )
        raise PaymentRejected(f"Payment status is {verification.raw_status or 'unknown'}", reason="status")

def _header_fields(request: CheckoutRequest, totals: Totals) -> Dict[str, Any]:
    shipping = request.shipping_info
    location = request.first_location()
    return {
        "customer_name": shipping.full_name,
        "customer_email": shipping.email,
        "phone": shipping.phone,
        "shipping_address": shipping.address,
        "city": shipping.city,
        "postal_code": shipping.postal_code,
        "country": shipping.country,
        "latitude": location.latitude if location else None,
        "longitude": location.longitude if location else None,
        "map_address": location.address if location else None,
        "total": totals.total,
        "status": OrderStatus.PROCESSING.value,
        "payment_status": PaymentStatus.PAID.value,
        "payment_intent_id": request.payment_intent_id,
    }

def _already_processed(existing: Mapping[str, Any], expected: int) -> OrderConfirmation:
    order_id = str(existing.get("id"))
    logger.info("checkout.duplicate payment_intent_id=%s order_id=%s", existing.get("payment_intent_id"), existing.get("id"))
    return OrderConfirmation(
        order_id=order_id,
        total=float(existing.get("total") or 0),
        items_expected=expected,
        items_persisted=len(orders_service.list_items(order_id)),
        duplicate=True,
    )

def _persist_items(order_id: str, lines: Sequence[Mapping[str, Any]], fixtures: Optional[TestFixtureStrategy]) -> List[Dict[str, Any]]:
    persisted: List[Dict[str, Any]] = []
    for position, line in enumerate(lines, start=1):
        try:
            row = orders_service.create_order_item(order_id, line, fixtures=fixtures)
        except Exception:
            logger.exception(
                "checkout.item_failed order_id=%s position=%s product_id=%s price=%s",
                order_id, position, line.get("product_id"), line.get("unit_price"),
            )
            continue
        persisted.append({**row, "name": line.get("name")})
    if len(persisted) < len(lines):
        # Signal de réconciliation: le total facturé couvre des articles non enregistrés
        logger.warning(
            "checkout.items_mismatch order_id=%s expected=%s persisted=%s",
            order_id, len(lines), len(persisted),
        )
    return persisted

def _notify(order: Mapping[str, Any], items: Sequence[Mapping[str, Any]]) -> None:
    try:
        result = notifications_service.send_order_confirmation(order, items)
        if not (result or {}).get("success"):
            logger.warning("checkout.notification_failed order_id=%s error=%s", order.get("id"), (result or {}).get("error"))
    except Exception:
        logger.exception("checkout.notification_failed order_id=%s", order.get("id"))

def finalize_checkout(
    items: Any,
    shipping_info: Any,
    payment_ref: Any,
    fixtures: Optional[TestFixtureStrategy] = None,
) -> OrderConfirmation:
    """
    Transforme un panier + un PaymentIntent confirmé en commande persistée.
    - Soulève ValidationError, PaymentRejected ou PersistenceError (états terminaux d'échec).
    - Retourne OrderConfirmation en cas de succès, même si des articles ou l'e-mail ont échoué.
    - Un PaymentIntent déjà utilisé renvoie la commande existante (duplicate=True) sans nouvelle écriture.
    """
    request = validate_checkout(items, shipping_info, payment_ref)
    lines = [item.to_line() for item in request.items]
    logger.info(
        "checkout.start payment_intent_id=%s items=%s email=%s",
        request.payment_intent_id, len(lines), request.shipping_info.email,
    )

    _verify_payment(request.payment_intent_id)

    totals = compute_totals(lines)

    existing = orders_service.find_order_by_payment_ref(request.payment_intent_id)
    if existing:
        return _already_processed(existing, len(lines))

    try:
        order = orders_service.create_order_header(_header_fields(request, totals))
    except DuplicateOrderError as e:
        existing = orders_service.find_order_by_payment_ref(request.payment_intent_id)
        if existing:
            return _already_processed(existing, len(lines))
        raise PersistenceError(details=str(e)) from e
    except orders_service.OrderPersistenceError as e:
        raise PersistenceError(details=str(e)) from e

    order_id = str(order.get("id"))
    logger.info("checkout.order_created order_id=%s total=%s", order_id, totals.total)

    persisted = _persist_items(order_id, lines, fixtures)

    _notify(order, persisted)

    return OrderConfirmation(
        order_id=order_id,
        total=totals.total,
        items_expected=len(lines),
        items_persisted=len(persisted),
    )
