"""
Cas d'usage 'payments': vérification d'un PaymentIntent et création d'intentions de paiement.
"""
from dataclasses import dataclass
from typing import Any, Dict
import logging

import stripe

from backend import config
from . import stripe_client

logger = logging.getLogger(__name__)

SUCCEEDED = "succeeded"

@dataclass(frozen=True)
class PaymentVerification:
    succeeded: bool
    raw_status: str

class PaymentVerificationFailed(Exception):
    """
    La passerelle n'a pas pu confirmer le paiement.
    - kind="unreachable": réseau/timeout, Stripe injoignable
    - kind="rejected": Stripe a répondu par une erreur (clé, intent inconnu, ...)
    """
    def __init__(self, message: str, *, kind: str, payment_ref: str = ""):
        super().__init__(message)
        self.kind = kind
        self.payment_ref = payment_ref

class GatewayMisconfigured(Exception):
    pass

def verify_payment(payment_ref: str) -> PaymentVerification:
    """
    Lit l'état courant du PaymentIntent auprès de Stripe.
    - Retourne PaymentVerification(succeeded, raw_status).
    - Soulève PaymentVerificationFailed pour toute erreur passerelle.
    """
    if not stripe_client.is_configured():
        raise PaymentVerificationFailed("STRIPE_SECRET_KEY manquant", kind="rejected", payment_ref=payment_ref)
    try:
        intent = stripe_client.retrieve_payment_intent(payment_ref)
    except stripe.APIConnectionError as e:
        raise PaymentVerificationFailed(str(e) or "Stripe injoignable", kind="unreachable", payment_ref=payment_ref) from e
    except stripe.StripeError as e:
        raise PaymentVerificationFailed(str(e) or "Erreur Stripe", kind="rejected", payment_ref=payment_ref) from e

    status = str((intent or {}).get("status") or "")
    return PaymentVerification(succeeded=(status == SUCCEEDED), raw_status=status)

def create_payment_intent(amount: float) -> Dict[str, Any]:
    """
    Crée un PaymentIntent pour un montant (unités monétaires) et retourne {"clientSecret": ...}.
    - Le montant est converti en centimes (arrondi).
    - GatewayMisconfigured si la clé Stripe est absente; les erreurs Stripe remontent telles quelles.
    """
    if not stripe_client.is_configured():
        raise GatewayMisconfigured("Stripe is not properly configured")
    amount_cents = int(round(float(amount) * 100))
    logger.info("payments.create_intent amount_cents=%s currency=%s", amount_cents, config.STRIPE_CURRENCY)
    intent = stripe_client.create_payment_intent(
        amount_cents=amount_cents,
        currency=config.STRIPE_CURRENCY,
        metadata={"source": "maps_and_memories_website"},
    )
    logger.info("payments.create_intent ok id=%s", intent.get("id"))
    return {"clientSecret": intent.get("client_secret")}
