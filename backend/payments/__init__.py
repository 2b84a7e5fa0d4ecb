"""
Module 'payments' (feature-first): point d'entrée public.
Réunit le client Stripe (PaymentIntents) et la vérification de paiement utilisée par le checkout.
"""

from .stripe_client import require_stripe, retrieve_payment_intent
from .service import (
    PaymentVerification,
    PaymentVerificationFailed,
    GatewayMisconfigured,
    verify_payment,
    create_payment_intent,
)

__all__ = [
    # stripe
    "require_stripe",
    "retrieve_payment_intent",
    # services
    "PaymentVerification",
    "PaymentVerificationFailed",
    "GatewayMisconfigured",
    "verify_payment",
    "create_payment_intent",
]
