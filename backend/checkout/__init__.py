"""
Module 'checkout': pipeline de finalisation de commande (validation, paiement, persistance, notification).
"""

from .errors import CheckoutError, ValidationError, PaymentRejected, PersistenceError
from .models import CheckoutRequest, OrderConfirmation, Totals
from .service import finalize_checkout, compute_totals, validate_checkout

__all__ = [
    "CheckoutError",
    "ValidationError",
    "PaymentRejected",
    "PersistenceError",
    "CheckoutRequest",
    "OrderConfirmation",
    "Totals",
    "finalize_checkout",
    "compute_totals",
    "validate_checkout",
]
