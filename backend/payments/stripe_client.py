"""
Adaptateur Stripe: centralise les appels et la configuration Stripe (PaymentIntents).
"""
import stripe
from typing import Any, Dict, Optional
from backend import config

# module backend.payments.stripe_client
def require_stripe() -> stripe:
    """
    Prépare et retourne le module stripe prêt à l’emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY si disponible.
    - Borne la durée des appels HTTP (STRIPE_TIMEOUT_SECONDS): un timeout échoue vite.
    - En absence de clé, les appels Stripe échoueront côté SDK (AuthenticationError).
    """
    if config.STRIPE_SECRET_KEY:
        stripe.api_key = config.STRIPE_SECRET_KEY
    stripe.default_http_client = stripe.RequestsClient(timeout=config.STRIPE_TIMEOUT_SECONDS)
    return stripe

def is_configured() -> bool:
    return bool(config.STRIPE_SECRET_KEY)

def retrieve_payment_intent(payment_intent_id: str) -> Dict[str, Any]:
    """
    Récupère un PaymentIntent par son identifiant.
    Retour: dict incluant "id", "status", "amount", "currency", "metadata".
    """
    require_stripe()
    intent = stripe.PaymentIntent.retrieve(payment_intent_id)
    return _as_dict(intent)

def create_payment_intent(*, amount_cents: int, currency: str, metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Crée un PaymentIntent (paiement par carte).
    Retour: dict incluant "id" et "client_secret".
    """
    require_stripe()
    intent = stripe.PaymentIntent.create(
        amount=amount_cents,
        currency=currency,
        payment_method_types=["card"],
        metadata=metadata or {},
    )
    return _as_dict(intent)

def _as_dict(obj: Any) -> Dict[str, Any]:
    # stripe retourne un StripeObject; on le traite comme dict-compatible
    if isinstance(obj, dict):
        return dict(obj)
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {k: getattr(obj, k) for k in ("id", "status", "client_secret", "amount", "currency") if hasattr(obj, k)}
