import logging

import stripe
from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from backend.utils.rate_limit import optional_rate_limit
from backend.payments import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/payment-intents", tags=["Payments API"])

class PaymentIntentRequest(BaseModel):
    amount: float = Field(gt=0)

# module backend.payments.views
@router.post("", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_payment_intent(request: Request):
    """
    Crée un PaymentIntent Stripe pour le montant du panier.
    - Entrée JSON: { "amount": <nombre > 0> }
    - Réponse: { "clientSecret": "pi_..._secret_..." }
    - Erreurs:
      - 400 {error, details} si le montant est invalide
      - 500 {error} si Stripe n'est pas configuré
      - 500 {error, message, type} si Stripe refuse la création
    """
    try:
        body = await request.json()
    except Exception:
        body = None
    try:
        data = PaymentIntentRequest.model_validate(body)
    except ValidationError as e:
        logger.info("payments.create_intent invalid payload errors=%s", e.error_count())
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request data", "details": e.errors(include_url=False, include_context=False)},
        )

    try:
        return payments_service.create_payment_intent(data.amount)
    except payments_service.GatewayMisconfigured as e:
        logger.error("payments.create_intent gateway misconfigured")
        return JSONResponse(status_code=500, content={"error": str(e)})
    except stripe.StripeError as e:
        logger.exception("Erreur create_payment_intent (Stripe)")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Payment processing error",
                "message": getattr(e, "user_message", None) or str(e),
                "type": type(e).__name__,
            },
        )
