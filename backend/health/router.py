from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from backend.health.service import health_supabase_info
from backend.utils.rate_limit import rate_limit_health_info
from backend.payments import stripe_client

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/supabase")
def health_supabase():
    return JSONResponse(health_supabase_info())

@router.get("/checkout")
def health_checkout(request: Request):
    # État des dépendances du checkout (sans appel réseau)
    return {
        "stripe_configured": stripe_client.is_configured(),
        "rate_limit": rate_limit_health_info(request),
    }
