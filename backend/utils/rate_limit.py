"""
Limitation de débit des endpoints de paiement (POST /api/v1/orders, POST /api/v1/payment-intents).
Ordre de décision pour chaque requête:
  1) LOCAL_RATE_LIMIT_FALLBACK=1: fenêtre glissante en mémoire (app.state._rl_store)
  2) app.state.rate_limit_enabled à False: pas de limite
  3) sinon fastapi-limiter (Redis initialisé par le lifespan); un 429 remonte tel quel
La clé combine l'appelant (jeton hashé, sinon IP) et le chemin: un client qui rejoue
un paiement ne consomme pas le quota de la création de PaymentIntent.
"""
from typing import Any, Dict, List
import hashlib
import logging
import os
import time
from urllib.parse import urlparse

from fastapi import HTTPException, Request, Response

from backend.utils.security import COOKIE_NAME

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = "Too Many Requests"


def caller_key(request: Request) -> str:
    """'user:<sha256[:16]>:<path>' si un jeton est présent, sinon 'ip:<hôte>:<path>'."""
    auth_header = request.headers.get("Authorization", "")
    token = auth_header[7:].strip() if auth_header.startswith("Bearer ") else request.cookies.get(COOKIE_NAME)
    path = request.url.path
    if token:
        digest = hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]
        return f"user:{digest}:{path}"
    host = request.client.host if request.client else "local"
    return f"ip:{host}:{path}"


def _local_window(request: Request, key: str, times: int, seconds: int) -> None:
    now = time.time()
    store: Dict[str, List[float]] = getattr(request.app.state, "_rl_store", {})
    recent = [t for t in store.get(key, []) if now - t < seconds]
    if len(recent) >= times:
        logger.warning("rate_limit.local_exceeded key=%s", key)
        raise HTTPException(status_code=429, detail=TOO_MANY_REQUESTS)
    recent.append(now)
    store[key] = recent
    request.app.state._rl_store = store


def optional_rate_limit(times: int, seconds: int):
    """Dépendance FastAPI: `times` requêtes par fenêtre de `seconds` et par appelant."""
    async def _dep(request: Request, response: Response):
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            _local_window(request, caller_key(request), times, seconds)
            return

        if getattr(request.app.state, "rate_limit_enabled", None) is False:
            return

        try:
            from fastapi_limiter.depends import RateLimiter

            async def _identifier(req: Request) -> str:
                return caller_key(req)

            return await RateLimiter(times=times, seconds=seconds, identifier=_identifier)(request, response)
        except HTTPException:
            raise
        except Exception as e:
            # Redis indisponible: la commande passe sans limite
            logger.warning("rate_limit.limiter_unavailable path=%s error=%s", request.url.path, e)
            return
    return _dep


def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    """État exposé par /health/checkout: activé, limiter prêt, backend et cible Redis."""
    enabled = getattr(request.app.state, "rate_limit_enabled", None)
    try:
        from fastapi_limiter import FastAPILimiter
        ready = getattr(FastAPILimiter, "redis", None) is not None
    except ImportError:
        ready = False

    info: Dict[str, Any] = {
        "enabled": bool(enabled) if enabled is not None else None,
        "ready": ready,
        "backend": "redis" if ready else None,
    }
    redis_url = os.getenv("RATE_LIMIT_REDIS_URL")
    if ready and redis_url:
        target = urlparse(redis_url)
        try:
            port = target.port
        except ValueError:
            port = None
        info["redis"] = {"scheme": target.scheme, "host": target.hostname, "port": port}
    return info
