"""
Gestionnaires d'exceptions de l'API.
- HTTPException: body JSON FastAPI standard {"detail": ...}
- CheckoutError: body métier {"error", "message"?, "details"?} avec le code porté par l'exception
"""
import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from backend.checkout.errors import CheckoutError

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))

    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        if exc.status_code >= 500:
            logger.error("checkout.failed path=%s error=%s details=%s", request.url.path, exc.error, exc.details)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
