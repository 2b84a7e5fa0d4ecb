# module backend.app
from fastapi import FastAPI

from backend.app_setup.lifespan import lifespan as app_lifespan
from backend.app_setup.middlewares import register_basic_middlewares
from backend.app_setup.exceptions import register_exception_handlers
from backend.app_setup.routers import register_routers

def create_app() -> FastAPI:
    """
    Crée et configure l'instance FastAPI de l'API de checkout.
    Étapes et ordre:
      1) register_basic_middlewares: CORS, TrustedHost, ProxyHeaders.
      2) register_exception_handlers: HTTPException et CheckoutError -> JSON.
      3) register_routers: checkout, commandes, PaymentIntents, tarification, admin, health.
    Retourne:
      - FastAPI: l'application prête à être servie (ASGI).
    """
    app = FastAPI(title="Maps & Memories Checkout API", lifespan=app_lifespan)
    register_basic_middlewares(app)
    register_exception_handlers(app)
    register_routers(app)
    return app

# App globale
app = create_app()
