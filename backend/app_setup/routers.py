"""
Registre central des routers.
- API v1: checkout (POST /orders), orders (GET/PATCH), payment-intents, pricing
- Admin: prix par format et catégorie
- Health: /health, /health/supabase, /health/checkout
"""
from fastapi import FastAPI
from backend.checkout import views as checkout_views
from backend.orders import views as orders_views
from backend.payments import views as payments_views
from backend.pricing import views as pricing_views
from backend.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    L'ordre n'a pas d'impact sauf conflits de chemins: POST /api/v1/orders (checkout)
    et /api/v1/orders/{order_id} (orders) partagent le préfixe sans se recouvrir.
    """
    # API v1
    app.include_router(checkout_views.router)
    app.include_router(orders_views.router)
    app.include_router(payments_views.router)
    app.include_router(pricing_views.router)
    # Admin
    app.include_router(pricing_views.admin_router)
    # Health & monitoring
    app.include_router(health_router)
