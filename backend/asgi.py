"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: gunicorn + uvicorn workers) importe `backend.asgi:app`.
- La configuration FastAPI (routers, middlewares, handlers d'erreurs, lifespan) est centralisée
  dans backend.app; ce fichier ne fait qu'exposer l'instance `app`.
"""

from backend.app import app

if __name__ == "__main__":
    # Exécution directe en développement local (uvicorn standalone, reload actif)
    import os
    import uvicorn
    uvicorn.run(
        "backend.asgi:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
    )
