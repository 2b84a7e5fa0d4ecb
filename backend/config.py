# backend.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale du backend.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Supabase, Stripe, Resend), CORS/hosts
- Expose les paramètres métier du checkout (frais de port, catégories de prix)
- Les modules lisent ces valeurs via `config.X` au moment de l'appel (monkeypatch en tests)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _env_float(name: str, default: float) -> float:
    try:
        return float(_clean_env(os.getenv(name) or "") or default)
    except ValueError:
        return default

# Environnement d'exécution: "production", "development" ou "test"
APP_ENV = _clean_env(os.getenv("APP_ENV") or "development").lower()

# Supabase: URLs et clés (public/anon/service)
# - SUPABASE_URL peut parfois être sans schéma: on préfixe en https:// si nécessaire
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL") or "")
SUPABASE_ANON = _clean_env(os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_KEY") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# Sécurité / admin
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")
ADMIN_EMAILS = [e.strip() for e in os.getenv("ADMIN_EMAILS", "admin@example.com").split(",") if e.strip()]

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

# Stripe: clés publiques/privées, devise et délai max des appels
STRIPE_PUBLIC_KEY = _clean_env(os.getenv("STRIPE_PUBLIC_KEY") or "")
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
STRIPE_CURRENCY = _clean_env(os.getenv("STRIPE_CURRENCY") or "usd").lower()
STRIPE_TIMEOUT_SECONDS = _env_float("STRIPE_TIMEOUT_SECONDS", 10.0)

# Checkout: frais de port fixes ajoutés au sous-total
SHIPPING_FEE = _env_float("SHIPPING_FEE", 12.99)

# Tarification: catégorie par défaut et alias « porte-clés » de la table statique
DEFAULT_CATEGORY_NAME = _clean_env(os.getenv("DEFAULT_CATEGORY_NAME") or "City Maps")
KEY_HOLDER_CATEGORY_NAME = _clean_env(os.getenv("KEY_HOLDER_CATEGORY_NAME") or "Key holders")

# Données de test: création auto des produits manquants (jamais en production)
AUTO_CREATE_TEST_PRODUCTS = (os.getenv("AUTO_CREATE_TEST_PRODUCTS", "0").lower() in ("1", "true", "yes"))

# E-mails transactionnels (Resend)
RESEND_API_KEY = _clean_env(os.getenv("RESEND_API_KEY") or "")
RESEND_API_URL = _clean_env(os.getenv("RESEND_API_URL") or "https://api.resend.com/emails")
EMAIL_FROM = _clean_env(os.getenv("EMAIL_FROM") or "noreply@maps-and-memories.com")
EMAIL_REPLY_TO = _clean_env(os.getenv("EMAIL_REPLY_TO") or "support@maps-and-memories.com")
SHOP_NAME = _clean_env(os.getenv("SHOP_NAME") or "Maps & Memories")

BASE_URL = _clean_env(os.getenv("BASE_URL") or "http://localhost:8000")

def is_production() -> bool:
    return APP_ENV == "production"
