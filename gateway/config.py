# gateway.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale de la passerelle.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose le répertoire du build front (BUILD_DIR) et le mode de déploiement
- Normalise et expose les secrets/URLs (Paystack, Supabase), CORS
- Fournit l'URL de retour (callback) utilisée par la page de paiement hébergée
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _env_flag(name: str, default: str = "false") -> bool:
    return _clean_env(os.getenv(name, default)).lower() in ("1", "true", "yes")

def _env_float(name: str, default: float) -> float:
    try:
        return float(_clean_env(os.getenv(name)) or default)
    except ValueError:
        return default

# Mode de déploiement: APP_ENV prioritaire, NODE_ENV accepté (héritage du front)
APP_ENV = _clean_env(os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development").lower()
IS_PRODUCTION = APP_ENV == "production"

BUILD_DIR = Path(_clean_env(os.getenv("BUILD_DIR")) or (BASE_DIR / "build"))

# Front-end: origine autorisée (CORS) et base de l'URL de retour Paystack
FRONTEND_URL = _clean_env(os.getenv("FRONTEND_URL") or "https://zoestore.vercel.app").rstrip("/")
LOCAL_FRONTEND_URL = "http://localhost:4243"
CORS_ORIGINS = [FRONTEND_URL, LOCAL_FRONTEND_URL] + [
    o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()
]

# Paystack: clé secrète (Bearer), URL d'API et délai max par appel
PAYSTACK_SECRET_KEY = _clean_env(os.getenv("PAYSTACK_SECRET_KEY") or "")
PAYSTACK_BASE_URL = _clean_env(os.getenv("PAYSTACK_BASE_URL") or "https://api.paystack.co").rstrip("/")
PAYSTACK_TIMEOUT_SECONDS = _env_float("PAYSTACK_TIMEOUT_SECONDS", 15.0)
PAYMENT_CURRENCY = _clean_env(os.getenv("PAYMENT_CURRENCY") or "NGN").upper()
PAYMENT_CALLBACK_PATH = os.getenv("PAYMENT_CALLBACK_PATH", "/Payment-success")
PAYMENT_CALLBACK_URL = f"{FRONTEND_URL}{PAYMENT_CALLBACK_PATH}"

# Supabase: URL et clé service-role (écritures côté serveur)
# - SUPABASE_URL peut parfois être sans schéma: on préfixe en https:// si nécessaire
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or "")
SUPABASE_TIMEOUT_SECONDS = _env_float("SUPABASE_TIMEOUT_SECONDS", 10.0)

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# Table des commandes et mode idempotent (upsert par référence Paystack)
ORDERS_TABLE = _clean_env(os.getenv("ORDERS_TABLE") or "orders")
ORDERS_IDEMPOTENT = _env_flag("ORDERS_IDEMPOTENT")

# Processus
PORT = int(_clean_env(os.getenv("PORT")) or 5001)
LOG_LEVEL = _clean_env(os.getenv("LOG_LEVEL") or "info").lower()
