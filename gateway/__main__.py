"""
Point d'entrée principal de la passerelle.

Usage:
    python -m gateway

Ce mode lance uvicorn directement et lit quelques variables d'environnement:
- PORT: port d'écoute (par défaut 5001)
- UVICORN_RELOAD: active le reload auto en dev ("1"/"true"/"yes")
- LOG_LEVEL: niveau de logs uvicorn (ex: "info", "debug")
- FORWARDED_ALLOW_IPS: proxys de confiance dont uvicorn accepte X-Forwarded-For (IP client du rate limiting)
"""
import os

import uvicorn

from gateway.config import PORT, LOG_LEVEL

if __name__ == "__main__":
    # Activer le reload uniquement si explicitement demandé (ex: en local)
    reload_flag = os.environ.get("UVICORN_RELOAD", "").lower() in ("1", "true", "yes")
    uvicorn.run(
        "gateway.asgi:app",  # on réutilise l'ASGI app unique
        host="0.0.0.0",
        port=PORT,
        reload=reload_flag,
        log_level=LOG_LEVEL,
    )
