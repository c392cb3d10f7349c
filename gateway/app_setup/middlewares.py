"""
Middlewares transverses de l'application.
- register_basic_middlewares: CORS restreint au front (FRONTEND_URL + localhost de dev).
- register_security_middleware: en-têtes de sécurité de base.
- register_origin_logging_middleware: trace l'origine des requêtes cross-origin (debug CORS).
Notes:
- Le dernier middleware ajouté s'exécute en premier.
"""
import logging
from fastapi import Request, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gateway.config import CORS_ORIGINS

logger = logging.getLogger(__name__)


def register_basic_middlewares(app: FastAPI) -> None:
    """
    CORSMiddleware: autorise uniquement les origines configurées, avec credentials.
    Les requêtes sans en-tête Origin (curl, serveur à serveur) ne sont pas concernées.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )


def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        return response


def register_origin_logging_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_origin(request: Request, call_next):
        origin = request.headers.get("origin")
        if origin:
            logger.debug("Origin: %s (allowed=%s)", origin, origin in CORS_ORIGINS)
        return await call_next(request)
