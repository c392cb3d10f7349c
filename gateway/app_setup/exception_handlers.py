"""
Gestionnaires d'exceptions.
- Convertit les erreurs métier (GatewayError et sous-classes) en JSON {error} / {message, error}.
- Les HTTPException (ex: 429 du rate limiting) gardent la réponse FastAPI standard {detail}.
- Aucune trace d'exécution n'est renvoyée au client; elles restent dans les logs.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gateway.payments.errors import GatewayError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.detail)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())
