"""
Routes simples (hors routers).
- / : texte d'accueil (sonde de vie), y compris en production.
- /favicon.ico: pas de contenu (204) pour éviter des 404 dans les logs hors production.
"""
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response
from starlette.status import HTTP_204_NO_CONTENT

WELCOME_TEXT = "Welcome to the Zoestore website."


def register_routes(app: FastAPI, serve_favicon_placeholder: bool = True) -> None:
    @app.get("/", include_in_schema=False, response_class=PlainTextResponse)
    def root():
        return WELCOME_TEXT

    if serve_favicon_placeholder:
        @app.get("/favicon.ico", include_in_schema=False)
        async def favicon():
            return Response(status_code=HTTP_204_NO_CONTENT)
