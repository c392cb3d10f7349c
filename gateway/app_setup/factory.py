"""
Factory d'application pour les entrypoints (gateway.asgi, tests).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from pathlib import Path
from typing import Optional

from fastapi import FastAPI

from gateway import config
from gateway.payments.paystack_client import PaystackClient
from gateway.payments.repository import OrdersRepository
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware, register_origin_logging_middleware
from .exception_handlers import register_exception_handlers
from .routes import register_routes
from .routers import register_routers
from .static import mount_static_files


def create_app(
    *,
    processor: Optional[PaystackClient] = None,
    orders: Optional[OrdersRepository] = None,
    production: Optional[bool] = None,
    build_dir: Optional[Path] = None,
) -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      1) middlewares (CORS, en-têtes de sécurité, trace des origines)
      2) gestionnaires d'exceptions et route d'accueil
      3) routers (payments, health)
      4) en production: bundle front + repli SPA (en dernier pour ne pas masquer l'API)
    processor / orders: clients déjà construits (injection), sinon créés par le lifespan.
    """
    is_production = config.IS_PRODUCTION if production is None else production

    app = FastAPI(title="Zoestore Payment Gateway", lifespan=lifespan)
    app.state.processor = processor
    app.state.orders = orders

    register_basic_middlewares(app)
    register_security_middleware(app)
    register_origin_logging_middleware(app)
    register_exception_handlers(app)
    register_routes(app, serve_favicon_placeholder=not is_production)
    register_routers(app)
    if is_production:
        mount_static_files(app, build_dir or config.BUILD_DIR)
    return app
