"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Construit une seule fois le client Paystack et le repository des commandes (app.state),
  sauf s'ils ont été injectés par create_app() (tests).
- Initialise FastAPILimiter (Redis) avec options de test (fakeredis); ferme sa connexion à l'arrêt.
- Variables d'environnement supportées:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: désactive complètement le rate limiting (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: utilise fakeredis (tests)
  - LOCAL_RATE_LIMIT_FALLBACK=1: active un fallback local si l'init échoue
"""
import os
import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

from gateway.infra.supabase_client import create_service_supabase
from gateway.payments.paystack_client import PaystackClient
from gateway.payments.repository import OrdersRepository

logger = logging.getLogger("uvicorn.error")


async def _init_rate_limiter(app: FastAPI) -> None:
    """
    Configure le rate limiting et gère les fallbacks.
    - En cas d'échec de Redis et sans fallback, le rate limiting est désactivé proprement.
    """
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return
    try:
        if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
            from fakeredis.aioredis import FakeRedis
            r = FakeRedis(decode_responses=True)
        else:
            redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
            r = aioredis.from_url(redis_url, encoding="utf-8", decode_responses=True)
        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        app.state.rate_limiter_initialized = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            app.state.rate_limit_enabled = True
            logger.warning(f"Rate limiting falling back to local in-memory due to init error: {e}")
        else:
            app.state.rate_limit_enabled = False
            logger.warning(f"Rate limiting disabled due to init error: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    owned_processor = None
    if getattr(app.state, "processor", None) is None:
        owned_processor = PaystackClient()
        app.state.processor = owned_processor
        if not owned_processor.secret_key:
            logger.warning("PAYSTACK_SECRET_KEY manquant: les appels Paystack échoueront")

    if getattr(app.state, "orders", None) is None:
        try:
            app.state.orders = OrdersRepository(create_service_supabase())
        except Exception as e:
            app.state.orders = None
            logger.warning(f"Orders store disabled: {e}")

    app.state.rate_limiter_initialized = False
    await _init_rate_limiter(app)

    try:
        yield
    finally:
        # Phase shutdown: on ne ferme que ce que le lifespan a construit
        if app.state.rate_limiter_initialized:
            try:
                await FastAPILimiter.close()
            except Exception as e:
                logger.warning(f"Rate limiter Redis close failed: {e}")
            FastAPILimiter.redis = None
            app.state.rate_limiter_initialized = False
        if owned_processor is not None:
            await owned_processor.aclose()
            app.state.processor = None
