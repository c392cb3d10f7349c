"""
Dépendances FastAPI: exposent aux vues les clients partagés construits par le lifespan (app.state).
"""
from fastapi import Request

from .errors import PersistenceError, ProcessorError
from .paystack_client import PaystackClient
from .repository import OrdersRepository


def get_processor(request: Request) -> PaystackClient:
    processor = getattr(request.app.state, "processor", None)
    if processor is None:
        raise ProcessorError("Payment service unavailable", detail="Client Paystack non initialisé")
    return processor


def get_orders_repository(request: Request) -> OrdersRepository:
    orders = getattr(request.app.state, "orders", None)
    if orders is None:
        raise PersistenceError("Payment verification failed", detail="Stockage des commandes non configuré")
    return orders
