"""
Module 'payments' (feature-first): point d'entrée public.
Réunit logique panier, client Paystack, repository des commandes, erreurs et services.
"""

from .cart import CartItem, ShippingInfo, parse_cart_items, parse_shipping, compute_order_amount, make_metadata
from .errors import GatewayError, ValidationError, ProcessorError, InvalidOrderError, PersistenceError
from .paystack_client import PaystackClient
from .repository import OrdersRepository
from .service import initiate_transaction, verify_transaction, build_order, validate_order

__all__ = [
    # cart
    "CartItem",
    "ShippingInfo",
    "parse_cart_items",
    "parse_shipping",
    "compute_order_amount",
    "make_metadata",
    # errors
    "GatewayError",
    "ValidationError",
    "ProcessorError",
    "InvalidOrderError",
    "PersistenceError",
    # paystack
    "PaystackClient",
    # repository
    "OrdersRepository",
    # services
    "initiate_transaction",
    "verify_transaction",
    "build_order",
    "validate_order",
]
