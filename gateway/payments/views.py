# module gateway.payments.views

"""Endpoints du parcours de paiement.
- /create-payment-intent: calcule le montant du panier et ouvre une page de paiement Paystack.
- /verify-payment/{reference}: confirme la transaction auprès de Paystack et enregistre la commande.
Les erreurs métier (ValidationError, ProcessorError, ...) sont converties en JSON par
gateway.app_setup.exception_handlers.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from gateway import config
from gateway.utils.rate_limit import optional_rate_limit
from gateway.payments import service as payments_service
from gateway.payments.dependencies import get_orders_repository, get_processor
from gateway.payments.paystack_client import PaystackClient
from gateway.payments.repository import OrdersRepository

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments API"])


async def _json_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.post("/create-payment-intent", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_payment_intent(request: Request, processor: PaystackClient = Depends(get_processor)):
    """
    Initialise une transaction Paystack pour le panier.
    - Entrée JSON: {items: [{price, quantity|cartQuantity, ...}], email, shipping: {name, phone, line1, city, country}, description}
    - Réponses: 200 {authorizationUrl, reference} | 400 {error} | 500 {message, error}
    """
    body = await _json_body(request)
    result = await payments_service.initiate_transaction(
        items=body.get("items"),
        email=body.get("email"),
        shipping=body.get("shipping"),
        description=body.get("description"),
        processor=processor,
    )
    return JSONResponse(result)


@router.post("/verify-payment/{reference}", dependencies=[Depends(optional_rate_limit(times=20, seconds=60))])
async def verify_payment(
    reference: str,
    request: Request,
    processor: PaystackClient = Depends(get_processor),
    orders: OrdersRepository = Depends(get_orders_repository),
):
    """
    Vérifie la transaction puis enregistre la commande si Paystack confirme le paiement.
    - Entrée JSON (optionnelle): {userID, email, amount, items, shipping}
    - Réponses: 200 {status: "success", orderId} | 400 {status: "failed", message} ou {message} | 500 {message, error}
    """
    body = await _json_body(request)
    result = await payments_service.verify_transaction(
        reference=reference,
        payload=body,
        processor=processor,
        orders=orders,
        idempotent=config.ORDERS_IDEMPOTENT,
    )
    if result.get("status") != "success":
        return JSONResponse(status_code=400, content=result)
    return JSONResponse(result)
