"""
Cas d'usage 'payments': orchestre cart, client Paystack et repository.
Les clients partagés (Paystack, commandes) sont passés explicitement par les vues.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from starlette.concurrency import run_in_threadpool

from gateway.config import PAYMENT_CALLBACK_URL, PAYMENT_CURRENCY, ORDERS_IDEMPOTENT
from . import cart as cart_logic
from .errors import InvalidOrderError, PersistenceError, ProcessorError, ValidationError
from .paystack_client import PaystackClient
from .repository import OrdersRepository, REFERENCE_COLUMN

logger = logging.getLogger(__name__)

ORDER_PLACED_STATUS = "Order Placed..."
UNKNOWN_USER = "Unknown User"
NO_EMAIL = "No Email"


async def initiate_transaction(
    *,
    items: Any,
    email: Any,
    shipping: Any,
    description: Optional[str],
    processor: PaystackClient,
) -> Dict[str, Any]:
    """
    Prépare la page de paiement Paystack pour un panier.
    - Rejette (ValidationError) avant tout appel externe si items/email/shipping manquent.
    - Le montant est calculé côté serveur à partir du panier (kobo).
    Retour: {"authorizationUrl", "reference"} tels que renvoyés par Paystack.
    """
    if not items or not email or not shipping:
        raise ValidationError("Missing required fields")
    if not isinstance(items, list):
        raise ValidationError("Invalid cart item")

    cart_items = cart_logic.parse_cart_items(items)
    shipping_info = cart_logic.parse_shipping(shipping)
    amount = cart_logic.compute_order_amount(cart_items)

    try:
        data = await processor.initialize(
            email=str(email),
            amount=amount,
            currency=PAYMENT_CURRENCY,
            callback_url=PAYMENT_CALLBACK_URL,
            description=description,
            metadata=cart_logic.make_metadata(shipping_info),
        )
    except ProcessorError as e:
        logger.error("Error initializing payment: %s", e.detail)
        raise

    return {
        "authorizationUrl": data.get("authorization_url"),
        "reference": data.get("reference"),
    }


def build_order(payload: Dict[str, Any], reference: str, now: datetime) -> Dict[str, Any]:
    """
    Construit l'enregistrement commande à partir du corps de la requête de vérification.
    Valeurs par défaut: userID "Unknown User", email "No Email", montant 0, panier [], adresse {}.
    """
    return {
        "userID": payload.get("userID") or UNKNOWN_USER,
        "userEmail": payload.get("email") or NO_EMAIL,
        "orderDate": now.strftime("%a %b %d %Y"),
        "orderTime": now.strftime("%I:%M:%S %p").lstrip("0"),
        "orderAmount": payload.get("amount") or 0,
        "orderStatus": ORDER_PLACED_STATUS,
        "cartItems": payload.get("items") or [],
        "shippingAddress": payload.get("shipping") or {},
        REFERENCE_COLUMN: reference,
    }


def validate_order(order: Dict[str, Any]) -> None:
    items = order.get("cartItems")
    if not order.get("userID") or not order.get("userEmail") or not isinstance(items, list) or not items:
        raise InvalidOrderError()


async def verify_transaction(
    *,
    reference: str,
    payload: Optional[Dict[str, Any]],
    processor: PaystackClient,
    orders: OrdersRepository,
    idempotent: bool = ORDERS_IDEMPOTENT,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Confirme une transaction auprès de Paystack puis enregistre la commande.
    - Statut Paystack "success": construit, valide et insère la commande -> {"status": "success", "orderId"}
    - Tout autre statut: {"status": "failed", ...} sans écriture
    - idempotent=True: upsert par référence (une vérification rejouée ne duplique pas la commande)
    Erreurs: ProcessorError (Paystack), InvalidOrderError (commande incomplète), PersistenceError (Supabase).
    """
    reference = (reference or "").strip()
    if not reference:
        return {"status": "failed", "message": "Missing payment reference"}

    try:
        data = await processor.verify(reference)
    except ProcessorError as e:
        logger.error(
            "Error during payment verification: message=%s code=%s response=%s",
            e.message, e.code, e.detail,
        )
        raise

    status = data.get("status")
    if status != "success":
        logger.info("Payment not successful reference=%s status=%s", reference, status)
        return {"status": "failed", "message": "Payment not successful"}

    order = build_order(payload or {}, reference, now or datetime.now())
    try:
        validate_order(order)
    except InvalidOrderError:
        # Le débit Paystack a déjà eu lieu: aucune annulation, seulement tracé
        logger.warning("Charged payment with invalid order details reference=%s", reference)
        raise

    insert = orders.insert_order_once if idempotent else orders.insert_order
    try:
        order_id = await run_in_threadpool(insert, order)
    except PersistenceError as e:
        logger.error("Error saving order reference=%s: %s", reference, e.detail)
        raise

    logger.info("Order saved to Supabase: %s (reference=%s)", order_id, reference)
    return {"status": "success", "orderId": order_id}
