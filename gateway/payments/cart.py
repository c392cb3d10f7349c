"""
Logique panier pure (pas de Paystack, pas de DB).
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError

# Paystack attend des montants en plus petite unité (kobo pour NGN)
MINOR_UNITS_FACTOR = 100


class CartItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1)


class ShippingInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = ""
    phone: str = ""
    line1: str = ""
    city: str = ""
    country: str = ""


# module gateway.payments.cart
def parse_cart_items(items: Sequence[Dict[str, Any]]) -> List[CartItem]:
    """
    Convertit le panier brut du front en CartItem.
    - La quantité est lue dans "quantity", ou à défaut "cartQuantity" (clé historique du front).
    - Soulève ValidationError si une ligne a un prix négatif, une quantité < 1 ou des valeurs non numériques.
    """
    parsed: List[CartItem] = []
    for it in items or []:
        if not isinstance(it, dict):
            raise ValidationError("Invalid cart item")
        qty = it.get("quantity")
        if qty is None:
            qty = it.get("cartQuantity")
        try:
            # str() évite les artefacts binaires des float (10.1 -> Decimal("10.1"))
            price = Decimal(str(it.get("price")))
            parsed.append(CartItem(**{**it, "price": price, "quantity": qty}))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError("Invalid cart item")
    return parsed


def compute_order_amount(items: Sequence[CartItem]) -> int:
    """
    Total du panier en plus petite unité monétaire: 100 × Σ(price × quantity).
    - Arithmétique décimale exacte, arrondi (half-up) uniquement sur le total mis à l'échelle.
    - Panier vide -> 0.
    """
    total = sum((Decimal(item.price) * item.quantity for item in items), Decimal(0))
    scaled = (total * MINOR_UNITS_FACTOR).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(scaled)


def make_metadata(shipping: ShippingInfo) -> Dict[str, Any]:
    """
    Métadonnées Paystack: les infos de livraison affichées comme custom_fields
    sur le tableau de bord Paystack (nom, téléphone, adresse).
    """
    return {
        "custom_fields": [
            {
                "display_name": shipping.name,
                "variable_name": shipping.phone,
                "value": f"{shipping.line1}, {shipping.city}, {shipping.country}",
            }
        ]
    }


def parse_shipping(shipping: Optional[Dict[str, Any]]) -> ShippingInfo:
    if not isinstance(shipping, dict):
        raise ValidationError("Invalid shipping details")
    fields = {
        k: ("" if v is None else str(v)) if k in ShippingInfo.model_fields else v
        for k, v in shipping.items()
    }
    try:
        return ShippingInfo(**fields)
    except ValueError:
        raise ValidationError("Invalid shipping details")
