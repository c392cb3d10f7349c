"""
Accès aux données pour la feature 'payments' (table Supabase des commandes).
"""
import logging
from typing import Any, Dict, Optional

from supabase import Client

from gateway.config import ORDERS_TABLE
from .errors import PersistenceError

logger = logging.getLogger(__name__)

# Colonne portant la référence Paystack (clé d'idempotence en mode upsert)
REFERENCE_COLUMN = "paymentReference"


def _first_row(res) -> Optional[Dict[str, Any]]:
    rows = res.data or []
    return rows[0] if isinstance(rows, list) and rows else None


# module gateway.payments.repository
class OrdersRepository:
    """
    Écritures append-only dans la table des commandes.
    - createdAt n'est jamais envoyé: la colonne a un défaut now() côté base.
    - Le client Supabase est partagé (service-role), aucune écriture d'état local.
    """

    def __init__(self, client: Client, table: str = ORDERS_TABLE):
        self.client = client
        self.table = table

    def insert_order(self, order: Dict[str, Any]) -> str:
        """Insère une commande et retourne l'identifiant attribué par la base."""
        try:
            res = self.client.table(self.table).insert(order).execute()
        except Exception as e:
            logger.exception("payments.repository.insert_order failed user_id=%s", order.get("userID"))
            raise PersistenceError("Payment verification failed", detail=str(e)) from e
        row = _first_row(res)
        if not row or row.get("id") is None:
            raise PersistenceError("Payment verification failed", detail="Insertion sans identifiant retourné")
        return str(row["id"])

    def insert_order_once(self, order: Dict[str, Any]) -> str:
        """
        Upsert-if-absent par référence Paystack: une vérification rejouée retourne
        l'identifiant de la commande déjà enregistrée au lieu d'en créer une seconde.
        """
        reference = order.get(REFERENCE_COLUMN)
        if not reference:
            raise PersistenceError("Payment verification failed", detail="Référence de paiement manquante")
        try:
            res = (
                self.client.table(self.table)
                .upsert(order, on_conflict=REFERENCE_COLUMN, ignore_duplicates=True)
                .execute()
            )
            row = _first_row(res)
            if row is None:
                # Conflit ignoré: la ligne existe déjà, on relit son id
                res = (
                    self.client.table(self.table)
                    .select("id")
                    .eq(REFERENCE_COLUMN, reference)
                    .limit(1)
                    .execute()
                )
                row = _first_row(res)
        except Exception as e:
            logger.exception("payments.repository.insert_order_once failed reference=%s", reference)
            raise PersistenceError("Payment verification failed", detail=str(e)) from e
        if not row or row.get("id") is None:
            raise PersistenceError("Payment verification failed", detail="Commande introuvable après upsert")
        return str(row["id"])

    def ping(self) -> Dict[str, Any]:
        """Sonde la table des commandes (utilisé par /health/store)."""
        try:
            res = self.client.table(self.table).select("id").limit(1).execute()
            return {"ok": True, "table": self.table, "rows": len(res.data or [])}
        except Exception as e:
            return {"ok": False, "table": self.table, "error": str(e)}
