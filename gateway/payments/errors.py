"""
Erreurs métier du flux de paiement.
Chaque erreur porte son code HTTP et sait produire le corps JSON renvoyé au client;
la conversion en réponse est faite par gateway.app_setup.exception_handlers.
"""
from typing import Any, Dict, Optional


class GatewayError(Exception):
    status_code = 500

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.detail if self.detail is not None else self.message}


class ValidationError(GatewayError):
    """Entrée manquante ou invalide (faute de l'appelant) -> 400 {error}."""
    status_code = 400

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class ProcessorError(GatewayError):
    """
    Appel Paystack en échec (transport, identifiants, requête refusée, indisponibilité).
    - detail: corps JSON renvoyé par Paystack si disponible, sinon le message de l'exception
    - code: code d'erreur transport (ex: nom de l'exception httpx) ou statut HTTP amont
    """
    status_code = 500

    def __init__(self, message: str, detail: Any = None, code: Optional[str] = None):
        super().__init__(message, detail)
        self.code = code


class InvalidOrderError(GatewayError):
    """Commande construite incomplète (userID, email ou panier manquant) -> 400."""
    status_code = 400

    def __init__(self, message: str = "Invalid order details", detail: Any = None):
        super().__init__(message, detail)

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class PersistenceError(GatewayError):
    """Écriture Supabase en échec; même forme de réponse qu'un ProcessorError."""
    status_code = 500
