"""
Adaptateur Paystack: centralise les appels REST et la configuration Paystack.
Un seul httpx.AsyncClient est construit au démarrage (lifespan) et partagé entre requêtes.
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from gateway.config import PAYSTACK_BASE_URL, PAYSTACK_SECRET_KEY, PAYSTACK_TIMEOUT_SECONDS
from .errors import ProcessorError

logger = logging.getLogger(__name__)


def _error_payload(exc: httpx.HTTPStatusError) -> Any:
    try:
        return exc.response.json()
    except ValueError:
        return exc.response.text


# module gateway.payments.paystack_client
class PaystackClient:
    """
    Client Paystack (initialize / verify), authentifié par Bearer <secret key>.
    - timeout: délai max par appel (connect/read/write), pas de retry.
    - transport: injectable (httpx.MockTransport en tests).
    """

    def __init__(
        self,
        secret_key: str = PAYSTACK_SECRET_KEY,
        base_url: str = PAYSTACK_BASE_URL,
        timeout: float = PAYSTACK_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.secret_key = secret_key
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {secret_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, failure_message: str, **kwargs) -> Dict[str, Any]:
        if not self.secret_key:
            raise ProcessorError(failure_message, detail="PAYSTACK_SECRET_KEY manquant", code="config")
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise ProcessorError(failure_message, detail=_error_payload(e), code=str(e.response.status_code)) from e
        except httpx.HTTPError as e:
            raise ProcessorError(failure_message, detail=str(e) or type(e).__name__, code=type(e).__name__) from e
        except ValueError as e:
            raise ProcessorError(failure_message, detail="Réponse Paystack non JSON", code="invalid_json") from e

        # Paystack encapsule ses réponses: {"status": bool, "message": str, "data": {...}}
        if not isinstance(body, dict) or body.get("status") is False:
            raise ProcessorError(failure_message, detail=body, code="processor_status")
        if not isinstance(body.get("data"), dict):
            raise ProcessorError(failure_message, detail=body, code="invalid_response")
        return body

    async def initialize(
        self,
        *,
        email: str,
        amount: int,
        currency: str,
        callback_url: str,
        description: Optional[str],
        metadata: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Crée une transaction et sa page de paiement hébergée.
        - amount: en plus petite unité (kobo)
        Retour: data Paystack {authorization_url, access_code, reference}
        """
        body = await self._request(
            "POST",
            "/transaction/initialize",
            "Payment initialization failed. Please try again.",
            json={
                "email": email,
                "amount": amount,
                "currency": currency,
                "callback_url": callback_url,
                "description": description,
                "metadata": metadata,
            },
        )
        logger.info("Paystack initialize response: %s", body)
        return body["data"]

    async def verify(self, reference: str) -> Dict[str, Any]:
        """
        Relit l'état faisant foi d'une transaction par sa référence.
        Retour: data Paystack (inclut "status": "success" | "failed" | "abandoned" | ...)
        """
        body = await self._request(
            "GET",
            f"/transaction/verify/{quote(reference, safe='')}",
            "Payment verification failed",
        )
        logger.info("Paystack verification response: %s", body)
        return body["data"]
