import os

# Désactive l'init fastapi-limiter (évite toute connexion Redis pendant les tests)
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient

from gateway.app_setup.factory import create_app
from gateway.payments.errors import PersistenceError


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class FakeProcessor:
    """Double de PaystackClient: enregistre les appels, renvoie des réponses préparées."""

    def __init__(self, verify_status: str = "success"):
        self.initialize_calls: List[Dict[str, Any]] = []
        self.verify_calls: List[str] = []
        self.verify_status = verify_status
        self.initialize_error: Optional[Exception] = None
        self.verify_error: Optional[Exception] = None
        self.secret_key = "sk_test_fake"

    async def initialize(self, **kwargs) -> Dict[str, Any]:
        self.initialize_calls.append(kwargs)
        if self.initialize_error:
            raise self.initialize_error
        return {
            "authorization_url": "https://checkout.paystack.com/abc123",
            "access_code": "abc123",
            "reference": "ref_abc123",
        }

    async def verify(self, reference: str) -> Dict[str, Any]:
        self.verify_calls.append(reference)
        if self.verify_error:
            raise self.verify_error
        return {"reference": reference, "status": self.verify_status, "amount": 2000}

    async def aclose(self) -> None:
        return None


class FakeOrdersRepository:
    """Double de OrdersRepository en mémoire (ids attribués comme par la base)."""

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.fail_with: Optional[str] = None

    def _store(self, order: Dict[str, Any]) -> str:
        if self.fail_with:
            raise PersistenceError("Payment verification failed", detail=self.fail_with)
        order_id = f"order-{len(self.rows) + 1}"
        self.rows.append({**order, "id": order_id, "createdAt": "server-now"})
        return order_id

    def insert_order(self, order: Dict[str, Any]) -> str:
        return self._store(order)

    def insert_order_once(self, order: Dict[str, Any]) -> str:
        for row in self.rows:
            if row.get("paymentReference") == order.get("paymentReference"):
                return row["id"]
        return self._store(order)

    def ping(self) -> Dict[str, Any]:
        return {"ok": True, "table": "orders", "rows": len(self.rows)}


@pytest.fixture()
def processor() -> FakeProcessor:
    return FakeProcessor()


@pytest.fixture()
def orders() -> FakeOrdersRepository:
    return FakeOrdersRepository()


@pytest.fixture()
def app(processor, orders):
    return create_app(processor=processor, orders=orders, production=False)


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def order_payload() -> Dict[str, Any]:
    return {
        "userID": "user-42",
        "email": "ada@example.com",
        "amount": 20,
        "items": [{"id": "p1", "name": "Sneakers", "price": 10, "cartQuantity": 2}],
        "shipping": {"name": "Ada", "phone": "08030000000", "line1": "1 Marina", "city": "Lagos", "country": "NG"},
    }
