"""
Registre central des routers.
- Payments: /create-payment-intent, /verify-payment/{reference}
- Health: /health
"""
from fastapi import FastAPI
from gateway.payments import views as payments_views
from gateway.health.router import router as health_router


def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(health_router)
