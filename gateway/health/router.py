from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from gateway.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_root():
    return {"ok": True}


@router.get("/store")
def health_store(request: Request):
    orders = getattr(request.app.state, "orders", None)
    if orders is None:
        return JSONResponse(status_code=503, content={"ok": False, "error": "Stockage des commandes non configuré"})
    info = orders.ping()
    return JSONResponse(status_code=200 if info.get("ok") else 503, content=info)


@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return rate_limit_health_info(request)
