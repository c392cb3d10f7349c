import pytest
from fastapi.testclient import TestClient

from gateway.app_setup.factory import create_app


@pytest.fixture()
def build_dir(tmp_path):
    (tmp_path / "static" / "js").mkdir(parents=True)
    (tmp_path / "static" / "js" / "main.js").write_text("console.log('zoe');")
    (tmp_path / "index.html").write_text("<html><body>zoestore</body></html>")
    (tmp_path / "robots.txt").write_text("User-agent: *")
    return tmp_path


@pytest.fixture()
def prod_client(processor, orders, build_dir):
    app = create_app(processor=processor, orders=orders, production=True, build_dir=build_dir)
    with TestClient(app) as c:
        yield c


def test_production_root_still_returns_welcome_text(prod_client):
    assert prod_client.get("/").text == "Welcome to the Zoestore website."


def test_production_serves_static_assets(prod_client):
    res = prod_client.get("/static/js/main.js")
    assert res.status_code == 200
    assert "zoe" in res.text


def test_production_serves_build_files(prod_client):
    assert prod_client.get("/robots.txt").text == "User-agent: *"


def test_production_spa_fallback_returns_index(prod_client):
    res = prod_client.get("/Payment-success?reference=abc")
    assert res.status_code == 200
    assert "zoestore" in res.text


def test_production_fallback_does_not_escape_build_dir(prod_client):
    res = prod_client.get("/..%2F..%2Fetc%2Fpasswd")
    assert res.status_code == 200
    assert "zoestore" in res.text


def test_production_api_routes_are_not_shadowed(prod_client, order_payload):
    res = prod_client.post("/verify-payment/ref_1", json=order_payload)
    assert res.json()["status"] == "success"


def test_development_has_no_spa_fallback(client):
    assert client.get("/Payment-success").status_code == 404


def test_health_endpoints(client):
    assert client.get("/health").json() == {"ok": True}
    store = client.get("/health/store")
    assert store.status_code == 200
    assert store.json()["ok"] is True
    assert client.get("/health/rate-limit").json()["enabled"] is False


def test_cors_allows_configured_frontend(client):
    from gateway.config import FRONTEND_URL

    res = client.options(
        "/create-payment-intent",
        headers={"Origin": FRONTEND_URL, "Access-Control-Request-Method": "POST"},
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == FRONTEND_URL


def test_cors_rejects_unknown_origin(client):
    res = client.options(
        "/create-payment-intent",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )
    assert res.status_code == 400
    assert "access-control-allow-origin" not in res.headers


def test_security_headers_present(client):
    res = client.get("/health")
    assert res.headers["x-content-type-options"] == "nosniff"
    assert res.headers["x-frame-options"] == "DENY"
