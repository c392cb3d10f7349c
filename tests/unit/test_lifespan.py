from fastapi.testclient import TestClient

from gateway.app_setup import lifespan as lifespan_module
from gateway.app_setup.factory import create_app


class _RecordingLimiter:
    redis = None
    events = []

    @classmethod
    async def init(cls, redis):
        cls.redis = redis
        cls.events.append("init")

    @classmethod
    async def close(cls):
        cls.events.append("close")


def _use_recording_limiter(monkeypatch):
    _RecordingLimiter.redis = None
    _RecordingLimiter.events = []
    monkeypatch.delenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", raising=False)
    monkeypatch.delenv("USE_FAKE_REDIS_FOR_TESTS", raising=False)
    monkeypatch.setattr(lifespan_module, "FastAPILimiter", _RecordingLimiter)
    monkeypatch.setattr(lifespan_module.aioredis, "from_url", lambda *a, **kw: object())


def test_limiter_redis_closed_on_shutdown(monkeypatch, processor, orders):
    _use_recording_limiter(monkeypatch)
    app = create_app(processor=processor, orders=orders, production=False)

    with TestClient(app):
        assert app.state.rate_limit_enabled is True
        assert _RecordingLimiter.events == ["init"]

    assert _RecordingLimiter.events == ["init", "close"]
    assert _RecordingLimiter.redis is None
    assert app.state.rate_limiter_initialized is False


def test_limiter_not_closed_when_init_disabled(monkeypatch, processor, orders):
    _use_recording_limiter(monkeypatch)
    monkeypatch.setenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")
    app = create_app(processor=processor, orders=orders, production=False)

    with TestClient(app):
        assert app.state.rate_limit_enabled is False

    assert _RecordingLimiter.events == []


def test_injected_processor_is_not_closed(monkeypatch, processor, orders):
    monkeypatch.setenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")
    app = create_app(processor=processor, orders=orders, production=False)

    with TestClient(app):
        pass

    assert app.state.processor is processor
