import asyncio
import json
import logging

from razor_webhook.config import Settings, get_settings
from razor_webhook.events import WebhookPayload
from razor_webhook.handlers.dispatcher import dispatch
from razor_webhook.logging import configure_logging


def test_json_logging_structure(capsys):
    configure_logging("DEBUG", fmt="json")
    payload = WebhookPayload(account_id="acc_1", event="order.paid", created_at=1700000000)
    asyncio.run(dispatch(payload))
    lines = capsys.readouterr().err.strip().splitlines()
    records = [json.loads(line) for line in lines]
    routed = next(r for r in records if r["message"] == "webhook_dispatched")
    assert routed["level"] == "debug"
    assert routed["event_type"] == "order.paid"
    assert routed["account_id"] == "acc_1"
    assert routed["category"] == "order"
    assert routed["sub_event"] == "paid"
    assert routed["latency_ms"] is not None
    logging.getLogger().handlers.clear()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("RAZOR_WEBHOOK_LOG_LEVEL", "debug")
    monkeypatch.setenv("RAZOR_WEBHOOK_LOG_FORMAT", "json")
    monkeypatch.setenv("RAZOR_WEBHOOK_FREEZE_REGISTRY", "true")
    settings = Settings()
    assert settings.log_level == "debug"
    assert settings.log_format == "json"
    assert settings.freeze_registry is True


def test_get_settings_is_cached(monkeypatch):
    get_settings.cache_clear()
    monkeypatch.delenv("RAZOR_WEBHOOK_LOG_FORMAT", raising=False)
    first = get_settings()
    assert first is get_settings()
    assert first.log_format == "plain"
    get_settings.cache_clear()
