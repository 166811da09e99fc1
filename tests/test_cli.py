from __future__ import annotations

import json
import logging

import pytest
from typer.testing import CliRunner

from razor_webhook import cli
from razor_webhook.handlers.registry import HandlerRegistry

BODY = {
    "entity": "event",
    "account_id": "acc_1",
    "event": "payment.dispute.closed",
    "contains": ["dispute"],
    "payload": {"dispute": {"entity": {"id": "disp_1"}}},
    "created_at": 1700000000,
}


@pytest.fixture(autouse=True)
def reset_root_handlers():
    # route installs a handler bound to the runner's stderr, closed after invoke
    yield
    logging.getLogger().handlers.clear()


def test_events_lists_every_slot():
    runner = CliRunner()
    result = runner.invoke(cli.app, ["events"])
    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert len(lines) == 23
    assert "payment.dispute.won\tdispute.won" in lines


def test_route_reports_slot(tmp_path):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(BODY), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli.app, ["route", str(path)])
    assert result.exit_code == 0
    assert "payment.dispute.closed -> dispute.closed" in result.stdout


def test_route_reads_stdin_and_honours_freeze(monkeypatch):
    monkeypatch.setenv("RAZOR_WEBHOOK_FREEZE_REGISTRY", "true")
    frozen: list[HandlerRegistry] = []
    original_freeze = HandlerRegistry.freeze

    def record_freeze(self):
        frozen.append(self)
        original_freeze(self)

    monkeypatch.setattr(HandlerRegistry, "freeze", record_freeze)
    runner = CliRunner()
    result = runner.invoke(
        cli.app,
        ["route", "-", "--verbose"],
        input=json.dumps({**BODY, "event": "subscription.charged"}),
    )
    assert result.exit_code == 0
    assert '"freeze_registry": true' in result.stdout
    assert "subscription.charged -> subscription.charged" in result.stdout
    assert len(frozen) == 1 and frozen[0].frozen


def test_route_exit_codes(tmp_path):
    runner = CliRunner()
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({**BODY, "entity": "order"}), encoding="utf-8")
    assert runner.invoke(cli.app, ["route", str(bad)]).exit_code == 2

    unknown = tmp_path / "unknown.json"
    unknown.write_text(json.dumps({**BODY, "event": "unknown.event"}), encoding="utf-8")
    assert runner.invoke(cli.app, ["route", str(unknown)]).exit_code == 3


def test_route_unreadable_file_exits_with_invalid_payload_code(tmp_path):
    runner = CliRunner()
    missing = runner.invoke(cli.app, ["route", str(tmp_path / "missing.json")])
    assert missing.exit_code == 2
    assert not isinstance(missing.exception, FileNotFoundError)

    binary = tmp_path / "binary.json"
    binary.write_bytes(b"\xff\xfe\x00{")
    assert runner.invoke(cli.app, ["route", str(binary)]).exit_code == 2
