"""Tests for the dashboard summary and CLI commands."""

import json
import random

import pytest

import disasteriq.cli as cli_mod
from conftest import FIXED_NOW, FakeEventSource, make_event
from disasteriq.alerts.alert_builder import synthesize_alerts
from disasteriq.api.stats_api import summarize
from disasteriq.config.loader import NotificationSettings, Settings
from disasteriq.notifications.service import NotificationService
from disasteriq.parsing.models import RawEvent
from disasteriq.parsing.normalizer import normalize_events
from disasteriq.retrieval.eonet_client import EonetFetchError


def test_summarize_counts_types_and_recent_alerts(sample_events):
    events = [RawEvent.model_validate(e) for e in sample_events]
    disasters = normalize_events(events, now=FIXED_NOW)
    alerts = synthesize_alerts(events, rng=random.Random(5), now=FIXED_NOW)

    summary = summarize(disasters, alerts, recent=2)

    assert (summary.wildfires, summary.earthquakes, summary.floods, summary.storms, summary.volcanoes) == (1, 1, 1, 1, 1)
    assert summary.total == 5
    assert summary.critical == 2  # 1500-acre fire and M7 quake
    assert len(summary.recent_alerts) == 2
    assert all(a.type == "disaster" for a in summary.recent_alerts)


def test_summarize_ignores_unknown_types():
    events = [RawEvent.model_validate(make_event(category="seaLakeIce"))]
    summary = summarize(normalize_events(events, now=FIXED_NOW), [])
    assert summary.total == 1
    assert summary.wildfires == summary.floods == 0


@pytest.fixture
def fake_cli(monkeypatch, sample_events):
    source = FakeEventSource(sample_events)
    monkeypatch.setattr(cli_mod, "_load", lambda args: (Settings(), source))
    return source


def test_cli_disasters_json(fake_cli, capsys):
    cli_mod.main(["disasters", "--type", "volcano", "--format", "json"])
    body = json.loads(capsys.readouterr().out)
    assert [d["id"] for d in body["data"]] == ["EONET_4"]
    assert fake_cli.calls[0]["category"] == "volcanoes"


def test_cli_disasters_table_hides_placeholder_location(fake_cli, capsys):
    cli_mod.main(["disasters"])
    out = capsys.readouterr().out
    flood_line = next(line for line in out.splitlines() if line.startswith("EONET_5"))
    assert " - " in flood_line
    assert "5 disasters" in out


def test_cli_alerts_seed_is_reproducible(fake_cli, capsys):
    cli_mod.main(["alerts", "--seed", "11", "--format", "json"])
    first = json.loads(capsys.readouterr().out)
    cli_mod.main(["alerts", "--seed", "11", "--format", "json"])
    second = json.loads(capsys.readouterr().out)
    assert [a["id"] for a in first["data"]] == [a["id"] for a in second["data"]]
    assert [a["severity"] for a in first["data"]] == [a["severity"] for a in second["data"]]


def test_cli_summary(fake_cli, capsys):
    cli_mod.main(["summary", "--recent", "3"])
    out = capsys.readouterr().out
    assert "Wildfires:   1" in out
    assert "Total:       5 (2 critical)" in out


def test_cli_fetch_error_exits_nonzero(monkeypatch, capsys):
    source = FakeEventSource(error=EonetFetchError("offline"))
    monkeypatch.setattr(cli_mod, "_load", lambda args: (Settings(), source))
    with pytest.raises(SystemExit) as exc_info:
        cli_mod.main(["alerts"])
    assert exc_info.value.code == 1
    assert "offline" in capsys.readouterr().out


def test_cli_metrics(capsys):
    cli_mod.main(["metrics"])
    assert capsys.readouterr().out.startswith("# HELP")


@pytest.fixture
def cli_sleeps(monkeypatch):
    sleeps = []
    notifier = NotificationService(
        NotificationSettings(), sleep=sleeps.append, clock=lambda: FIXED_NOW, rng=random.Random(3)
    )
    monkeypatch.setattr(cli_mod, "_notifier", lambda args: notifier)
    return sleeps


def test_cli_notify_bulk_batches(cli_sleeps, capsys):
    cli_mod.main(["notify", "a@x.org", "b@x.org", "c@x.org", "--message", "Evacuate", "--batch-size", "2"])
    out = capsys.readouterr().out
    assert "batch-0: 2 recipients" in out
    assert "batch-1: 1 recipients" in out
    assert "3 recipients in 2 batches" in out
    assert cli_sleeps == [0.2, 0.2]


def test_cli_notify_disaster_alert(cli_sleeps, capsys):
    cli_mod.main(["notify", "a@x.org", "b@x.org", "--alert-title", "Wildfire near Ridgecrest"])
    out = capsys.readouterr().out
    assert "Sent 2 messages" in out
    assert out.count(f"msg-{int(FIXED_NOW.timestamp() * 1000)}-") == 2
    assert cli_sleeps == [0.1, 0.1]


def test_cli_notify_requires_message_or_title(cli_sleeps):
    with pytest.raises(SystemExit):
        cli_mod.main(["notify", "a@x.org"])
