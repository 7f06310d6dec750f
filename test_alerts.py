#!/usr/bin/env python3
"""
Alert dispatcher tests: threshold decision and WhatsApp payload.
"""

import json
from datetime import datetime, timezone

import pytest

from kickalert import Config, build_alert_variables, check_and_alert, fmt_millions, send_alert, should_alert
from kickalert.formatting import fmt_local_time


def test_threshold_is_strict():
    assert should_alert(-1, 0)
    assert not should_alert(0, 0)
    assert not should_alert(5_000_000, 0)


@pytest.mark.parametrize(
    "budget, expected",
    [
        (-2_500_000, "-2.50M"),
        (-100, "-0.00M"),
        (12_345_678, "12.35M"),
        (0, "0.00M"),
    ],
)
def test_fmt_millions(budget, expected):
    assert fmt_millions(budget) == expected


def test_alert_variables():
    assert build_alert_variables(-2_500_000, "20:30") == {"1": "-2.50M", "2": "20:30"}


def test_positive_budget_sends_nothing(twilio_client):
    result = check_and_alert(5_000_000, 0, twilio_client)

    assert result.alerted is False
    twilio_client.messages.create.assert_not_called()


def test_zero_budget_at_zero_threshold_sends_nothing(twilio_client):
    result = check_and_alert(0, 0, twilio_client)

    assert result.alerted is False
    twilio_client.messages.create.assert_not_called()


def test_negative_budget_sends_one_template_message(twilio_client):
    result = check_and_alert(-100, 0, twilio_client)

    assert result.alerted is True
    assert result.message_sid == "SM0001"
    twilio_client.messages.create.assert_called_once()
    kwargs = twilio_client.messages.create.call_args.kwargs
    assert json.loads(kwargs["content_variables"]) == {"1": "-0.00M", "2": "20:30"}
    assert kwargs["content_sid"] == "HX123"
    assert kwargs["from_"] == "whatsapp:+14155238886"
    assert kwargs["to"] == "whatsapp:+491700000000"


def test_threshold_defaults_to_config(twilio_client, monkeypatch):
    monkeypatch.setattr(Config, "BUDGET_THRESHOLD", 1_000_000)

    result = check_and_alert(500_000, client=twilio_client)

    assert result.threshold == 1_000_000
    assert result.alerted is True


def test_provider_failure_is_swallowed(twilio_client):
    twilio_client.messages.create.side_effect = RuntimeError("HTTP 503 from Twilio")

    result = check_and_alert(-1, 0, twilio_client)

    assert result.alerted is True
    assert result.message_sid is None


def test_missing_twilio_config_skips_send(monkeypatch):
    monkeypatch.setattr(Config, "CONTENT_SID", None)

    assert send_alert(-1_000_000) is None


def test_local_time_falls_back_to_utc_for_unknown_zone():
    moment = datetime(2025, 3, 1, 18, 45, 0, tzinfo=timezone.utc)

    assert fmt_local_time("Not/A_Zone", moment) == "Saturday, 01.03.2025, 18:45:00"
    assert fmt_local_time("Europe/Berlin", moment) == "Saturday, 01.03.2025, 19:45:00"
