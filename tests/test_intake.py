from __future__ import annotations

import json
import logging
from datetime import date

import pytest

from adinsights.enums import Platform
from ads_dashboard.intake import IntakeError, coerce_number, parse_api_response, parse_rows


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("12.5", 12.5),
        (7, 7.0),
        (None, 0.0),
        ("abc", 0.0),
        ("NaN", 0.0),
        (float("inf"), 0.0),
        (-3, 0.0),
        (True, 0.0),
    ],
)
def test_coerce_number(raw: object, expected: float) -> None:
    assert coerce_number(raw) == expected


def test_api_rows_map_to_records(api_rows) -> None:
    records = parse_rows(api_rows)

    assert len(records) == 3
    first = records[0]
    assert first.day == date(2024, 5, 1)
    assert first.platform == Platform.FACEBOOK
    assert first.spend == 50.0
    assert first.clicks == 100.0
    assert first.conversion_value == 150.0
    assert first.purchases == 3.0
    assert records[2].platform == Platform.UNKNOWN


def test_record_field_names_and_unrecognised_platform() -> None:
    records = parse_rows([{"day": "2024-05-03T00:00:00Z", "platform": "TikTok", "clicks": "4"}])

    assert records[0].day == date(2024, 5, 3)
    assert records[0].platform == Platform.UNKNOWN
    assert records[0].clicks == 4.0
    assert records[0].spend == 0.0


def test_rows_without_day_are_dropped(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="ads_dashboard.intake"):
        records = parse_rows([{"giorno": "not-a-date"}, {"piattaforma": "facebook"}, "junk"])

    assert records == []
    assert any("dropped" in message for message in caplog.messages)


def test_envelope_parsing(api_rows) -> None:
    payload = {"success": True, "metrics": {"totale_spesa": 70}, "daily": api_rows}

    assert len(parse_api_response(payload)) == 3
    assert len(parse_api_response(json.dumps(payload))) == 3
    assert len(parse_api_response(api_rows)) == 3


def test_failed_envelope_raises() -> None:
    with pytest.raises(IntakeError, match="quota exceeded"):
        parse_api_response({"success": False, "error": "quota exceeded"})
    with pytest.raises(IntakeError, match="Errore sconosciuto"):
        parse_api_response({"success": False})


def test_malformed_payloads_raise() -> None:
    with pytest.raises(IntakeError):
        parse_api_response("{bad-json")
    with pytest.raises(IntakeError):
        parse_api_response("42")
    with pytest.raises(IntakeError):
        parse_api_response({"daily": "nope"})
