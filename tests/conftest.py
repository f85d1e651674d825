from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta
from typing import Any

import pytest
from fastapi.testclient import TestClient

from adinsights.models import DailyRecord
from ads_dashboard.config import AppConfig
from ads_dashboard.web.app import create_app


def _make_record(day: Any = "2024-05-01", platform: str = "facebook", **metrics: float) -> DailyRecord:
    return DailyRecord(day=day, platform=platform, **metrics)


@pytest.fixture()
def make_record() -> Callable[..., DailyRecord]:
    return _make_record


@pytest.fixture()
def period_records() -> list[DailyRecord]:
    """Ten days of facebook and instagram rows."""
    start = date(2024, 5, 1)
    records: list[DailyRecord] = []
    for offset in range(10):
        day = start + timedelta(days=offset)
        records.append(
            DailyRecord(
                day=day,
                platform="facebook",
                spend=20 + offset,
                clicks=100 + 10 * offset,
                impressions=5000,
                conversion_value=60 + 5 * offset,
                purchases=2,
            )
        )
        records.append(
            DailyRecord(
                day=day,
                platform="instagram",
                spend=10,
                clicks=40,
                impressions=4000,
                conversion_value=20,
                purchases=1,
            )
        )
    return records


@pytest.fixture()
def api_rows() -> list[dict[str, Any]]:
    return [
        {
            "giorno": "2024-05-01",
            "piattaforma": "facebook",
            "spesa": "50",
            "clic_link": 100,
            "impression": 1000,
            "conversioni_acquisti": 150,
            "acquisti": 3,
        },
        {
            "giorno": "2024-05-01",
            "piattaforma": "instagram",
            "spesa": 20,
            "clic_link": 50,
            "impression": 2000,
            "conversioni_acquisti": 40,
            "acquisti": 1,
        },
        {
            "giorno": "2024-05-02",
            "piattaforma": "unknown",
            "spesa": 999,
            "clic_link": 1,
            "impression": 1,
            "conversioni_acquisti": 0,
            "acquisti": 0,
        },
    ]


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture()
def client(app_config: AppConfig):
    app = create_app(app_config)
    with TestClient(app) as tc:
        yield tc
