from __future__ import annotations

from fastapi.testclient import TestClient

from ads_dashboard.config import AppConfig
from ads_dashboard.web.app import create_app


def test_health_and_headers(client) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["cache-control"] == "no-store"
    assert "content-security-policy" in response.headers


def test_docs_disabled_by_default(client) -> None:
    assert client.get("/docs").status_code == 404
    assert client.get("/openapi.json").status_code == 404


def test_report_before_refresh(client) -> None:
    payload = client.get("/api/report").json()

    assert payload["refreshed_at"] is None
    assert payload["record_count"] == 0
    assert payload["summary"]["total_spend"] == 0
    assert [item["title"] for item in payload["insights"]] == [
        "Performance CTR per Network",
        "Performance CPC per Network",
        "Performance Acquisti per Network",
    ]


def test_refresh_then_read(client, api_rows) -> None:
    response = client.post("/api/report", json={"success": True, "daily": api_rows})

    assert response.status_code == 200
    body = response.json()
    assert body["record_count"] == 3
    assert body["summary"]["total_spend"] == 70
    assert body["summary"]["total_clicks"] == 150
    assert body["refreshed_at"] is not None

    ctr = next(item for item in body["insights"] if item["title"] == "Performance CTR per Network")
    assert ctr["value"] == "Migliore: 10.00% | Peggiore: 2.50%"
    assert ctr["trend"] == "neutral"

    assert client.get("/api/report").json() == body
    assert client.get("/api/platforms").json() == {"platforms": ["all", "facebook", "instagram"]}


def test_series_endpoint(client, api_rows) -> None:
    client.post("/api/report", json=api_rows)

    response = client.get("/api/series", params={"metric": "ctr", "platform": "instagram"})

    assert response.status_code == 200
    assert response.json()["points"] == [{"day": "2024-05-01", "value": 2.5}]
    assert client.get("/api/series", params={"metric": "roas"}).status_code == 422
    assert client.get("/api/series", params={"metric": "ctr", "platform": "unknown"}).status_code == 422


def test_failed_envelope_is_rejected(client) -> None:
    response = client.post("/api/report", json={"success": False, "error": "token scaduto"})

    assert response.status_code == 422
    assert response.json()["detail"] == "token scaduto"


def test_oversized_refresh_is_rejected(api_rows) -> None:
    app = create_app(AppConfig(max_records=2))
    with TestClient(app) as client:
        response = client.post("/api/report", json={"daily": api_rows})

    assert response.status_code == 413
