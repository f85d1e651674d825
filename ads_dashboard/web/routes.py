from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Query, Request

from ads_dashboard.intake import IntakeError, parse_api_response
from ads_dashboard.service import ReportService, ReportSnapshot, ReportTooLargeError

router = APIRouter()


def _get_service(request: Request) -> ReportService:
    return request.app.state.report_service  # type: ignore[no-any-return]


def _report_payload(snapshot: ReportSnapshot) -> dict[str, Any]:
    payload = snapshot.report.model_dump(mode="json")
    payload["refreshed_at"] = snapshot.refreshed_at.isoformat() if snapshot.refreshed_at else None
    payload["record_count"] = len(snapshot.records)
    return payload


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/report")
def get_report(request: Request) -> dict[str, Any]:
    return _report_payload(_get_service(request).snapshot())


@router.post("/api/report")
def refresh_report(request: Request, payload: Any = Body(...)) -> dict[str, Any]:
    service = _get_service(request)
    try:
        records = parse_api_response(payload)
        snapshot = service.refresh(records)
    except ReportTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    except IntakeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _report_payload(snapshot)


@router.get("/api/platforms")
def get_platforms(request: Request) -> dict[str, list[str]]:
    return {"platforms": _get_service(request).platforms()}


@router.get("/api/series")
def get_series(
    request: Request,
    metric: str = Query(..., min_length=1, max_length=32),
    platform: str = Query("all", min_length=1, max_length=32),
) -> dict[str, Any]:
    try:
        points = _get_service(request).series(metric, platform)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {
        "metric": metric,
        "platform": platform,
        "points": [point.model_dump(mode="json") for point in points],
    }
