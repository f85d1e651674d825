"""Coerce dashboard API rows into engine records.

The engine assumes clean input, so every numeric field is forced to a finite,
non-negative number here and unrecognised platform codes fall back to
``unknown``.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import date, datetime
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from adinsights.models import DailyRecord

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "Errore sconosciuto"

# Record field -> accepted source keys, API name first.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "day": ("giorno", "day"),
    "platform": ("piattaforma", "platform"),
    "spend": ("spesa", "spend"),
    "clicks": ("clic_link", "clicks"),
    "impressions": ("impression", "impressions"),
    "conversion_value": ("conversioni_acquisti", "conversion_value"),
    "purchases": ("acquisti", "purchases"),
}

NUMERIC_FIELDS = ("spend", "clicks", "impressions", "conversion_value", "purchases")


class IntakeError(ValueError):
    pass


class ApiEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = True
    error: str | None = None
    metrics: dict[str, Any] = Field(default_factory=dict)
    daily: list[dict[str, Any]] = Field(default_factory=list)


def coerce_number(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_day(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _pick(row: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if key in row:
            return row[key]
    return None


def coerce_row(row: Mapping[str, Any]) -> DailyRecord | None:
    day = coerce_day(_pick(row, "day"))
    if day is None:
        return None
    values = {field: coerce_number(_pick(row, field)) for field in NUMERIC_FIELDS}
    return DailyRecord(day=day, platform=str(_pick(row, "platform") or ""), **values)


def parse_rows(rows: Iterable[Any]) -> list[DailyRecord]:
    records: list[DailyRecord] = []
    dropped = 0
    for row in rows:
        record = coerce_row(row) if isinstance(row, Mapping) else None
        if record is None:
            dropped += 1
            continue
        records.append(record)
    if dropped:
        logger.warning("dropped daily rows without a valid day", extra={"dropped_rows": dropped})
    return records


def parse_api_response(payload: Mapping[str, Any] | list[Any] | str | bytes) -> list[DailyRecord]:
    """Parse an API envelope (or a bare list of rows) into records."""
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise IntakeError(f"invalid JSON payload: {exc.msg}") from exc

    if isinstance(payload, list):
        return parse_rows(payload)
    if not isinstance(payload, Mapping):
        raise IntakeError("payload must be a JSON object or array")

    try:
        envelope = ApiEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise IntakeError(f"invalid payload: {exc.error_count()} validation error(s)") from exc
    if not envelope.success:
        raise IntakeError(envelope.error or DEFAULT_ERROR)
    return parse_rows(envelope.daily)
