from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Iterable

from adinsights import build_report, metric_series, platform_options
from adinsights.models import DailyRecord, DashboardReport, SeriesPoint

logger = logging.getLogger(__name__)


class ReportTooLargeError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class ReportSnapshot:
    records: tuple[DailyRecord, ...]
    report: DashboardReport
    refreshed_at: datetime | None


class ReportService:
    """Holds the latest report; each refresh replaces it as a whole."""

    def __init__(self, max_records: int = 50_000) -> None:
        self.max_records = max_records
        self._lock = threading.Lock()
        self._snapshot = ReportSnapshot(records=(), report=build_report(()), refreshed_at=None)

    def snapshot(self) -> ReportSnapshot:
        with self._lock:
            return self._snapshot

    def refresh(self, records: Iterable[DailyRecord], now: datetime | None = None) -> ReportSnapshot:
        frozen = tuple(records)
        if len(frozen) > self.max_records:
            raise ReportTooLargeError(f"refresh has {len(frozen)} records, max is {self.max_records}")

        # Compute outside the lock; readers keep the previous snapshot meanwhile.
        snapshot = ReportSnapshot(
            records=frozen,
            report=build_report(frozen),
            refreshed_at=now or datetime.now(UTC),
        )
        with self._lock:
            self._snapshot = snapshot
        logger.info(
            "report refreshed",
            extra={"records": len(frozen), "insights": len(snapshot.report.insights)},
        )
        return snapshot

    def platforms(self) -> list[str]:
        return platform_options(self.snapshot().records)

    def series(self, metric: str, platform: str = "all") -> list[SeriesPoint]:
        return metric_series(self.snapshot().records, metric, platform)
