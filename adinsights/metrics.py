"""Enumerated metric identifiers and their typed extractors."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from adinsights.models import DailyRecord, MetricsSummary


class Reduction(str, Enum):
    SUM = "sum"
    RATIO = "ratio"
    MEAN = "mean"


class Metric(str, Enum):
    SPEND = "spend"
    CLICKS = "clicks"
    IMPRESSIONS = "impressions"
    CONVERSION_VALUE = "conversion_value"
    PURCHASES = "purchases"
    CPC = "cpc"
    CTR = "ctr"
    CPM = "cpm"

    @property
    def reduction(self) -> Reduction:
        return _REDUCTIONS[self]

    @property
    def lower_is_better(self) -> bool:
        return self in COST_METRICS

    def from_summary(self, summary: MetricsSummary) -> float:
        return _SUMMARY_EXTRACTORS[self](summary)

    def from_record(self, record: DailyRecord) -> float:
        """Raw field value; ratio metrics have no per-record field."""
        extractor = _RECORD_EXTRACTORS.get(self)
        if extractor is None:
            raise ValueError(f"{self.value} is derived and has no record field")
        return float(extractor(record))


COST_METRICS = frozenset({Metric.CPC})

_REDUCTIONS: dict[Metric, Reduction] = {
    Metric.SPEND: Reduction.MEAN,
    Metric.CLICKS: Reduction.SUM,
    Metric.IMPRESSIONS: Reduction.SUM,
    Metric.CONVERSION_VALUE: Reduction.MEAN,
    Metric.PURCHASES: Reduction.SUM,
    Metric.CPC: Reduction.RATIO,
    Metric.CTR: Reduction.RATIO,
    Metric.CPM: Reduction.RATIO,
}

_SUMMARY_EXTRACTORS: dict[Metric, Callable[[MetricsSummary], float]] = {
    Metric.SPEND: lambda s: s.total_spend,
    Metric.CLICKS: lambda s: s.total_clicks,
    Metric.IMPRESSIONS: lambda s: s.total_impressions,
    Metric.CONVERSION_VALUE: lambda s: s.total_conversion_value,
    Metric.PURCHASES: lambda s: s.total_purchases,
    Metric.CPC: lambda s: s.avg_cpc,
    Metric.CTR: lambda s: s.avg_ctr,
    Metric.CPM: lambda s: s.avg_cpm,
}

_RECORD_EXTRACTORS: dict[Metric, Callable[[DailyRecord], float]] = {
    Metric.SPEND: lambda r: r.spend,
    Metric.CLICKS: lambda r: r.clicks,
    Metric.IMPRESSIONS: lambda r: r.impressions,
    Metric.CONVERSION_VALUE: lambda r: r.conversion_value,
    Metric.PURCHASES: lambda r: r.purchases,
}


def parse_metric(value: Metric | str) -> Metric:
    if isinstance(value, Metric):
        return value
    try:
        return Metric(str(value).strip().lower())
    except ValueError as exc:
        raise ValueError(f"unknown metric: {value!r}") from exc
