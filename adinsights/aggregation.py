from __future__ import annotations

from collections import defaultdict
from datetime import date
from math import fsum
from typing import Iterable

from adinsights.enums import KNOWN_PLATFORMS, GroupKey
from adinsights.models import DailyRecord, MetricsSummary

ALL_KEY = "all"


def safe_ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    if denominator <= 0:
        return 0.0
    return (numerator / denominator) * scale


def known_records(records: Iterable[DailyRecord]) -> list[DailyRecord]:
    return [record for record in records if record.is_known]


def _summarize_group(group: list[DailyRecord]) -> MetricsSummary:
    spend = fsum(record.spend for record in group)
    clicks = fsum(record.clicks for record in group)
    impressions = fsum(record.impressions for record in group)
    return MetricsSummary(
        total_spend=spend,
        total_clicks=clicks,
        total_conversion_value=fsum(record.conversion_value for record in group),
        total_impressions=impressions,
        total_purchases=fsum(record.purchases for record in group),
        avg_cpc=safe_ratio(spend, clicks),
        avg_ctr=safe_ratio(clicks, impressions, 100.0),
        avg_cpm=safe_ratio(spend, impressions, 1000.0),
    )


def parse_group_key(value: GroupKey | str | None) -> GroupKey:
    if value is None:
        return GroupKey.ALL
    if isinstance(value, GroupKey):
        return value
    lowered = str(value).strip().lower()
    if lowered == "none":
        return GroupKey.ALL
    try:
        return GroupKey(lowered)
    except ValueError as exc:
        raise ValueError(f"unknown group key: {value!r}") from exc


def aggregate(
    records: Iterable[DailyRecord],
    group_key: GroupKey | str | None = GroupKey.ALL,
) -> dict[date | str, MetricsSummary]:
    """Group records and compute summed totals plus weighted ratios.

    ``all`` always yields the single ``"all"`` key, ``day`` yields dates in
    ascending order and ``platform`` yields platform codes in canonical order.
    Records on the ``unknown`` platform never take part.
    """
    key = parse_group_key(group_key)
    valid = known_records(records)

    if key == GroupKey.ALL:
        return {ALL_KEY: _summarize_group(valid)}

    if key == GroupKey.DAY:
        by_day: dict[date, list[DailyRecord]] = defaultdict(list)
        for record in valid:
            by_day[record.day].append(record)
        return {day: _summarize_group(by_day[day]) for day in sorted(by_day)}

    by_platform: dict[str, list[DailyRecord]] = defaultdict(list)
    for record in valid:
        by_platform[record.platform.value].append(record)
    return {
        platform.value: _summarize_group(by_platform[platform.value])
        for platform in KNOWN_PLATFORMS
        if platform.value in by_platform
    }


def summarize(records: Iterable[DailyRecord]) -> MetricsSummary:
    return aggregate(records, GroupKey.ALL)[ALL_KEY]
