from __future__ import annotations

from typing import Iterable

from adinsights.aggregation import aggregate, known_records
from adinsights.enums import KNOWN_PLATFORMS, GroupKey, Platform
from adinsights.metrics import Metric, parse_metric
from adinsights.models import DailyRecord, SeriesPoint

ALL_PLATFORMS = "all"


def platform_options(records: Iterable[DailyRecord]) -> list[str]:
    present = {record.platform for record in known_records(records)}
    return [ALL_PLATFORMS] + [platform.value for platform in KNOWN_PLATFORMS if platform in present]


def _parse_platform(value: Platform | str) -> Platform | None:
    code = value.value if isinstance(value, Platform) else str(value).strip().lower()
    if code == ALL_PLATFORMS:
        return None
    try:
        platform = Platform(code)
    except ValueError:
        platform = Platform.UNKNOWN
    if platform == Platform.UNKNOWN:
        raise ValueError(f"unknown platform: {value!r}")
    return platform


def metric_series(
    records: Iterable[DailyRecord],
    metric: Metric | str,
    platform: Platform | str = ALL_PLATFORMS,
) -> list[SeriesPoint]:
    """Daily chart values, ascending by day, for one platform or all of them."""
    resolved = parse_metric(metric)
    selected = _parse_platform(platform)
    scoped = [record for record in records if selected is None or record.platform == selected]
    by_day = aggregate(scoped, GroupKey.DAY)
    return [SeriesPoint(day=day, value=resolved.from_summary(summary)) for day, summary in by_day.items()]
