from __future__ import annotations

from collections import defaultdict
from math import fsum
from statistics import fmean
from typing import Iterable

from adinsights.aggregation import known_records, summarize
from adinsights.metrics import Metric, Reduction, parse_metric
from adinsights.models import DailyRecord, NetworkComparison, NetworkPerformance

PLACEHOLDER_PLATFORM = "-"


def placeholder() -> NetworkPerformance:
    return NetworkPerformance(platform=PLACEHOLDER_PLATFORM, value=0.0)


def _network_value(group: list[DailyRecord], metric: Metric) -> float:
    if metric.reduction == Reduction.RATIO:
        return metric.from_summary(summarize(group))
    values = [metric.from_record(record) for record in group]
    if metric.reduction == Reduction.SUM:
        return fsum(values)
    return fmean(values)


def network_values(records: Iterable[DailyRecord], metric: Metric | str) -> list[NetworkPerformance]:
    """Per-network metric values, in the order networks are first seen."""
    resolved = parse_metric(metric)
    groups: dict[str, list[DailyRecord]] = defaultdict(list)
    for record in known_records(records):
        groups[record.platform.value].append(record)
    return [
        NetworkPerformance(platform=platform, value=_network_value(group, resolved))
        for platform, group in groups.items()
    ]


def best_worst(records: Iterable[DailyRecord], metric: Metric | str) -> NetworkComparison:
    resolved = parse_metric(metric)
    values = network_values(records, resolved)
    if not values:
        return NetworkComparison(best=placeholder(), worst=placeholder())
    # sorted() is stable for reverse=True as well, so ties keep encounter order.
    ranked = sorted(values, key=lambda item: item.value, reverse=not resolved.lower_is_better)
    return NetworkComparison(best=ranked[0], worst=ranked[-1])
