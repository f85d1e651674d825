from __future__ import annotations

import logging
from typing import Iterable, Sequence

from adinsights.aggregation import known_records, summarize
from adinsights.models import DailyRecord, DashboardReport, Insight, MetricsSummary
from adinsights.rules import DEFAULT_RULES, InsightRule, RuleContext

logger = logging.getLogger(__name__)


def generate_insights(
    summary: MetricsSummary,
    daily_records: Iterable[DailyRecord],
    rules: Sequence[InsightRule] = DEFAULT_RULES,
) -> list[Insight]:
    ctx = RuleContext(summary=summary, records=tuple(known_records(daily_records)))
    insights: list[Insight] = []
    for rule in rules:
        insight = rule.evaluate(ctx)
        if insight is None:
            logger.debug("insight rule %s skipped", rule.name)
            continue
        insights.append(insight)
    return insights


def build_report(records: Iterable[DailyRecord]) -> DashboardReport:
    snapshot = tuple(records)
    summary = summarize(snapshot)
    return DashboardReport(summary=summary, insights=generate_insights(summary, snapshot))
