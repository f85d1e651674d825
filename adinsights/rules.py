"""Ordered insight rules.

Each rule is a descriptor: ``guard`` decides whether the rule applies,
``compute`` derives the numbers it needs and ``render`` turns them into an
``Insight``. Rules never see ``unknown``-platform records.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import fsum
from typing import Any, Callable

from adinsights.enums import Trend
from adinsights.formatting import day_label, euro, network_label, percent, plain_number
from adinsights.metrics import Metric
from adinsights.models import DailyRecord, Insight, MetricsSummary, NetworkComparison
from adinsights.networks import best_worst

RECENT_WINDOW_DAYS = 7
CTR_BENCHMARK = 1.0
CONVERSION_RATE_BENCHMARK = 1.80
CPA_VALUE_SHARE = 0.3


@dataclass(frozen=True, slots=True)
class RuleContext:
    summary: MetricsSummary
    records: tuple[DailyRecord, ...]


@dataclass(frozen=True, slots=True)
class InsightRule:
    name: str
    guard: Callable[[RuleContext], bool]
    compute: Callable[[RuleContext], Any]
    render: Callable[[Any], Insight]

    def evaluate(self, ctx: RuleContext) -> Insight | None:
        if not self.guard(ctx):
            return None
        return self.render(self.compute(ctx))


def _trend(positive: bool) -> Trend:
    return Trend.POSITIVE if positive else Trend.NEGATIVE


# ROI


def _roi(ctx: RuleContext) -> float:
    spend = ctx.summary.total_spend
    return (ctx.summary.total_conversion_value - spend) / spend * 100


def _render_roi(roi: float) -> Insight:
    positive = roi > 0
    return Insight(
        title="ROI Complessivo",
        description=(
            f"Ottimo ritorno sull'investimento! Ogni euro speso ha generato un ritorno netto di {euro(roi / 100)}."
            if positive
            else "Il ROI è negativo. Potrebbe essere necessario variare il tipo di offerta."
        ),
        trend=_trend(positive),
        value=percent(roi),
    )


ROI_RULE = InsightRule(
    name="roi",
    guard=lambda ctx: ctx.summary.total_spend > 0 and ctx.summary.total_conversion_value > 0,
    compute=_roi,
    render=_render_roi,
)


# CTR


def _render_ctr(ctr: float) -> Insight:
    positive = ctr > CTR_BENCHMARK
    return Insight(
        title="Performance CTR",
        description=(
            "Il CTR è sopra la media del settore, le tue inserzioni sono efficaci nel catturare l'attenzione."
            if positive
            else "Il CTR potrebbe essere migliorato."
        ),
        trend=_trend(positive),
        value=percent(ctr),
    )


CTR_RULE = InsightRule(
    name="ctr",
    guard=lambda ctx: ctx.summary.total_impressions > 0 and ctx.summary.avg_ctr > 0,
    compute=lambda ctx: ctx.summary.avg_ctr,
    render=_render_ctr,
)


# Cost per acquisition


def _cpa(ctx: RuleContext) -> tuple[float, float]:
    purchases = ctx.summary.total_purchases
    cpa = ctx.summary.total_spend / purchases
    threshold = ctx.summary.total_conversion_value / purchases * CPA_VALUE_SHARE
    return cpa, threshold


def _render_cpa(values: tuple[float, float]) -> Insight:
    cpa, threshold = values
    positive = cpa < threshold
    return Insight(
        title="Costo per Acquisizione",
        description=(
            "Il costo per acquisizione è ottimo rispetto al valore medio delle conversioni."
            if positive
            else "Il costo per acquisizione è alto rispetto al valore delle conversioni."
        ),
        trend=_trend(positive),
        value=euro(cpa),
    )


CPA_RULE = InsightRule(
    name="cpa",
    guard=lambda ctx: ctx.summary.total_purchases > 0 and ctx.summary.total_spend > 0,
    compute=_cpa,
    render=_render_cpa,
)


# Conversion rate


def _render_conversion_rate(rate: float) -> Insight:
    positive = rate > CONVERSION_RATE_BENCHMARK
    return Insight(
        title="Tasso di Conversione",
        description=(
            "Ottimo tasso di conversione! Il traffico è di qualità."
            if positive
            else "Il tasso di conversione potrebbe essere migliorato."
        ),
        trend=_trend(positive),
        value=percent(rate),
    )


CONVERSION_RATE_RULE = InsightRule(
    name="conversion_rate",
    guard=lambda ctx: ctx.summary.total_clicks > 0 and ctx.summary.total_purchases > 0,
    compute=lambda ctx: ctx.summary.total_purchases / ctx.summary.total_clicks * 100,
    render=_render_conversion_rate,
)


# Recent trend


def recent_window(records: tuple[DailyRecord, ...]) -> list[DailyRecord]:
    return sorted(records, key=lambda record: record.day)[-RECENT_WINDOW_DAYS:]


def _recent_sums(ctx: RuleContext) -> tuple[float, float]:
    window = recent_window(ctx.records)
    spend = fsum(record.spend for record in window)
    conversions = fsum(record.conversion_value for record in window)
    return spend, conversions


def _recent_guard(ctx: RuleContext) -> bool:
    if len(ctx.records) <= RECENT_WINDOW_DAYS:
        return False
    spend, conversions = _recent_sums(ctx)
    return spend > 0 and conversions > 0


def _recent_cpa(ctx: RuleContext) -> tuple[float, float]:
    spend, conversions = _recent_sums(ctx)
    overall = ctx.summary.total_spend / (ctx.summary.total_purchases or 1)
    return spend / conversions, overall


def _render_recent(values: tuple[float, float]) -> Insight:
    recent_cpa, overall_cpa = values
    positive = recent_cpa < overall_cpa
    return Insight(
        title="Trend Recente",
        description=(
            "Le performance degli ultimi 7 giorni sono migliori della media del periodo."
            if positive
            else "Le performance recenti sono sotto la media del periodo. Monitora attentamente i prossimi giorni."
        ),
        trend=_trend(positive),
        value=f"CPA: {euro(recent_cpa)}",
    )


RECENT_TREND_RULE = InsightRule(
    name="recent_trend",
    guard=_recent_guard,
    compute=_recent_cpa,
    render=_render_recent,
)


# Best day for investment


def _best_day(ctx: RuleContext) -> tuple[DailyRecord, float]:
    # Total conversion value is split evenly across records, not per-day actuals.
    share = ctx.summary.total_conversion_value / len(ctx.records)
    scored = [(record, share - record.spend if record.spend > 0 else 0.0) for record in ctx.records]
    # max() keeps the first of equal maxima.
    return max(scored, key=lambda item: item[1])


def _render_best_day(values: tuple[DailyRecord, float]) -> Insight:
    record, roi = values
    positive = roi > 0
    return Insight(
        title="Miglior Giorno per Investimento",
        description=(
            f"Il giorno {day_label(record.day)} ha generato il miglior ritorno sull'investimento."
            if positive
            else "Nessun giorno ha generato un ROI positivo durante il periodo analizzato."
        ),
        trend=_trend(positive),
        value=f"ROI: {euro(roi)} | Spesa: {euro(record.spend)}",
    )


BEST_DAY_RULE = InsightRule(
    name="best_day",
    guard=lambda ctx: len(ctx.records) > 1,
    compute=_best_day,
    render=_render_best_day,
)


# Network breakdowns


def _network_rule(
    metric: Metric,
    title: str,
    describe: Callable[[str, str], str],
    show: Callable[[float], str],
) -> InsightRule:
    def render(comparison: NetworkComparison) -> Insight:
        return Insight(
            title=title,
            description=describe(
                network_label(comparison.best.platform),
                network_label(comparison.worst.platform),
            ),
            trend=Trend.NEUTRAL,
            value=f"Migliore: {show(comparison.best.value)} | Peggiore: {show(comparison.worst.value)}",
        )

    return InsightRule(
        name=f"network_{metric.value}",
        guard=lambda ctx: True,
        compute=lambda ctx: best_worst(ctx.records, metric),
        render=render,
    )


NETWORK_CTR_RULE = _network_rule(
    Metric.CTR,
    "Performance CTR per Network",
    lambda best, worst: f"{best} ha il CTR più alto, mentre {worst} mostra il CTR più basso.",
    percent,
)

NETWORK_CPC_RULE = _network_rule(
    Metric.CPC,
    "Performance CPC per Network",
    lambda best, worst: f"{best} ha il CPC più basso, mentre {worst} mostra il CPC più alto.",
    euro,
)

NETWORK_PURCHASES_RULE = _network_rule(
    Metric.PURCHASES,
    "Performance Acquisti per Network",
    lambda best, worst: f"{best} ha generato più acquisti, mentre {worst} ha generato meno acquisti.",
    plain_number,
)


DEFAULT_RULES: tuple[InsightRule, ...] = (
    ROI_RULE,
    CTR_RULE,
    CPA_RULE,
    CONVERSION_RATE_RULE,
    RECENT_TREND_RULE,
    BEST_DAY_RULE,
    NETWORK_CTR_RULE,
    NETWORK_CPC_RULE,
    NETWORK_PURCHASES_RULE,
)
