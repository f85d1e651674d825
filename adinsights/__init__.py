"""Pure advertising-performance analytics and insight engine."""

from adinsights.aggregation import aggregate, summarize
from adinsights.engine import build_report, generate_insights
from adinsights.enums import GroupKey, Platform, Trend
from adinsights.metrics import Metric
from adinsights.models import DailyRecord, DashboardReport, Insight, MetricsSummary, NetworkComparison
from adinsights.networks import best_worst
from adinsights.series import metric_series, platform_options

__all__ = [
    "aggregate",
    "summarize",
    "best_worst",
    "generate_insights",
    "build_report",
    "metric_series",
    "platform_options",
    "DailyRecord",
    "MetricsSummary",
    "Insight",
    "NetworkComparison",
    "DashboardReport",
    "GroupKey",
    "Metric",
    "Platform",
    "Trend",
]
