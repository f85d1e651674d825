"""Local host application around the adinsights engine."""

from ads_dashboard.config import AppConfig, load_config
from ads_dashboard.service import ReportService

__all__ = ["AppConfig", "load_config", "ReportService"]
