from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adinsights.enums import DescriptionFormat, Platform, Trend


class DailyRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    day: date
    platform: Platform
    spend: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    clicks: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    impressions: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    conversion_value: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    purchases: float = Field(default=0.0, ge=0, allow_inf_nan=False)

    @field_validator("platform", mode="before")
    @classmethod
    def normalize_platform(cls, value: Any) -> Any:
        if isinstance(value, Platform):
            return value
        code = str(value or "").strip().lower()
        try:
            return Platform(code)
        except ValueError:
            return Platform.UNKNOWN

    @property
    def is_known(self) -> bool:
        return self.platform != Platform.UNKNOWN


class MetricsSummary(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    total_spend: float = Field(default=0.0, ge=0)
    total_clicks: float = Field(default=0.0, ge=0)
    total_conversion_value: float = Field(default=0.0, ge=0)
    total_impressions: float = Field(default=0.0, ge=0)
    total_purchases: float = Field(default=0.0, ge=0)
    avg_cpc: float = Field(default=0.0, ge=0)
    avg_ctr: float = Field(default=0.0, ge=0)
    avg_cpm: float = Field(default=0.0, ge=0)


class Insight(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = Field(min_length=1)
    description: str
    trend: Trend
    value: str
    description_format: DescriptionFormat | None = None


class NetworkPerformance(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    platform: str
    value: float


class NetworkComparison(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    best: NetworkPerformance
    worst: NetworkPerformance


class SeriesPoint(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    day: date
    value: float


class DashboardReport(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    summary: MetricsSummary
    insights: list[Insight] = Field(default_factory=list)
