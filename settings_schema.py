from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError


class TrendSettings(BaseModel):
    min_sessions: int = Field(4, ge=1)
    plateau_window: int = Field(6, ge=2)
    reactive_window: int = Field(4, ge=2)
    stable_window: int = Field(6, ge=2)
    gaining_pct: float = 2.0
    losing_pct: float = -3.0
    weight_static_epsilon_kg: float = Field(0.5, ge=0)
    rep_static_epsilon: int = Field(1, ge=0)
    min_signal_reps: int = Field(2, ge=0)
    bodyweight_share: float = Field(0.75, gt=0, le=1)
    premature_pr_sessions: int = Field(2, ge=0)
    pr_lookback: int = Field(6, ge=3)
    pr_spike_pct: float = 2.0
    post_pr_drop_pct: float = -2.5
    mode: Literal["stable", "reactive"] = "reactive"


class RollingSettings(BaseModel):
    window_days: int = Field(7, ge=1)
    break_days: int = Field(7, ge=1)
    chart_max_points: int = Field(30, ge=1)


class CacheSettings(BaseModel):
    ttl_seconds: float = Field(600.0, gt=0)
    content_fingerprint: bool = False


class AnalyticsSettings(BaseModel):
    trend: TrendSettings = TrendSettings()
    rolling: RollingSettings = RollingSettings()
    cache: CacheSettings = CacheSettings()
    attribution_path: Optional[str] = None


def validate_settings(data: dict) -> AnalyticsSettings:
    try:
        return AnalyticsSettings(**data)
    except ValidationError as e:
        raise ValueError(str(e))
