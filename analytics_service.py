from __future__ import annotations

import datetime
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from computation_cache import CacheKeys, ComputationCache, dataset_fingerprint
from exercise_history import build_exercise_stats
from models import (
    DeltaResult,
    LoggedSet,
    SeriesPoint,
    TrendResult,
    VolumeResult,
    WeeklySetsDashboard,
    WindowedSets,
)
from muscle_attribution import MuscleAttributionModel
from rolling_volume_service import (
    RATE_WINDOW_DAYS,
    RollingVolumeService,
    earliest_date,
    effective_now,
    rate_window_start,
)
from settings_schema import AnalyticsSettings
from trend_service import ExerciseTrendClassifier
from volume_service import VolumeAggregator

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Compute heatmaps, weekly rates and exercise trends with caching."""

    def __init__(
        self,
        model: MuscleAttributionModel,
        settings: AnalyticsSettings | None = None,
        cache: ComputationCache | None = None,
    ) -> None:
        self.settings = settings or AnalyticsSettings()
        self.model = model
        self.volumes = VolumeAggregator(model)
        self.rolling = RollingVolumeService(self.volumes, self.settings.rolling)
        self.trends = ExerciseTrendClassifier(self.settings.trend, model)
        self.cache = cache or ComputationCache(self.settings.cache.ttl_seconds)

    @classmethod
    def from_settings(cls, settings: AnalyticsSettings) -> "AnalyticsService":
        if settings.attribution_path:
            model = MuscleAttributionModel.from_yaml(settings.attribution_path)
        else:
            model = MuscleAttributionModel.default()
        return cls(model, settings)

    def clear_cache(self) -> None:
        """Drop every cached result."""
        self.cache.clear()

    def _ref(self, sets: Sequence[LoggedSet]) -> Any:
        if self.settings.cache.content_fingerprint:
            return dataset_fingerprint(sets)
        return sets

    def _now(self, sets: Sequence[LoggedSet], now: Optional[datetime.datetime]):
        return now or effective_now(sets)

    def windowed_sets(
        self,
        sets: Sequence[LoggedSet],
        mode: str = "all",
        filter_key: str = "all",
        now: datetime.datetime | None = None,
    ) -> WindowedSets:
        key = CacheKeys.windowed_sets(filter_key, f"{mode}:{now.isoformat() if now else ''}")
        return self.cache.get_or_compute(
            key, self._ref(sets), lambda: self.rolling.windowed_sets(sets, mode, now)
        )

    def session_heatmap(
        self,
        sets: Sequence[LoggedSet],
        session_key: str,
        view: str = "muscle",
        filter_key: str = "all",
    ) -> VolumeResult:
        def compute() -> VolumeResult:
            session = [s for s in sets if s.session_key == session_key]
            return self.volumes.heatmap(session, view)

        key = CacheKeys.session_heatmap(filter_key, session_key, view)
        return self.cache.get_or_compute(key, self._ref(sets), compute)

    def exercise_heatmap(
        self, sets: Sequence[LoggedSet], exercise: str, filter_key: str = "all"
    ) -> VolumeResult:
        def compute() -> VolumeResult:
            rows = [s for s in sets if s.exercise == exercise]
            return self.volumes.exercise_heatmap(rows, self.model.attribution_for(exercise))

        key = CacheKeys.exercise_heatmap(filter_key, exercise)
        return self.cache.get_or_compute(key, self._ref(sets), compute)

    def headless_heatmap(
        self,
        sets: Sequence[LoggedSet],
        mode: str = "all",
        filter_key: str = "all",
        now: datetime.datetime | None = None,
    ) -> VolumeResult:
        def compute() -> VolumeResult:
            windowed = self.rolling.windowed_sets(sets, mode, now)
            return self.volumes.aggregate_headless(windowed.sets)

        key = CacheKeys.headless_heatmap(filter_key, f"{mode}:{now.isoformat() if now else ''}")
        return self.cache.get_or_compute(key, self._ref(sets), compute)

    def weekly_sets_dashboard(
        self,
        sets: Sequence[LoggedSet],
        window: str = "30d",
        view: str = "group",
        filter_key: str = "all",
        now: datetime.datetime | None = None,
    ) -> WeeklySetsDashboard:
        current = self._now(sets, now)

        def compute() -> WeeklySetsDashboard:
            if current is None:
                return WeeklySetsDashboard(VolumeResult({}, 1.0, view), {}, 1.0, None)
            return self.rolling.weekly_sets_dashboard(sets, current, window, view)

        key = CacheKeys.weekly_sets(filter_key, window, f"{view}:{current.isoformat() if current else ''}")
        return self.cache.get_or_compute(key, self._ref(sets), compute)

    def weekly_rate(
        self,
        sets: Sequence[LoggedSet],
        window: str = "7d",
        selection: Sequence[str] = (),
        view: str = "group",
        now: datetime.datetime | None = None,
    ) -> Optional[float]:
        """Return the weekly rate for a named window, or ``None`` without dated sets."""
        current = self._now(sets, now)
        if current is None:
            return None
        start = rate_window_start(sets, current, window)
        if start is None:
            return None
        return self.rolling.weekly_rate(sets, start, current, tuple(selection), view)

    def weekly_delta(
        self,
        sets: Sequence[LoggedSet],
        window: str = "7d",
        selection: Sequence[str] = (),
        view: str = "group",
        filter_key: str = "all",
        now: datetime.datetime | None = None,
    ) -> Optional[DeltaResult]:
        # the all-time window has no previous period to compare with
        if window == "all":
            return None
        if window not in RATE_WINDOW_DAYS:
            raise ValueError(f"unknown rate window: {window}")
        current = self._now(sets, now)

        def compute() -> Optional[DeltaResult]:
            start = rate_window_start(sets, current, window) if current else None
            if start is None:
                return None
            return self.rolling.delta(
                sets,
                RATE_WINDOW_DAYS[window],
                start,
                current,
                earliest_date(sets),
                tuple(selection),
                view,
            )

        key = CacheKeys.weekly_delta(
            filter_key,
            window,
            view,
            f"{','.join(sorted(selection))}:{current.isoformat() if current else ''}",
        )
        return self.cache.get_or_compute(key, self._ref(sets), compute)

    def muscle_series(
        self,
        sets: Sequence[LoggedSet],
        period: str | None = None,
        view: str = "group",
        filter_key: str = "all",
    ) -> List[SeriesPoint]:
        """Return chart points, picking the period from the data span when omitted."""
        period = period or self.rolling.chart_period(sets)
        key = CacheKeys.muscle_series(filter_key, period, view)
        return self.cache.get_or_compute(
            key, self._ref(sets), lambda: self.rolling.muscle_series(sets, period, view)
        )

    def exercise_trends(
        self,
        sets: Sequence[LoggedSet],
        mode: str | None = None,
        filter_key: str = "all",
    ) -> Dict[str, TrendResult]:
        mode = mode or self.settings.trend.mode
        key = CacheKeys.exercise_trends(filter_key, mode)
        return self.cache.get_or_compute(
            key,
            self._ref(sets),
            lambda: self.trends.classify_all(build_exercise_stats(sets), mode),
        )

    def plateaus(
        self,
        sets: Sequence[LoggedSet],
        mode: str | None = None,
        filter_key: str = "all",
    ) -> List[Tuple[str, TrendResult]]:
        mode = mode or self.settings.trend.mode
        key = CacheKeys.plateau_analysis(filter_key, mode)
        return self.cache.get_or_compute(
            key,
            self._ref(sets),
            lambda: self.trends.detect_plateaus(build_exercise_stats(sets), mode),
        )
