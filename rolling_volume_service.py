from __future__ import annotations

import datetime
import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Set

import pandas as pd

from algorithms.math_tools import MathTools
from models import (
    DailyVolume,
    DeltaResult,
    LoggedSet,
    PeriodAverage,
    RollingVolume,
    SeriesPoint,
    VolumeResult,
    WeeklySetsDashboard,
    WindowedSets,
)
from settings_schema import RollingSettings
from set_classifier import is_warmup
from volume_service import VolumeAggregator

logger = logging.getLogger(__name__)

RATE_WINDOW_DAYS = {"7d": 7, "30d": 30, "365d": 365}
DISPLAY_WINDOW_DAYS = {"weekly": 13, "monthly": 59, "yearly": 729}
CHART_AGGREGATIONS = ("daily", "weekly", "monthly")
MIN_PLAUSIBLE_YEAR = 1971
MAX_PLAUSIBLE_YEAR = 2099


def start_of_day(ts: datetime.datetime) -> datetime.datetime:
    return ts.replace(hour=0, minute=0, second=0, microsecond=0)


def is_plausible_date(ts: Optional[datetime.datetime]) -> bool:
    return ts is not None and MIN_PLAUSIBLE_YEAR <= ts.year <= MAX_PLAUSIBLE_YEAR


def effective_now(sets: Iterable[LoggedSet]) -> Optional[datetime.datetime]:
    """Return the latest plausible set timestamp in ``sets``."""
    latest = None
    for s in sets:
        if not is_plausible_date(s.parsed_date):
            continue
        if latest is None or s.parsed_date > latest:
            latest = s.parsed_date
    return latest


def earliest_date(sets: Iterable[LoggedSet]) -> Optional[datetime.datetime]:
    dates = [s.parsed_date for s in sets if s.parsed_date is not None]
    return min(dates) if dates else None


def display_window_start(mode: str, now: datetime.datetime) -> Optional[datetime.datetime]:
    """Return the start of the visible window, two periods wide."""
    if mode == "all":
        return None
    if mode not in DISPLAY_WINDOW_DAYS:
        raise ValueError(f"unknown window mode: {mode}")
    return start_of_day(now - datetime.timedelta(days=DISPLAY_WINDOW_DAYS[mode]))


def rate_window_start(
    sets: Iterable[LoggedSet], now: datetime.datetime, window: str
) -> Optional[datetime.datetime]:
    """Return the rate window start clamped to the first logged set."""
    earliest = earliest_date(sets)
    if earliest is None:
        return None
    if window == "all":
        return earliest
    if window not in RATE_WINDOW_DAYS:
        raise ValueError(f"unknown rate window: {window}")
    candidate = now - datetime.timedelta(days=RATE_WINDOW_DAYS[window])
    return max(earliest, candidate)


def weeks_between(start: datetime.datetime, end: datetime.datetime) -> float:
    days = max(1, (end.date() - start.date()).days + 1)
    return max(1.0, days / 7)


def pick_chart_aggregation(
    min_ts: Optional[datetime.datetime],
    max_ts: Optional[datetime.datetime],
    preferred: str = "daily",
    max_points: int = 30,
) -> str:
    """Return the finest aggregation at or above ``preferred`` that fits ``max_points``."""
    if min_ts is None or max_ts is None or max_ts <= min_ts:
        return preferred
    span_days = max(1, int((max_ts - min_ts).total_seconds() // 86400) + 1)
    estimates = {
        "daily": span_days,
        "weekly": math.ceil(span_days / 7),
        "monthly": math.ceil(span_days / 30),
    }
    start = CHART_AGGREGATIONS.index(preferred) if preferred in CHART_AGGREGATIONS else 0
    for candidate in CHART_AGGREGATIONS[start:]:
        if estimates[candidate] <= max_points:
            return candidate
    return "monthly"


def bucket_series(points: Sequence[SeriesPoint], period: str) -> List[SeriesPoint]:
    """Keep the last point per Monday-start week or calendar month."""
    if period not in ("weekly", "monthly"):
        raise ValueError(f"unknown bucket period: {period}")
    if not points:
        return []
    ordered = sorted(points, key=lambda p: p.timestamp)
    frame = pd.DataFrame(
        {"pos": range(len(ordered))},
        index=pd.DatetimeIndex([p.timestamp for p in ordered]),
    )
    freq = "W-SUN" if period == "weekly" else "M"
    last = frame.groupby(frame.index.to_period(freq))["pos"].last()
    out = []
    for bucket, pos in last.items():
        point = ordered[int(pos)]
        start = bucket.start_time.to_pydatetime()
        label = start.date().isoformat() if period == "weekly" else bucket.strftime("%Y-%m")
        out.append(SeriesPoint(start, label, point.view, dict(point.values)))
    return out


class RollingVolumeService:
    """Weekly rates, period deltas and rolling series over dated sets."""

    def __init__(
        self,
        aggregator: VolumeAggregator,
        settings: RollingSettings | None = None,
    ) -> None:
        self.aggregator = aggregator
        self.settings = settings or RollingSettings()

    def windowed_sets(
        self, sets: Sequence[LoggedSet], mode: str, now: datetime.datetime | None = None
    ) -> WindowedSets:
        now = now or effective_now(sets)
        dated = [s for s in sets if s.parsed_date is not None]
        if now is None:
            return WindowedSets([], None, None)
        start = display_window_start(mode, now)
        if start is not None:
            dated = [s for s in dated if start <= s.parsed_date <= now]
        if not dated:
            return WindowedSets([], None, None)
        stamps = [s.parsed_date for s in dated]
        return WindowedSets(dated, min(stamps), max(stamps))

    def daily_volumes(
        self,
        sets: Iterable[LoggedSet],
        view: str = "group",
        start: datetime.datetime | None = None,
        end: datetime.datetime | None = None,
        end_inclusive: bool = True,
    ) -> List[DailyVolume]:
        """Return per-day contribution totals in ascending date order."""
        days: Dict[datetime.date, Dict[str, float]] = {}
        for s in sets:
            ts = s.parsed_date
            if ts is None or is_warmup(s):
                continue
            if start is not None and ts < start:
                continue
            if end is not None and (ts > end if end_inclusive else ts >= end):
                continue
            contrib = self.aggregator.set_contributions(s, view)
            if not contrib:
                continue
            bucket = days.setdefault(ts.date(), {})
            for key, value in contrib.items():
                bucket[key] = bucket.get(key, 0.0) + value
        return [
            DailyVolume(day, day.isoformat(), days[day]) for day in sorted(days)
        ]

    @staticmethod
    def _total(daily: Iterable[DailyVolume], selection: Sequence[str]) -> float:
        total = 0.0
        for entry in daily:
            if selection:
                total += sum(entry.volumes.get(k, 0.0) for k in selection)
            else:
                total += sum(entry.volumes.values())
        return total

    def weekly_rate(
        self,
        sets: Iterable[LoggedSet],
        window_start: datetime.datetime,
        now: datetime.datetime,
        selection: Sequence[str] = (),
        view: str = "group",
    ) -> float:
        """Return weighted sets in ``[window_start, now]`` per seven days."""
        return MathTools.round_to(
            self._raw_rate(sets, window_start, now, selection, view), 1
        )

    def _raw_rate(
        self,
        sets: Iterable[LoggedSet],
        window_start: datetime.datetime,
        now: datetime.datetime,
        selection: Sequence[str],
        view: str,
    ) -> float:
        daily = self.daily_volumes(sets, view, window_start, now)
        return self._total(daily, selection) / weeks_between(window_start, now)

    def delta(
        self,
        sets: Sequence[LoggedSet],
        window_days: int,
        window_start: datetime.datetime,
        now: datetime.datetime,
        all_time_start: datetime.datetime | None = None,
        selection: Sequence[str] = (),
        view: str = "group",
    ) -> Optional[DeltaResult]:
        """Compare the current window with the one before it, or ``None``."""
        current = self._raw_rate(sets, window_start, now, selection, view)
        previous_start = window_start - datetime.timedelta(days=window_days)
        if all_time_start is not None and previous_start < all_time_start:
            previous_start = all_time_start
        if previous_start >= window_start:
            return None
        daily = self.daily_volumes(
            sets, view, previous_start, window_start, end_inclusive=False
        )
        days = max(1, (window_start.date() - previous_start.date()).days)
        previous = self._total(daily, selection) / max(1.0, days / 7)
        if previous <= 0:
            return None
        # percent and direction come from the unrounded rates
        diff = current - previous
        pct = int(round(MathTools.pct_change(current, previous)))
        direction = "up" if diff > 0 else "down" if diff < 0 else "same"
        return DeltaResult(
            MathTools.round_to(current, 1),
            MathTools.round_to(previous, 1),
            MathTools.round_to(diff, 1),
            pct,
            direction,
        )

    def weekly_sets_dashboard(
        self,
        sets: Sequence[LoggedSet],
        now: datetime.datetime,
        window: str = "30d",
        view: str = "group",
    ) -> WeeklySetsDashboard:
        window_start = rate_window_start(sets, now, window)
        if window_start is None:
            return WeeklySetsDashboard(VolumeResult({}, 1.0, view), {}, 1.0, None)
        weeks = weeks_between(window_start, now)
        totals: Dict[str, float] = {}
        for entry in self.daily_volumes(sets, view, window_start, now):
            for key, value in entry.volumes.items():
                totals[key] = totals.get(key, 0.0) + value
        rates = {k: MathTools.round_to(v / weeks, 1) for k, v in totals.items()}
        if view == "group":
            heatmap = VolumeResult.from_volumes(self.aggregator.expand_groups(rates), "muscle")
        else:
            heatmap = VolumeResult.from_volumes(dict(rates), view)
        return WeeklySetsDashboard(heatmap, rates, weeks, window_start)

    def identify_breaks(self, daily: Sequence[DailyVolume]) -> Set[str]:
        """Return keys of training days that follow a gap longer than the break threshold."""
        breaks = set()
        for prev, cur in zip(daily, daily[1:]):
            if (cur.day - prev.day).days > self.settings.break_days:
                breaks.add(cur.key)
        return breaks

    def rolling_weekly_volumes(self, daily: Sequence[DailyVolume]) -> List[RollingVolume]:
        """Return the trailing rolling-window sums at each training day."""
        breaks = self.identify_breaks(daily)
        out: List[RollingVolume] = []
        accum: Dict[str, float] = {}
        total = 0.0
        start_idx = 0
        for i, day in enumerate(daily):
            for key, value in day.volumes.items():
                accum[key] = accum.get(key, 0.0) + value
                total += value
            window_start = day.day - datetime.timedelta(days=self.settings.window_days - 1)
            while start_idx <= i and daily[start_idx].day < window_start:
                for key, value in daily[start_idx].volumes.items():
                    remaining = accum.get(key, 0.0) - value
                    if remaining <= 1e-9:
                        accum.pop(key, None)
                    else:
                        accum[key] = remaining
                    total -= value
                start_idx += 1
            out.append(
                RollingVolume(
                    day.day,
                    day.key,
                    dict(accum),
                    MathTools.round_to(total, 1),
                    day.key in breaks,
                )
            )
        return out

    @staticmethod
    def period_average_volumes(
        rolling: Sequence[RollingVolume], period: str
    ) -> List[PeriodAverage]:
        """Average the rolling weekly volumes per month or year, skipping break days."""
        if period not in ("monthly", "yearly"):
            raise ValueError(f"unknown period: {period}")
        buckets: Dict[str, List[RollingVolume]] = {}
        for rv in rolling:
            if rv.is_in_break:
                continue
            key = rv.day.strftime("%Y-%m") if period == "monthly" else rv.day.strftime("%Y")
            buckets.setdefault(key, []).append(rv)
        out = []
        for key, items in buckets.items():
            sums: Dict[str, float] = {}
            for rv in items:
                for muscle, value in rv.volumes.items():
                    sums[muscle] = sums.get(muscle, 0.0) + value
            count = len(items)
            first = items[0].day
            start = first.replace(day=1) if period == "monthly" else first.replace(month=1, day=1)
            out.append(
                PeriodAverage(
                    key,
                    start,
                    items[-1].day,
                    {m: v / count for m, v in sums.items()},
                    sum(rv.total_sets for rv in items) / count,
                    count,
                )
            )
        return sorted(out, key=lambda p: p.start)

    def rolling_weekly_series(
        self, sets: Iterable[LoggedSet], view: str = "group"
    ) -> List[SeriesPoint]:
        rolling = self.rolling_weekly_volumes(self.daily_volumes(sets, view))
        return [
            SeriesPoint(
                datetime.datetime.combine(rv.day, datetime.time.min),
                rv.key,
                view,
                rv.volumes,
            )
            for rv in rolling
            if not rv.is_in_break
        ]

    def period_average_series(
        self, sets: Iterable[LoggedSet], period: str, view: str = "group"
    ) -> List[SeriesPoint]:
        rolling = self.rolling_weekly_volumes(self.daily_volumes(sets, view))
        return [
            SeriesPoint(
                datetime.datetime.combine(p.start, datetime.time.min),
                p.period_key,
                view,
                p.avg_weekly_sets,
            )
            for p in self.period_average_volumes(rolling, period)
        ]

    def muscle_series(
        self,
        sets: Sequence[LoggedSet],
        period: str | None = None,
        view: str = "group",
    ) -> List[SeriesPoint]:
        """Return chart points for ``period`` (daily, weekly, monthly or yearly).

        Without a period the finest aggregation that keeps the dated span of
        ``sets`` within ``chart_max_points`` is used.
        """
        if period is None:
            period = self.chart_period(sets)
        if period == "daily":
            return self.rolling_weekly_series(sets, view)
        if period == "weekly":
            return bucket_series(self.rolling_weekly_series(sets, view), "weekly")
        if period in ("monthly", "yearly"):
            return self.period_average_series(sets, period, view)
        raise ValueError(f"unknown series period: {period}")

    def chart_period(self, sets: Sequence[LoggedSet], preferred: str = "daily") -> str:
        return pick_chart_aggregation(
            earliest_date(sets),
            effective_now(sets),
            preferred,
            max_points=self.settings.chart_max_points,
        )
