from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class LoggedSet:
    """One logged exercise set as produced by ingestion."""

    exercise: str
    weight_kg: float
    reps: int
    set_index: int = 0
    parsed_date: Optional[datetime.datetime] = None
    end_date: Optional[datetime.datetime] = None
    title: str = ""
    is_pr: bool = False
    set_type: str = "normal"
    session_id: Optional[str] = None

    @property
    def session_key(self) -> str:
        """Return the backend session id or a ``date|title`` fallback."""
        if self.session_id:
            return self.session_id
        day = self.parsed_date.date().isoformat() if self.parsed_date else ""
        return f"{day}|{self.title}"


@dataclass(frozen=True)
class Attribution:
    primary: Tuple[str, ...] = ()
    secondary: Tuple[str, ...] = ()
    equipment: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.primary and not self.secondary


@dataclass
class VolumeResult:
    """Volume map plus the scale maximum used for coloring."""

    volumes: Dict[str, float]
    max_volume: float = 1.0
    view: str = "muscle"

    @classmethod
    def from_volumes(cls, volumes: Dict[str, float], view: str = "muscle") -> "VolumeResult":
        peak = max(volumes.values()) if volumes else 0.0
        return cls(volumes=volumes, max_volume=max(1.0, peak), view=view)

    def get(self, key: str, default: float = 0.0) -> float:
        return self.volumes.get(key, default)


@dataclass(frozen=True)
class DailyVolume:
    day: datetime.date
    key: str
    volumes: Dict[str, float]


@dataclass(frozen=True)
class RollingVolume:
    day: datetime.date
    key: str
    volumes: Dict[str, float]
    total_sets: float
    is_in_break: bool = False


@dataclass(frozen=True)
class PeriodAverage:
    period_key: str
    start: datetime.date
    end: datetime.date
    avg_weekly_sets: Dict[str, float]
    total_avg_sets: float
    training_days: int


@dataclass(frozen=True)
class SeriesPoint:
    """One chart row whose ``values`` are keyed according to ``view``."""

    timestamp: datetime.datetime
    label: str
    view: str
    values: Dict[str, float]

    def total(self, selection: Tuple[str, ...] = ()) -> float:
        if not selection:
            return sum(self.values.values())
        return sum(self.values.get(k, 0.0) for k in selection)


@dataclass(frozen=True)
class DeltaResult:
    current: float
    previous: float
    delta: float
    delta_percent: int
    direction: str


@dataclass(frozen=True)
class WindowedSets:
    sets: List[LoggedSet]
    min_ts: Optional[datetime.datetime]
    max_ts: Optional[datetime.datetime]


@dataclass(frozen=True)
class WeeklySetsDashboard:
    heatmap: VolumeResult
    rates: Dict[str, float]
    weeks: float
    window_start: Optional[datetime.datetime]


@dataclass
class ExerciseHistoryEntry:
    """Per-set history row or, once summarized, one row per session."""

    date: datetime.datetime
    weight: float
    reps: int
    one_rep_max: float
    volume: float
    session_key: str = ""
    sets: float = 1.0
    total_reps: int = 0
    max_reps: int = 0
    is_pr: bool = False
    side: Optional[str] = None


@dataclass
class ExerciseStats:
    name: str
    total_sets: int = 0
    total_volume: float = 0.0
    max_weight: float = 0.0
    history: List[ExerciseHistoryEntry] = field(default_factory=list)


@dataclass(frozen=True)
class PlateauInfo:
    weight: float
    min_reps: int
    max_reps: int
    sessions_at_plateau: int


@dataclass(frozen=True)
class TrendCalculation:
    history_len: int
    window_size: int
    current_avg: float
    previous_avg: float
    latest_metric: Optional[float] = None
    previous_session_metric: Optional[float] = None
    recent_delta_abs: Optional[float] = None
    recent_delta_pct: Optional[float] = None


@dataclass
class TrendResult:
    status: str
    is_bodyweight_like: bool = False
    diff_pct: Optional[float] = None
    confidence: str = "low"
    evidence: List[str] = field(default_factory=list)
    plateau: Optional[PlateauInfo] = None
    premature_pr: bool = False
    pr_spike_pct: Optional[float] = None
    pr_drop_pct: Optional[float] = None
    calculation: Optional[TrendCalculation] = None
