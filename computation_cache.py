from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, TypeVar

from models import LoggedSet

logger = logging.getLogger(__name__)

T = TypeVar("T")

CACHE_VERSION = "v2"
DEFAULT_TTL_SECONDS = 600.0


@dataclass
class CacheEntry:
    value: Any
    input_ref: Any
    inserted_at: float
    ttl: float


def _refs_match(stored: Any, current: Any) -> bool:
    # content fingerprints compare by value, everything else by identity
    if isinstance(stored, (str, bytes, int)) and isinstance(current, (str, bytes, int)):
        return type(stored) is type(current) and stored == current
    return stored is current


def dataset_fingerprint(sets: Iterable[LoggedSet]) -> str:
    """Return a content hash of ``sets`` usable as a cache input reference."""
    digest = hashlib.sha1()
    for s in sets:
        stamp = s.parsed_date.isoformat() if s.parsed_date else ""
        row = "|".join(
            (
                s.exercise,
                repr(s.weight_kg),
                str(s.reps),
                str(s.set_index),
                stamp,
                s.title,
                str(s.set_type),
                "1" if s.is_pr else "0",
                s.session_id or "",
            )
        )
        digest.update(row.encode("utf-8"))
        digest.update(b"\n")
    return digest.hexdigest()


class ComputationCache:
    """Memoize computations per key and input reference with lazy TTL expiry.

    Not thread safe; callers share one instance from a single thread.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get_or_compute(
        self,
        key: str,
        input_ref: Any,
        compute_fn: Callable[[], T],
        ttl: Optional[float] = None,
    ) -> T:
        ttl = self.default_ttl if ttl is None else ttl
        now = self._clock()
        entry = self._entries.get(key)
        if entry is not None:
            if now - entry.inserted_at >= min(entry.ttl, ttl):
                logger.debug("cache expired: %s", key)
                del self._entries[key]
            elif _refs_match(entry.input_ref, input_ref):
                logger.debug("cache hit: %s", key)
                return entry.value
        logger.debug("cache miss: %s", key)
        value = compute_fn()
        self._entries[key] = CacheEntry(value, input_ref, now, ttl)
        return value

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


class CacheKeys:
    """Build versioned cache keys of the form ``feature:v2:filter:params``."""

    @staticmethod
    def build(feature: str, filter_key: str, *params: Any) -> str:
        parts = [feature, CACHE_VERSION, filter_key or "all"]
        parts.extend("" if p is None else str(p) for p in params)
        return ":".join(parts)

    @classmethod
    def windowed_sets(cls, filter_key: str, mode: str) -> str:
        return cls.build("windowedWorkoutSets", filter_key, mode)

    @classmethod
    def session_heatmap(cls, filter_key: str, session_key: str, view: str) -> str:
        return cls.build("sessionHeatmap", filter_key, session_key, view)

    @classmethod
    def exercise_heatmap(cls, filter_key: str, exercise: str) -> str:
        return cls.build("exerciseHeatmap", filter_key, exercise)

    @classmethod
    def headless_heatmap(cls, filter_key: str, mode: str) -> str:
        return cls.build("headlessHeatmap", filter_key, mode)

    @classmethod
    def weekly_sets(cls, filter_key: str, window: str, grouping: str) -> str:
        return cls.build("weeklySets", filter_key, window, grouping)

    @classmethod
    def weekly_delta(cls, filter_key: str, window: str, grouping: str, selection: str) -> str:
        return cls.build("weeklyDelta", filter_key, window, grouping, selection)

    @classmethod
    def muscle_series(cls, filter_key: str, period: str, view: str) -> str:
        return cls.build("muscleSeries", filter_key, period, view)

    @classmethod
    def exercise_trends(cls, filter_key: str, mode: str) -> str:
        return cls.build("exerciseTrends", filter_key, mode)

    @classmethod
    def plateau_analysis(cls, filter_key: str, mode: str) -> str:
        return cls.build("plateauAnalysis", filter_key, mode)
