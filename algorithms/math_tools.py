from typing import Iterable, Optional

import numpy as np


class MathTools:
    """Provides the numeric helpers shared by the analytics services."""

    EPLEY_DIVISOR: float = 30.0
    ZERO_WEIGHT_EPSILON: float = 0.0001

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @classmethod
    def epley_1rm(cls, weight: float, reps: int) -> float:
        """Return the Epley one-rep max estimate rounded to two decimals."""
        if reps <= 0 or weight <= 0:
            return 0.0
        return round(weight * (1 + reps / cls.EPLEY_DIVISOR), 2)

    @staticmethod
    def average(values: Iterable[float]) -> float:
        """Return the arithmetic mean of ``values`` or ``0.0`` when empty."""
        arr = np.asarray(list(values), dtype=float)
        if arr.size == 0:
            return 0.0
        return float(np.mean(arr))

    @staticmethod
    def pct_change(current: float, previous: float) -> Optional[float]:
        """Return the percentage change or ``None`` for a non-positive base."""
        if previous <= 0:
            return None
        return (current - previous) / previous * 100

    @staticmethod
    def round_to(value: float, places: int = 1) -> float:
        return float(round(value, places))

    @staticmethod
    def sign(value: float) -> int:
        return int(np.sign(value))

    @classmethod
    def is_zero_weight(cls, weight: float) -> bool:
        return weight <= cls.ZERO_WEIGHT_EPSILON
