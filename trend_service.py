from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from algorithms.math_tools import MathTools
from exercise_history import summarize_history
from models import (
    ExerciseHistoryEntry,
    ExerciseStats,
    PlateauInfo,
    TrendCalculation,
    TrendResult,
)
from muscle_attribution import MuscleAttributionModel
from settings_schema import TrendSettings

logger = logging.getLogger(__name__)

RECENT_SESSIONS = 4


def recent_direction_tag(overall: float, recent: float) -> Optional[str]:
    """Describe the latest session change relative to the overall trend."""
    overall_sign = MathTools.sign(overall)
    recent_sign = MathTools.sign(recent)
    if recent_sign == 0:
        return None
    if overall_sign == 0:
        return "improving" if recent_sign > 0 else "worsening"
    if overall_sign == recent_sign:
        if abs(recent) >= abs(overall) + 1.0:
            return "accelerating" if recent_sign > 0 else "getting worse"
        if abs(recent) <= max(0.0, abs(overall) - 1.0):
            return "steady progress" if recent_sign > 0 else "easing"
        return "still improving" if recent_sign > 0 else "still declining"
    return "rebound" if recent_sign > 0 else "slipping"


def confidence_for(history_len: int, window_size: int, min_sessions: int) -> str:
    if history_len < min_sessions:
        return "low"
    if history_len >= 10 and window_size >= 6:
        return "high"
    if history_len >= 6:
        return "medium"
    return "low"


class ExerciseTrendClassifier:
    """Label an exercise's session history as new, stagnant, overload or regression."""

    def __init__(
        self,
        settings: TrendSettings | None = None,
        model: MuscleAttributionModel | None = None,
    ) -> None:
        self.settings = settings or TrendSettings()
        self.model = model

    def _metric(self, entry: ExerciseHistoryEntry, bodyweight: bool) -> float:
        return float(entry.max_reps) if bodyweight else entry.one_rep_max

    def _plateau_reps(self, entry: ExerciseHistoryEntry, bodyweight: bool) -> int:
        return entry.max_reps if bodyweight else (entry.reps or entry.max_reps)

    def is_bodyweight_like(
        self, newest: Sequence[ExerciseHistoryEntry], exercise: str | None = None
    ) -> bool:
        recent = newest[:RECENT_SESSIONS]
        if not recent:
            return False
        zero = sum(1 for h in recent if MathTools.is_zero_weight(h.weight))
        if zero >= math.ceil(len(recent) * self.settings.bodyweight_share):
            return True
        if exercise and self.model is not None and self.model.is_bodyweight_exercise(exercise):
            return zero > 0
        return False

    def find_plateau(
        self, newest: Sequence[ExerciseHistoryEntry], bodyweight: bool
    ) -> Optional[PlateauInfo]:
        """Return a plateau when the latest sessions hold weight and a narrow rep band."""
        cfg = self.settings
        window = newest[: min(cfg.plateau_window, len(newest))]
        if len(window) < 2:
            return None
        anchor = window[0].weight
        reps = [self._plateau_reps(h, bodyweight) for h in window]
        if any(abs(h.weight - anchor) >= cfg.weight_static_epsilon_kg for h in window):
            return None
        if max(reps) - min(reps) > cfg.rep_static_epsilon:
            return None

        low, high, count = min(reps), max(reps), 0
        for h in newest:
            r = self._plateau_reps(h, bodyweight)
            if abs(h.weight - anchor) >= cfg.weight_static_epsilon_kg:
                break
            if max(high, r) - min(low, r) > cfg.rep_static_epsilon:
                break
            low, high = min(low, r), max(high, r)
            count += 1
        return PlateauInfo(anchor, min(reps), max(reps), count)

    def _early_pr(self, oldest_first: Sequence[ExerciseHistoryEntry]) -> bool:
        positions = [i for i, h in enumerate(oldest_first) if h.is_pr]
        return bool(positions) and positions[-1] < self.settings.premature_pr_sessions

    def _pr_spike(
        self, newest: Sequence[ExerciseHistoryEntry], bodyweight: bool
    ) -> Tuple[bool, Optional[float], Optional[float]]:
        """Detect a PR spike that later sessions could not get back to."""
        cfg = self.settings
        sessions = newest[: min(cfg.pr_lookback, len(newest))]
        metric = [self._metric(h, bodyweight) for h in sessions]
        margin = 0.25 if bodyweight else 0.001
        pr_index = -1
        for i in range(1, len(metric) - 1):
            if metric[i] > max([0.0] + metric[i + 1 :]) + margin:
                pr_index = i
                break
        if pr_index < 1:
            return False, None, None

        pr_metric = metric[pr_index]
        prior = metric[pr_index + 1]
        spike_pct = MathTools.pct_change(pr_metric, prior) or 0.0
        spike_abs = pr_metric - prior
        meaningful = spike_abs >= 1 if bodyweight else spike_pct >= cfg.pr_spike_pct

        after = sessions[:pr_index]
        best_after = max([0.0] + metric[:pr_index])
        drop_pct = MathTools.pct_change(best_after, pr_metric) or 0.0
        drop_abs = best_after - pr_metric
        if bodyweight:
            rehits = sum(1 for h in after if h.max_reps >= pr_metric)
        else:
            pr_weight = sessions[pr_index].weight
            rehits = sum(
                1 for h in after if h.weight >= pr_weight - cfg.weight_static_epsilon_kg
            )
        failed = drop_abs <= -1 if bodyweight else drop_pct <= cfg.post_pr_drop_pct
        if rehits < 2 and meaningful and failed:
            if bodyweight:
                return True, None, None
            return True, spike_pct, drop_pct
        return False, None, None

    def classify(
        self,
        history: Sequence[ExerciseHistoryEntry],
        exercise: str | None = None,
        mode: str | None = None,
    ) -> TrendResult:
        """Classify a session history ordered oldest to newest."""
        cfg = self.settings
        mode = mode or cfg.mode
        n = len(history)
        if n == 0:
            return TrendResult("new", evidence=["sessions=0"])

        newest = list(reversed(history))
        early_pr = self._early_pr(history)
        bodyweight = self.is_bodyweight_like(newest, exercise)
        recent = newest[:RECENT_SESSIONS]
        if bodyweight:
            signal = max(h.max_reps for h in recent) >= cfg.min_signal_reps
        else:
            signal = max(h.weight for h in recent) > MathTools.ZERO_WEIGHT_EPSILON
        if not signal:
            evidence = ["signal=none", f"sessions={n}"]
            if n < cfg.min_sessions:
                evidence.append(f"sessions_until_trend={cfg.min_sessions - n}")
            return TrendResult(
                "new",
                is_bodyweight_like=bodyweight,
                evidence=evidence,
                premature_pr=early_pr,
            )

        if n < cfg.min_sessions:
            return TrendResult(
                "new",
                is_bodyweight_like=bodyweight,
                evidence=[f"sessions={n}", f"sessions_until_trend={cfg.min_sessions - n}"],
                premature_pr=early_pr,
            )

        if mode == "reactive":
            window = cfg.reactive_window
        else:
            window = cfg.stable_window if n >= cfg.stable_window else cfg.reactive_window
        window = min(window, n)
        half = window // 2
        metric = [self._metric(h, bodyweight) for h in newest[:window]]
        current = MathTools.average(metric[:half])
        previous = MathTools.average(metric[half:])
        if current <= 0 or previous <= 0:
            return TrendResult(
                "new",
                is_bodyweight_like=bodyweight,
                evidence=[f"sessions={n}", "metric_avg=0"],
                premature_pr=early_pr,
            )
        diff_abs = current - previous
        diff_pct = MathTools.pct_change(current, previous)

        latest_metric = self._metric(newest[0], bodyweight)
        prev_metric = self._metric(newest[1], bodyweight) if n > 1 else None
        recent_abs = recent_pct = None
        if prev_metric is not None:
            recent_abs = latest_metric - prev_metric
            recent_pct = MathTools.pct_change(latest_metric, prev_metric) or 0.0

        evidence = [
            f"metric={'max_reps' if bodyweight else 'e1rm'}",
            f"diff_pct={diff_pct:+.1f}",
            f"window={window}",
            f"sessions={n}",
        ]
        if recent_abs is not None:
            if bodyweight:
                delta_reps = int(round(recent_abs))
                if abs(delta_reps) >= 1:
                    evidence.append(f"recent_reps={delta_reps:+d}")
                    tag = recent_direction_tag(diff_abs, delta_reps)
                    if tag:
                        evidence.append(f"recent_trend={tag}")
            elif abs(recent_pct) >= 0.5:
                evidence.append(f"recent_pct={recent_pct:+.1f}")
                tag = recent_direction_tag(diff_pct, recent_pct)
                if tag:
                    evidence.append(f"recent_trend={tag}")

        spike, spike_pct, drop_pct = self._pr_spike(newest, bodyweight)
        premature = early_pr or spike
        if premature:
            evidence.append("premature_pr=true")

        plateau = self.find_plateau(newest, bodyweight)
        if plateau is not None:
            status = "stagnant"
            evidence.append(f"plateau={plateau.weight:g}x{plateau.min_reps}-{plateau.max_reps}")
            evidence.append(f"sessions_at_plateau={plateau.sessions_at_plateau}")
        elif diff_pct > cfg.gaining_pct:
            status = "overload"
        elif diff_pct < cfg.losing_pct:
            status = "regression"
        else:
            status = "stagnant"

        return TrendResult(
            status,
            is_bodyweight_like=bodyweight,
            diff_pct=diff_pct,
            confidence=confidence_for(n, window, cfg.min_sessions),
            evidence=evidence,
            plateau=plateau,
            premature_pr=premature,
            pr_spike_pct=spike_pct,
            pr_drop_pct=drop_pct,
            calculation=TrendCalculation(
                history_len=n,
                window_size=window,
                current_avg=current,
                previous_avg=previous,
                latest_metric=latest_metric,
                previous_session_metric=prev_metric,
                recent_delta_abs=recent_abs,
                recent_delta_pct=recent_pct,
            ),
        )

    def classify_stats(self, stats: ExerciseStats, mode: str | None = None) -> TrendResult:
        sessions = summarize_history(stats.history)
        return self.classify(list(reversed(sessions)), stats.name, mode)

    def classify_all(
        self, stats: Dict[str, ExerciseStats], mode: str | None = None
    ) -> Dict[str, TrendResult]:
        results = {name: self.classify_stats(s, mode) for name, s in stats.items()}
        logger.debug("classified %d exercises", len(results))
        return results

    def detect_plateaus(
        self, stats: Dict[str, ExerciseStats], mode: str | None = None
    ) -> List[Tuple[str, TrendResult]]:
        """Return stagnant exercises with a plateau, longest plateau first."""
        found = [
            (name, result)
            for name, result in self.classify_all(stats, mode).items()
            if result.status == "stagnant" and result.plateau is not None
        ]
        found.sort(key=lambda item: item[1].plateau.sessions_at_plateau, reverse=True)
        return found
