from __future__ import annotations

from typing import Dict, Iterable, List

from algorithms.math_tools import MathTools
from models import ExerciseHistoryEntry, ExerciseStats, LoggedSet
from set_classifier import is_warmup, side_of


def chronological(sets: Iterable[LoggedSet]) -> List[LoggedSet]:
    """Return dated sets ordered by date, then set index, then input position."""
    indexed = [(pos, s) for pos, s in enumerate(sets) if s.parsed_date is not None]
    indexed.sort(key=lambda item: (item[1].parsed_date, item[1].set_index, item[0]))
    return [s for _, s in indexed]


def build_exercise_stats(sets: Iterable[LoggedSet]) -> Dict[str, ExerciseStats]:
    """Group working sets by exercise into per-set history rows, newest first."""
    stats: Dict[str, ExerciseStats] = {}
    for s in chronological(sets):
        if is_warmup(s) or not s.exercise:
            continue
        entry = stats.get(s.exercise)
        if entry is None:
            entry = ExerciseStats(name=s.exercise)
            stats[s.exercise] = entry
        volume = s.weight_kg * s.reps
        entry.total_sets += 1
        entry.total_volume += volume
        entry.max_weight = max(entry.max_weight, s.weight_kg)
        entry.history.append(
            ExerciseHistoryEntry(
                date=s.parsed_date,
                weight=s.weight_kg,
                reps=s.reps,
                one_rep_max=MathTools.epley_1rm(s.weight_kg, s.reps),
                volume=volume,
                session_key=s.session_key,
                total_reps=s.reps,
                max_reps=s.reps,
                is_pr=s.is_pr,
                side=side_of(s),
            )
        )
    for entry in stats.values():
        entry.history.reverse()
    return stats


def summarize_history(
    history: Iterable[ExerciseHistoryEntry], separate_sides: bool = False
) -> List[ExerciseHistoryEntry]:
    """Collapse per-set rows into one entry per session, newest first.

    The session weight and reps come from its best estimated one-rep max.
    Left and right sets count as half a set each unless ``separate_sides``
    splits them into their own entries.
    """
    sessions: Dict[str, ExerciseHistoryEntry] = {}
    for h in history:
        if h.date is None:
            continue
        key = h.session_key or h.date.isoformat()
        if separate_sides and h.side:
            key = f"{key}-{h.side}"
        entry = sessions.get(key)
        if entry is None:
            entry = ExerciseHistoryEntry(
                date=h.date,
                weight=0.0,
                reps=0,
                one_rep_max=0.0,
                volume=0.0,
                session_key=h.session_key,
                sets=0.0,
                side=h.side if separate_sides else None,
            )
            sessions[key] = entry
        entry.sets += 0.5 if h.side else 1.0
        entry.volume += h.volume
        entry.total_reps += h.reps
        entry.max_reps = max(entry.max_reps, h.reps)
        entry.is_pr = entry.is_pr or h.is_pr
        if h.date < entry.date:
            entry.date = h.date
        if h.one_rep_max >= entry.one_rep_max:
            entry.one_rep_max = h.one_rep_max
            entry.weight = h.weight
            entry.reps = h.reps
    return sorted(sessions.values(), key=lambda e: e.date, reverse=True)
