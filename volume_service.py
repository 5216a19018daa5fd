from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from models import Attribution, LoggedSet, VolumeResult
from muscle_attribution import MuscleAttributionModel, is_full_body
from set_classifier import is_unilateral, is_warmup, set_increment

logger = logging.getLogger(__name__)

VIEWS = ("muscle", "group", "headless")


class VolumeAggregator:
    """Attribute working sets to muscle parts, groups and headless regions."""

    def __init__(self, model: MuscleAttributionModel) -> None:
        self.model = model

    def _resolve(self, exercise: str) -> Optional[Tuple[List[str], List[str]]]:
        attr = self.model.attribution_for(exercise)
        primary = list(attr.primary)
        secondary = list(attr.secondary)
        if not primary and secondary:
            primary = [secondary[0]]
            secondary = secondary[1:]
        if not primary:
            return None
        return primary, secondary

    def group_contributions(self, logged_set: LoggedSet) -> Dict[str, float]:
        """Return one set's increments keyed by group name or standalone part."""
        if not logged_set.exercise or is_warmup(logged_set):
            return {}
        resolved = self._resolve(logged_set.exercise)
        if resolved is None:
            return {}
        primaries, secondaries = resolved
        base = set_increment(logged_set)
        secondary_inc = 0.25 if is_unilateral(logged_set) else 0.5

        if any(is_full_body(p) for p in primaries):
            return {group: base for group in self.model.groups()}

        out: Dict[str, float] = {}
        primary_groups = set()
        secondary_groups = set()
        for muscle in primaries:
            for part in self.model.parts_for(muscle):
                group = self.model.group_for(part)
                if group:
                    primary_groups.add(group)
                else:
                    out[part] = out.get(part, 0.0) + base
        for muscle in secondaries:
            for part in self.model.parts_for(muscle):
                group = self.model.group_for(part)
                if group:
                    if group not in primary_groups:
                        secondary_groups.add(group)
                else:
                    out[part] = out.get(part, 0.0) + secondary_inc
        for group in primary_groups:
            out[group] = out.get(group, 0.0) + base
        for group in secondary_groups:
            out[group] = out.get(group, 0.0) + secondary_inc
        return out

    def expand_groups(self, grouped: Mapping[str, float]) -> Dict[str, float]:
        """Replicate each group total across its parts."""
        volumes: Dict[str, float] = {}
        for key, value in grouped.items():
            if value <= 0:
                continue
            parts = self.model.parts_in_group(key)
            if parts:
                for part in parts:
                    volumes[part] = value
            else:
                volumes[key] = value
        return volumes

    def set_contributions(self, logged_set: LoggedSet, view: str = "muscle") -> Dict[str, float]:
        grouped = self.group_contributions(logged_set)
        if view == "group":
            return grouped
        if view == "muscle":
            return self.expand_groups(grouped)
        if view == "headless":
            return self.headless_collapse(self.expand_groups(grouped))
        raise ValueError(f"unknown view: {view}")

    def _sum_groups(self, sets: Iterable[LoggedSet]) -> Dict[str, float]:
        totals: Dict[str, float] = {}
        skipped = 0
        for s in sets:
            contrib = self.group_contributions(s)
            if not contrib:
                skipped += 1
                continue
            for key, value in contrib.items():
                totals[key] = totals.get(key, 0.0) + value
        if skipped:
            logger.debug("%d sets contributed no volume", skipped)
        return totals

    def aggregate(self, sets: Iterable[LoggedSet]) -> VolumeResult:
        """Return part-level volumes with group totals replicated across parts."""
        return VolumeResult.from_volumes(
            self.expand_groups(self._sum_groups(sets)), view="muscle"
        )

    def aggregate_groups(self, sets: Iterable[LoggedSet]) -> VolumeResult:
        grouped = {k: v for k, v in self._sum_groups(sets).items() if v > 0}
        return VolumeResult.from_volumes(grouped, view="group")

    def aggregate_headless(self, sets: Iterable[LoggedSet]) -> VolumeResult:
        collapsed = self.headless_collapse(self.aggregate(sets).volumes)
        return VolumeResult.from_volumes(collapsed, view="headless")

    def heatmap(self, sets: Iterable[LoggedSet], view: str = "muscle") -> VolumeResult:
        if view == "muscle":
            return self.aggregate(sets)
        if view == "group":
            return self.aggregate_groups(sets)
        if view == "headless":
            return self.aggregate_headless(sets)
        raise ValueError(f"unknown view: {view}")

    def exercise_weights(self, attribution: Optional[Attribution]) -> Dict[str, float]:
        """Return the static per-set weight of each part for one exercise."""
        if attribution is None:
            return {}
        primaries = [m for m in attribution.primary if m.lower() != "none"]
        secondaries = [m for m in attribution.secondary if m.lower() != "none"]
        if not primaries and secondaries:
            primaries = [secondaries[0]]
            secondaries = secondaries[1:]
        if not primaries or any(p.lower() == "cardio" for p in primaries):
            return {}

        weights: Dict[str, float] = {}
        if any(is_full_body(p) for p in primaries):
            for group in self.model.groups():
                for part in self.model.parts_in_group(group):
                    weights[part] = 1.0
            return weights

        for muscle in primaries:
            for part in self.model.parts_for(muscle):
                weights[part] = 1.0
        for muscle in secondaries:
            for part in self.model.parts_for(muscle):
                weights.setdefault(part, 0.5)

        # light every part of a group that was hit
        for group in self.model.groups():
            parts = self.model.parts_in_group(group)
            peak = max((weights.get(p, 0.0) for p in parts), default=0.0)
            if peak > 0:
                for part in parts:
                    weights.setdefault(part, peak)
        return weights

    def exercise_heatmap(
        self, sets: Iterable[LoggedSet], attribution: Optional[Attribution]
    ) -> VolumeResult:
        """Scale one exercise's static weights by its working-set count."""
        working = 0.0
        for s in sets:
            if is_warmup(s):
                continue
            working += set_increment(s)
        weights = self.exercise_weights(attribution)
        if working <= 0 or not weights:
            return VolumeResult({}, 1.0, view="muscle")
        volumes = {part: w * working for part, w in weights.items()}
        return VolumeResult.from_volumes(volumes, view="muscle")

    def headless_collapse(self, volumes: Mapping[str, float]) -> Dict[str, float]:
        """Merge parts into headless ids taking the max across merged parts."""
        out: Dict[str, float] = {}
        for key, value in volumes.items():
            headless = self.model.headless_for(key)
            if not headless:
                continue
            if value > out.get(headless, 0.0):
                out[headless] = value
        return out

    def headless_collapse_sum(self, volumes: Mapping[str, float]) -> Dict[str, float]:
        out: Dict[str, float] = {}
        for key, value in volumes.items():
            headless = self.model.headless_for(key)
            if not headless:
                continue
            out[headless] = out.get(headless, 0.0) + value
        return out

    def headless_radar_series(self, headless_volumes: Mapping[str, float]) -> List[Tuple[str, float]]:
        """Return ``(name, value)`` for every headless region, highest first."""
        rows = [
            (self.model.headless_name(hid), round(headless_volumes.get(hid, 0.0), 1))
            for hid in self.model.headless_ids()
        ]
        return sorted(rows, key=lambda r: r[1], reverse=True)
