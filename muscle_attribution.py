from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

import muscle_data
from models import Attribution

logger = logging.getLogger(__name__)

FULL_BODY_RE = re.compile(r"^full[\s-]*body$", re.IGNORECASE)
NON_MUSCLE_TOKENS = {"none", "cardio"}


def normalize_name(name: str) -> str:
    """Return ``name`` lower-cased with whitespace collapsed."""
    return " ".join(str(name or "").split()).lower()


def split_muscles(value) -> Tuple[str, ...]:
    """Split a comma separated string or list into clean muscle names."""
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    return tuple(str(m).strip() for m in items if str(m).strip())


def is_full_body(muscle: str) -> bool:
    return bool(FULL_BODY_RE.match(str(muscle).strip()))


class MuscleAttributionModel:
    """Read-only lookup from exercises to muscles, parts, groups and headless ids."""

    def __init__(
        self,
        exercises: Mapping[str, Attribution],
        muscle_parts: Mapping[str, Iterable[str]],
        part_groups: Mapping[str, Iterable[str]],
        headless: Mapping[str, str],
        headless_names: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._exercises: Dict[str, Attribution] = {
            normalize_name(k): v for k, v in exercises.items()
        }
        self._muscle_parts: Dict[str, Tuple[str, ...]] = {
            k: tuple(v) for k, v in muscle_parts.items()
        }
        self._muscle_parts_lower = {
            k.lower(): v for k, v in self._muscle_parts.items()
        }
        self._groups: Dict[str, Tuple[str, ...]] = {
            k: tuple(v) for k, v in part_groups.items()
        }
        self._part_to_group: Dict[str, str] = {}
        for group, parts in self._groups.items():
            for part in parts:
                self._part_to_group[part] = group
        self._headless: Dict[str, str] = dict(headless)
        self._headless_names: Dict[str, str] = dict(
            headless_names if headless_names is not None else muscle_data.HEADLESS_NAMES
        )

    @classmethod
    def default(cls) -> "MuscleAttributionModel":
        """Return a model built from the bundled reference tables."""
        return cls.from_mapping({})

    @classmethod
    def from_mapping(cls, data: Mapping) -> "MuscleAttributionModel":
        """Build a model from a plain mapping, using bundled tables for missing sections."""
        raw_exercises = data.get("exercises")
        if raw_exercises is None:
            raw_exercises = {
                name: {"equipment": eq, "primary": prim, "secondary": sec}
                for name, (eq, prim, sec) in muscle_data.EXERCISES.items()
            }
        exercises = {}
        for name, entry in raw_exercises.items():
            entry = entry or {}
            exercises[name] = Attribution(
                primary=split_muscles(entry.get("primary")),
                secondary=split_muscles(entry.get("secondary")),
                equipment=str(entry.get("equipment") or ""),
            )
        return cls(
            exercises,
            data.get("muscles") or muscle_data.MUSCLE_TO_PARTS,
            data.get("groups") or muscle_data.PART_GROUPS,
            data.get("headless") or muscle_data.PART_TO_HEADLESS,
            data.get("headless_names"),
        )

    @classmethod
    def from_yaml(cls, path: str) -> "MuscleAttributionModel":
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"attribution file {path} must contain a mapping")
        return cls.from_mapping(data)

    def attribution_for(self, exercise: str) -> Attribution:
        """Return filtered primary and secondary muscles for ``exercise``."""
        found = self._exercises.get(normalize_name(exercise))
        if found is None:
            logger.debug("no attribution for exercise %r", exercise)
            return Attribution()
        primary = tuple(
            m for m in found.primary if m.lower() not in NON_MUSCLE_TOKENS
        )
        secondary = tuple(m for m in found.secondary if m.lower() != "none")
        return Attribution(primary, secondary, found.equipment)

    def has_exercise(self, exercise: str) -> bool:
        return normalize_name(exercise) in self._exercises

    def is_bodyweight_exercise(self, exercise: str) -> bool:
        found = self._exercises.get(normalize_name(exercise))
        if found is None:
            return False
        return found.equipment.strip().lower() in muscle_data.BODYWEIGHT_EQUIPMENT

    def parts_for(self, muscle: str) -> Tuple[str, ...]:
        raw = str(muscle or "").strip()
        if not raw:
            return ()
        parts = self._muscle_parts.get(raw)
        if parts is None:
            parts = self._muscle_parts_lower.get(raw.lower(), ())
        return parts

    def group_for(self, part: str) -> Optional[str]:
        return self._part_to_group.get(part)

    def parts_in_group(self, group: str) -> Tuple[str, ...]:
        return self._groups.get(group, ())

    def groups(self) -> List[str]:
        return list(self._groups)

    def headless_for(self, key: str) -> Optional[str]:
        """Return the headless id for a part id, or ``key`` if it already is one."""
        if key in self._headless_names:
            return key
        return self._headless.get(key)

    def headless_ids(self) -> List[str]:
        return list(self._headless_names)

    def headless_name(self, headless_id: str) -> str:
        return self._headless_names.get(headless_id, headless_id)
