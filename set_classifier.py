from __future__ import annotations

from enum import Enum
from typing import Iterable, Union


class SetType(str, Enum):
    NORMAL = "normal"
    WARMUP = "warmup"
    LEFT = "left"
    RIGHT = "right"
    DROPSET = "dropset"
    FAILURE = "failure"
    AMRAP = "amrap"
    RESTPAUSE = "restpause"
    MYOREPS = "myoreps"
    CLUSTER = "cluster"
    GIANTSET = "giantset"
    SUPERSET = "superset"
    BACKOFF = "backoff"
    TOPSET = "topset"
    FEEDERSET = "feederset"
    PARTIAL = "partial"


_ALIASES = {
    "": SetType.NORMAL,
    "normal": SetType.NORMAL,
    "working": SetType.NORMAL,
    "work": SetType.NORMAL,
    "regular": SetType.NORMAL,
    "standard": SetType.NORMAL,
    "warmup": SetType.WARMUP,
    "w": SetType.WARMUP,
    "left": SetType.LEFT,
    "l": SetType.LEFT,
    "right": SetType.RIGHT,
    "r": SetType.RIGHT,
    "dropset": SetType.DROPSET,
    "drop": SetType.DROPSET,
    "d": SetType.DROPSET,
    "failure": SetType.FAILURE,
    "fail": SetType.FAILURE,
    "x": SetType.FAILURE,
    "amrap": SetType.AMRAP,
    "a": SetType.AMRAP,
    "restpause": SetType.RESTPAUSE,
    "rp": SetType.RESTPAUSE,
    "myoreps": SetType.MYOREPS,
    "myo": SetType.MYOREPS,
    "m": SetType.MYOREPS,
    "cluster": SetType.CLUSTER,
    "c": SetType.CLUSTER,
    "giantset": SetType.GIANTSET,
    "giant": SetType.GIANTSET,
    "g": SetType.GIANTSET,
    "superset": SetType.SUPERSET,
    "super": SetType.SUPERSET,
    "s": SetType.SUPERSET,
    "backoff": SetType.BACKOFF,
    "back": SetType.BACKOFF,
    "b": SetType.BACKOFF,
    "topset": SetType.TOPSET,
    "top": SetType.TOPSET,
    "t": SetType.TOPSET,
    "feederset": SetType.FEEDERSET,
    "feeder": SetType.FEEDERSET,
    "f": SetType.FEEDERSET,
    "partial": SetType.PARTIAL,
    "p": SetType.PARTIAL,
}


def set_type_id(raw: Union[str, SetType, None]) -> SetType:
    """Normalize a raw set-type discriminator into a ``SetType``."""
    if isinstance(raw, SetType):
        return raw
    key = "".join(str(raw or "").lower().split()).replace("-", "").replace("_", "")
    found = _ALIASES.get(key)
    if found is not None:
        return found
    if "warm" in key:
        return SetType.WARMUP
    if "rest" in key and "pause" in key:
        return SetType.RESTPAUSE
    if "back" in key and "off" in key:
        return SetType.BACKOFF
    if "partial" in key:
        return SetType.PARTIAL
    return SetType.NORMAL


def _type_of(logged_set) -> SetType:
    return set_type_id(getattr(logged_set, "set_type", logged_set))


def is_warmup(logged_set) -> bool:
    return _type_of(logged_set) is SetType.WARMUP


def is_left(logged_set) -> bool:
    return _type_of(logged_set) is SetType.LEFT


def is_right(logged_set) -> bool:
    return _type_of(logged_set) is SetType.RIGHT


def is_unilateral(logged_set) -> bool:
    """Return ``True`` for a set performed one side at a time."""
    return _type_of(logged_set) in (SetType.LEFT, SetType.RIGHT)


def is_working_set(logged_set) -> bool:
    return not is_warmup(logged_set)


def side_of(logged_set) -> str | None:
    kind = _type_of(logged_set)
    if kind is SetType.LEFT:
        return "left"
    if kind is SetType.RIGHT:
        return "right"
    return None


def set_increment(logged_set) -> float:
    """Return the bilateral-equivalent weight of one set."""
    return 0.5 if is_unilateral(logged_set) else 1.0


def count_sets(
    sets: Iterable,
    exclude_warmup: bool = True,
    count_unilateral_as_full: bool = False,
) -> float:
    """Count sets with left/right sets weighted as half a set."""
    total = 0.0
    for s in sets:
        if exclude_warmup and is_warmup(s):
            continue
        if count_unilateral_as_full:
            total += 1.0
        else:
            total += set_increment(s)
    return total
