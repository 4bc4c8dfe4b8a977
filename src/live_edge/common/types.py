"""Shared type aliases and tolerant parsing helpers for feed data."""

from __future__ import annotations

import math
from typing import Literal, TypeAlias

# Which side of a game a team occupies
Side: TypeAlias = Literal["away", "home"]

# JSON-like dict
JsonDict: TypeAlias = dict[str, object]


def other_side(side: Side) -> Side:
    """Return the opposite side."""
    return "home" if side == "away" else "away"


def to_int(value: object, default: int = 0) -> int:
    """Parse an int from feed data, falling back to ``default``.

    Accepts numeric strings such as ``"12"`` or ``"12.0"``. Infinite and
    NaN values fall back to ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        return int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return default


def to_float(value: object, default: float = 0.0) -> float:
    """Parse a finite float from feed data, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return default
    return result if math.isfinite(result) else default


def as_dict(value: object) -> dict:
    """Return ``value`` if it is a JSON object, else an empty dict."""
    return value if isinstance(value, dict) else {}


def dict_items(value: object) -> list[dict]:
    """Object entries of a JSON array. Anything else is dropped."""
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]
