"""
Scene Data Model
================
Plain data structures shared by every layer: matrices, labeled vectors, the
AI insight payload and the snapshot of the editable scene.

All of them are immutable. Edits produce a new object and the store publishes
it wholesale, so a matrix handed to a view is never changed behind its back.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from math import isfinite
from typing import Any, Dict, Sequence, TYPE_CHECKING

import numpy as np

from linearlab.config import MAX_ENTRY

if TYPE_CHECKING:
    import numpy.typing as npt

# Row-major nested tuples, e.g. ((a, b), (c, d))
Matrix = tuple[tuple[float, ...], ...]

AXES_2D: tuple[str, ...] = ("x", "y")
AXES_3D: tuple[str, ...] = ("x", "y", "z")


class DimensionMode(StrEnum):
    TWO_D = "2D"
    THREE_D = "3D"

    @property
    def size(self) -> int:
        return 2 if self is DimensionMode.TWO_D else 3

    @property
    def axes(self) -> tuple[str, ...]:
        return AXES_2D if self is DimensionMode.TWO_D else AXES_3D


def to_matrix(a: npt.ArrayLike) -> Matrix:
    """Convert an array-like square matrix into nested tuples of floats."""
    arr = np.asarray(a, dtype=np.float64)
    return tuple(tuple(float(v) for v in row) for row in arr)


def is_entry(v: Any) -> bool:
    """True if `v` is a real number that fits in the editors: finite and within ±MAX_ENTRY."""
    # bool is an int subclass, but true/false is not a matrix entry
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    # the range check runs first: isfinite() overflows on huge ints
    return abs(v) <= MAX_ENTRY and isfinite(v)


def is_valid_matrix(m: Any, size: int) -> bool:
    """True if `m` is a size x size grid of entries accepted by `is_entry`."""
    if not isinstance(m, (list, tuple)) or len(m) != size:
        return False
    for row in m:
        if not isinstance(row, (list, tuple)) or len(row) != size:
            return False
        if not all(is_entry(v) for v in row):
            return False
    return True


@dataclass(frozen=True, kw_only=True)
class Vector:
    """A labeled point drawn as an arrow from the origin. `z` is None for 2D vectors."""
    x: float
    y: float
    z: float | None = None
    label: str
    color: str

    @property
    def dimension(self) -> int:
        return 2 if self.z is None else 3

    def coords(self) -> tuple[float, ...]:
        if self.z is None:
            return self.x, self.y
        return self.x, self.y, self.z

    def with_component(self, axis: str, value: float) -> Vector:
        """Return a copy with one named coordinate replaced."""
        if axis not in (AXES_3D if self.z is not None else AXES_2D):
            raise ValueError(f"Vector '{self.label}' has no '{axis}' component.")
        if not is_entry(value):
            raise ValueError(f"Component '{axis}' must be a finite number within ±{MAX_ENTRY:g}, got {value}.")
        return replace(self, **{axis: float(value)})

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"x": self.x, "y": self.y}
        if self.z is not None:
            data["z"] = self.z
        data["label"] = self.label
        data["color"] = self.color
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Vector:
        return Vector(
            x=float(data["x"]),
            y=float(data["y"]),
            z=float(data["z"]) if data.get("z") is not None else None,
            label=str(data["label"]),
            color=str(data["color"]),
        )


@dataclass(frozen=True)
class Insight:
    """Explanation returned by the AI service. Displayed as-is."""
    title: str
    explanation: str
    math_details: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "explanation": self.explanation,
            "mathDetails": list(self.math_details),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Insight:
        details: Sequence[Any] = data["mathDetails"]
        return Insight(
            title=data["title"],
            explanation=data["explanation"],
            math_details=tuple(details),
        )


@dataclass(frozen=True)
class Snapshot:
    """The part of the scene that travels inside a shareable link."""
    mode: DimensionMode
    matrix2d: Matrix
    vectors2d: tuple[Vector, ...]
    matrix3d: Matrix
    vectors3d: tuple[Vector, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "matrix2D": [list(row) for row in self.matrix2d],
            "vectors2D": [v.to_dict() for v in self.vectors2d],
            "matrix3D": [list(row) for row in self.matrix3d],
            "vectors3D": [v.to_dict() for v in self.vectors3d],
        }
