"""
Initial scene and preset transformations.
"""
from __future__ import annotations

from math import sqrt
from typing import Dict

from linearlab.model.types import DimensionMode, Matrix, Snapshot, Vector

INITIAL_MATRIX_2D: Matrix = ((1.0, 0.0), (0.0, 1.0))
INITIAL_MATRIX_3D: Matrix = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))

INITIAL_VECTORS_2D: tuple[Vector, ...] = (
    Vector(x=1.0, y=2.0, label="u", color="#f43f5e"),
    Vector(x=3.0, y=-1.0, label="v", color="#0ea5e9"),
)

INITIAL_VECTORS_3D: tuple[Vector, ...] = (
    Vector(x=1.0, y=0.0, z=1.0, label="u", color="#f43f5e"),
    Vector(x=0.0, y=1.0, z=1.0, label="v", color="#0ea5e9"),
    Vector(x=1.0, y=1.0, z=0.0, label="w", color="#f59e0b"),
)

_C45 = round(sqrt(2.0) / 2.0, 4)

# Insertion order is the button order in the transform panel
PRESET_TRANSFORMATIONS_2D: Dict[str, Matrix] = {
    "Identity": INITIAL_MATRIX_2D,
    "Rotate 90°": ((0.0, -1.0), (1.0, 0.0)),
    "Rotate 45°": ((_C45, -_C45), (_C45, _C45)),
    "Scale 2x": ((2.0, 0.0), (0.0, 2.0)),
    "Shear X": ((1.0, 1.0), (0.0, 1.0)),
    "Reflect Y-axis": ((-1.0, 0.0), (0.0, 1.0)),
    "Squeeze": ((2.0, 0.0), (0.0, 0.5)),
    "Project onto X": ((1.0, 0.0), (0.0, 0.0)),
}

PRESET_TRANSFORMATIONS_3D: Dict[str, Matrix] = {
    "Identity": INITIAL_MATRIX_3D,
    "Rotate Z 90°": ((0.0, -1.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
    "Rotate X 90°": ((1.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 1.0, 0.0)),
    "Scale 2x": ((2.0, 0.0, 0.0), (0.0, 2.0, 0.0), (0.0, 0.0, 2.0)),
    "Shear XY": ((1.0, 1.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
    "Reflect XY-plane": ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, -1.0)),
    "Project onto XY": ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 0.0)),
}


def initial_matrix(mode: DimensionMode) -> Matrix:
    return INITIAL_MATRIX_2D if mode is DimensionMode.TWO_D else INITIAL_MATRIX_3D


def initial_vectors(mode: DimensionMode) -> tuple[Vector, ...]:
    return INITIAL_VECTORS_2D if mode is DimensionMode.TWO_D else INITIAL_VECTORS_3D


def presets_for(mode: DimensionMode) -> Dict[str, Matrix]:
    return PRESET_TRANSFORMATIONS_2D if mode is DimensionMode.TWO_D else PRESET_TRANSFORMATIONS_3D


def default_snapshot() -> Snapshot:
    """The scene shown on a fresh start."""
    return Snapshot(
        mode=DimensionMode.TWO_D,
        matrix2d=INITIAL_MATRIX_2D,
        vectors2d=INITIAL_VECTORS_2D,
        matrix3d=INITIAL_MATRIX_3D,
        vectors3d=INITIAL_VECTORS_3D,
    )
