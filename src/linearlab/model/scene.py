"""
Scene Geometry
==============
Pure geometry behind both canvases. The widgets only turn these arrays into
plot items / actors, so everything drawn can be checked without a display.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import TYPE_CHECKING, Sequence

import numpy as np

from linearlab.config import SINGULAR_THRESHOLD
from linearlab.model import linalg
from linearlab.model.types import Matrix, Vector

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class MatrixStats:
    """Numbers shown in the analysis overlay."""
    determinant: float
    trace: float
    norm: float

    @property
    def is_singular(self) -> bool:
        return abs(self.determinant) < SINGULAR_THRESHOLD


@dataclass(frozen=True)
class VectorPair:
    """A vector before and after the transformation."""
    label: str
    color: str
    original: npt.NDArray[np.float64]
    transformed: npt.NDArray[np.float64]


def matrix_stats(matrix: Matrix) -> MatrixStats:
    return MatrixStats(
        determinant=linalg.determinant(matrix),
        trace=linalg.trace(matrix),
        norm=linalg.frobenius_norm(matrix),
    )


def transform_vectors(matrix: Matrix, vectors: Sequence[Vector]) -> list[VectorPair]:
    """Apply the matrix to every vector independently."""
    pairs = []
    for v in vectors:
        original = np.asarray(v.coords(), dtype=np.float64)
        pairs.append(VectorPair(
            label=v.label,
            color=v.color,
            original=original,
            transformed=linalg.apply(matrix, original),
        ))
    return pairs


def basis_vectors(matrix: Matrix) -> npt.NDArray[np.float64]:
    """Images of the standard basis vectors, one per row (the matrix columns)."""
    return linalg.transpose(matrix)


def grid_segments(
    matrix: Matrix,
    extent: float = 5.0,
    spacing: float = 1.0,
) -> npt.NDArray[np.float64]:
    """
    Transformed lines of a square grid in the XY plane.

    Args:
        matrix: The 2x2 (or 3x3, grid lies in z=0) transformation.
        extent: The grid covers [-extent, extent] in x and y.
        spacing: Distance between neighbouring grid lines.

    Returns:
        Array of shape (n_lines, 2, dim) with the start and end point of each
        line after transformation.
    """
    n = len(matrix)
    ticks = np.arange(-extent, extent + spacing / 2.0, spacing)

    segments = []
    for t in ticks:
        # vertical line x = t, then horizontal line y = t
        for start, end in (((t, -extent), (t, extent)), ((-extent, t), (extent, t))):
            p0 = np.zeros(n)
            p1 = np.zeros(n)
            p0[:2] = start
            p1[:2] = end
            segments.append((linalg.apply(matrix, p0), linalg.apply(matrix, p1)))

    if not segments:
        return np.empty((0, 2, n))
    return np.array(segments, dtype=np.float64)


def unit_cube_edges(matrix: Matrix) -> npt.NDArray[np.float64]:
    """
    The 12 edges of the unit cube [0, 1]^3 after transformation.

    Returns:
        Array of shape (12, 2, 3).
    """
    corners = [np.array(c, dtype=np.float64) for c in product((0.0, 1.0), repeat=3)]
    edges = []
    for i, a in enumerate(corners):
        for b in corners[i + 1:]:
            # cube edges join corners differing in exactly one coordinate
            if np.count_nonzero(a != b) == 1:
                edges.append((linalg.apply(matrix, a), linalg.apply(matrix, b)))
    return np.array(edges, dtype=np.float64)


def view_extent(pairs: Sequence[VectorPair], minimum: float = 4.0, margin: float = 1.25) -> float:
    """Half-width of a symmetric view box that shows all vector tips."""
    tips = [abs(c) for p in pairs for c in (*p.original, *p.transformed) if np.isfinite(c)]
    return max(minimum, max(tips, default=0.0) * margin)
