"""
3D Canvas (PyVista Wrapper)
"""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import numpy.typing as npt
import pyvista as pv
from pyvistaqt import QtInteractor
from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtGui import QCloseEvent

from linearlab.model.scene import basis_vectors, grid_segments, transform_vectors, unit_cube_edges
from linearlab.model.types import Matrix, Vector

GRID_EXTENT = 4.0
BASIS_COLORS = ("#16a34a", "#dc2626", "#2563eb")  # i, j, k


def segments_to_polydata(segments: npt.NDArray[np.float64]) -> pv.PolyData:
    """
    Convert an (n, 2, 3) array of line segments into a PolyData of lines.
    """
    n = segments.shape[0]
    if n == 0:
        return pv.PolyData()
    points = segments.reshape(-1, 3)
    cells = np.empty(n * 3, dtype=int)  # [2, id0, id1] repeated
    cells[0::3] = 2
    cells[1::3] = np.arange(0, 2 * n, 2)
    cells[2::3] = np.arange(1, 2 * n, 2)
    return pv.PolyData(points, lines=cells)


class Canvas3D(QWidget):
    """
    PyVista/Qt canvas for the 3D mode:
      - orientation axes,
      - transformed XY grid (optional) and unit cube wireframe,
      - transformed basis vectors,
      - every vector before (faint) and after (solid) the transformation.
    """
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.plotter.set_background("white")
        self.plotter.add_axes()
        layout.addWidget(self.plotter.interactor)

        self._actors: list[pv.Actor] = []
        self._show_grid = True
        self._matrix: Optional[Matrix] = None
        self._vectors: tuple[Vector, ...] = ()
        self._camera_set = False

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_show_grid(self, show: bool) -> None:
        self._show_grid = show
        self._redraw()

    def set_scene(self, matrix: Matrix, vectors: Sequence[Vector]) -> None:
        self._matrix = matrix
        self._vectors = tuple(vectors)
        self._redraw()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        super().closeEvent(event)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _clear(self) -> None:
        for actor in self._actors:
            self.plotter.remove_actor(actor, render=False)
        self._actors.clear()

    def _redraw(self) -> None:
        self._clear()
        if self._matrix is None:
            return

        if self._show_grid:
            grid = segments_to_polydata(grid_segments(self._matrix, extent=GRID_EXTENT, spacing=1.0))
            if grid.n_points:
                self._actors.append(self.plotter.add_mesh(grid, color="#c7d2fe", line_width=1, pickable=False))

        cube = segments_to_polydata(unit_cube_edges(self._matrix))
        self._actors.append(self.plotter.add_mesh(cube, color="#6366f1", line_width=2, pickable=False))

        for tip, color in zip(basis_vectors(self._matrix), BASIS_COLORS):
            self._add_arrow(tip, color, opacity=0.9)

        labels_pts = []
        labels = []
        for pair in transform_vectors(self._matrix, self._vectors):
            self._add_arrow(pair.original, pair.color, opacity=0.25)
            if self._add_arrow(pair.transformed, pair.color, opacity=1.0):
                labels_pts.append(pair.transformed)
                labels.append(pair.label)

        if labels:
            self._actors.append(self.plotter.add_point_labels(
                np.array(labels_pts),
                labels,
                font_size=14,
                text_color="black",
                shape_opacity=0.0,
                show_points=False,
                always_visible=True,
            ))

        if not self._camera_set:
            self.plotter.view_isometric()
            self.plotter.reset_camera()
            self._camera_set = True

        self.plotter.render()

    def _add_arrow(self, tip: npt.NDArray[np.float64], color: str, opacity: float) -> bool:
        """Add an arrow from the origin to `tip`. Zero and non-finite vectors are skipped."""
        length = float(np.linalg.norm(tip))
        if not np.isfinite(length) or length < 1e-9:
            return False
        arrow = pv.Arrow(
            start=(0.0, 0.0, 0.0),
            direction=tuple(tip),
            tip_length=min(0.25, 0.35 / length),
            tip_radius=min(0.1, 0.12 / length),
            shaft_radius=min(0.03, 0.04 / length),
            scale=length,
        )
        self._actors.append(self.plotter.add_mesh(arrow, color=color, opacity=opacity, pickable=False))
        return True
