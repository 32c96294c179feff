from __future__ import annotations

from math import atan2, degrees
from typing import Sequence

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout

from linearlab.model.scene import VectorPair, basis_vectors, grid_segments, transform_vectors, view_extent
from linearlab.model.types import Matrix, Vector

GRID_EXTENT = 10.0
# dragged coordinates are rounded to this many decimals
DRAG_DECIMALS = 2
BASIS_COLORS = ("#16a34a", "#dc2626")  # i-hat, j-hat


class Canvas2D(QWidget):
    """
    pyqtgraph canvas for the 2D mode:
      - the transformed unit grid (optional),
      - transformed basis vectors i and j,
      - every vector before (dashed) and after (solid) the transformation,
      - a draggable handle on the tip of every original vector.

    Dropping a handle emits `vector_moved(index, x, y)`; the canvas itself never
    changes the vectors.
    """
    vector_moved = Signal(int, float, float)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.plot = pg.PlotWidget(background="w")
        self.plot.setAspectLocked(True)
        self.plot.showGrid(x=True, y=True, alpha=0.15)
        for side in ("left", "bottom"):
            self.plot.getAxis(side).setPen("k")
            self.plot.getAxis(side).setTextPen("k")
        self.plot.addLine(x=0, pen=pg.mkPen("#64748b", width=1))
        self.plot.addLine(y=0, pen=pg.mkPen("#64748b", width=1))
        layout.addWidget(self.plot)

        self._items: list[pg.GraphicsObject] = []
        self._show_grid = True
        self._matrix: Matrix | None = None
        self._vectors: tuple[Vector, ...] = ()
        self._fitted = False
        self._handles: list[pg.TargetItem] = []
        self._handle_colors: tuple[str, ...] = ()

    # ---- Public API ----

    def set_show_grid(self, show: bool) -> None:
        self._show_grid = show
        self._redraw()

    def set_scene(self, matrix: Matrix, vectors: Sequence[Vector]) -> None:
        self._matrix = matrix
        self._vectors = tuple(vectors)
        self._redraw()

    # ---- Drawing ----

    def _clear(self) -> None:
        for item in self._items:
            self.plot.removeItem(item)
        self._items.clear()

    def _redraw(self) -> None:
        self._clear()
        if self._matrix is None:
            return

        if self._show_grid:
            segs = grid_segments(self._matrix, extent=GRID_EXTENT, spacing=1.0)
            # connect="pairs" draws each (start, end) couple as its own line
            pts = segs.reshape(-1, 2)
            grid = self.plot.plot(pts[:, 0], pts[:, 1], connect="pairs", pen=pg.mkPen("#a5b4fc", width=1))
            self._items.append(grid)

        for tip, color in zip(basis_vectors(self._matrix), BASIS_COLORS):
            self._draw_arrow(tip, color, width=3)

        pairs = transform_vectors(self._matrix, self._vectors)
        for pair in pairs:
            self._draw_arrow(pair.original, pair.color, width=1.5, dashed=True)
            self._draw_arrow(pair.transformed, pair.color, width=3, label=pair.label)

        self._sync_handles(pairs)

        if not self._fitted:
            r = view_extent(pairs)
            self.plot.setRange(xRange=(-r, r), yRange=(-r, r), padding=0)
            self._fitted = True

    def _draw_arrow(
        self,
        tip: np.ndarray,
        color: str,
        *,
        width: float,
        dashed: bool = False,
        label: str | None = None,
    ) -> None:
        x, y = float(tip[0]), float(tip[1])
        style = Qt.PenStyle.DashLine if dashed else Qt.PenStyle.SolidLine
        line = self.plot.plot([0.0, x], [0.0, y], pen=pg.mkPen(color, width=width, style=style))
        self._items.append(line)

        if x == 0.0 and y == 0.0:
            return

        # ArrowItem at angle 0 points towards -x; rotation is clockwise on screen
        head = pg.ArrowItem(
            angle=180.0 - degrees(atan2(y, x)),
            tipAngle=30,
            headLen=14 if not dashed else 10,
            pen=None,
            brush=color,
        )
        head.setPos(x, y)
        self.plot.addItem(head)
        self._items.append(head)

        if label:
            text = pg.TextItem(label, color=color, anchor=(0, 1))
            text.setPos(x, y)
            self.plot.addItem(text)
            self._items.append(text)

    # ---- Vector handles ----

    def _sync_handles(self, pairs: Sequence[VectorPair]) -> None:
        """Keep one handle per vector, on its original tip. Handles outlive redraws."""
        colors = tuple(p.color for p in pairs)
        if colors != self._handle_colors:
            for handle in self._handles:
                self.plot.removeItem(handle)
            self._handles = []
            for index, color in enumerate(colors):
                handle = pg.TargetItem(
                    size=12,
                    symbol="o",
                    pen=pg.mkPen(color, width=2),
                    brush=pg.mkBrush(255, 255, 255, 200),
                    movable=True,
                )
                handle.setZValue(10)
                handle.sigPositionChangeFinished.connect(
                    lambda item, i=index: self._on_handle_dropped(i, item)
                )
                self.plot.addItem(handle)
                self._handles.append(handle)
            self._handle_colors = colors

        for handle, pair in zip(self._handles, pairs):
            handle.setPos(float(pair.original[0]), float(pair.original[1]))

    def _on_handle_dropped(self, index: int, handle: pg.TargetItem) -> None:
        pos = handle.pos()
        self.vector_moved.emit(index, round(pos.x(), DRAG_DECIMALS), round(pos.y(), DRAG_DECIMALS))
