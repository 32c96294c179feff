from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QSplitter, QStackedWidget, QVBoxLayout, QTabWidget

from linearlab.app.ui.canvas2d import Canvas2D
from linearlab.app.ui.canvas3d import Canvas3D
from linearlab.app.ui.insights import InsightView, StatsOverlay

CANVAS_2D = 0
CANVAS_3D = 1


class WorkArea(QWidget):
    """The main work area with a splitter between the control tabs and the canvas column."""
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        v = QVBoxLayout(self)
        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)
        v.addWidget(split, 1)

        self.panel_tabs = QTabWidget(split)

        right = QWidget(split)
        col = QVBoxLayout(right)
        col.setContentsMargins(0, 0, 0, 0)

        self.stats = StatsOverlay(right)
        col.addWidget(self.stats, 0)

        self.canvas_stack = QStackedWidget(right)
        self.canvas2d = Canvas2D(self.canvas_stack)
        self.canvas3d = Canvas3D(self.canvas_stack)
        self.canvas_stack.addWidget(self.canvas2d)
        self.canvas_stack.addWidget(self.canvas3d)
        col.addWidget(self.canvas_stack, 1)

        self.insight_view = InsightView(right)
        col.addWidget(self.insight_view, 0)

        split.addWidget(self.panel_tabs)
        split.addWidget(right)
        split.setStretchFactor(0, 0)
        split.setStretchFactor(1, 1)
        split.setSizes([380, 1020])

    def set_canvas_index(self, index: int) -> None:
        """Show the 2D or 3D canvas."""
        self.canvas_stack.setCurrentIndex(index)
