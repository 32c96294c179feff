"""
Main Application Window
=======================
Mode switch on top, control tabs on the left, canvas column on the right.

Routing only: panels write to the Store, the window listens to the Store and
refreshes the canvases, the statistics and the insight view.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QTabBar, QMessageBox

from linearlab.app.application import VISIBLE_APP_NAME
from linearlab.app.state import Store
from linearlab.app.ui.panels import AnalysisPanel, OperationsPanel, TransformPanel
from linearlab.app.ui.workarea import WorkArea, CANVAS_2D, CANVAS_3D
from linearlab.app.workers import InsightWorker, WorkerSet
from linearlab.model.types import DimensionMode

logger = logging.getLogger(__name__)

MODES = [DimensionMode.TWO_D, DimensionMode.THREE_D]


class MainWindow(QMainWindow):
    def __init__(self, store: Optional[Store] = None) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # Global store
        self.store = store if store is not None else Store()
        self.workers = WorkerSet(self)

        # ---- Central: mode TabBar on top + WorkArea below ----
        central = QWidget(self)
        v = QVBoxLayout(central)
        v.setContentsMargins(0, 0, 0, 0)
        v.setSpacing(0)

        self.mode_tabs = QTabBar(central)
        self.mode_tabs.setExpanding(False)
        self.mode_tabs.setDrawBase(True)
        self.mode_tabs.setShape(QTabBar.Shape.RoundedNorth)
        for mode in MODES:
            self.mode_tabs.addTab(mode.value)
        v.addWidget(self.mode_tabs, 0)

        self.work_area = WorkArea(central)
        v.addWidget(self.work_area, 1)

        self.setCentralWidget(central)

        # ---- Panels ----
        self.transform_panel = TransformPanel(self.store, parent=self)
        self.operations_panel = OperationsPanel(self.store, parent=self)
        self.analysis_panel = AnalysisPanel(self.store, parent=self)

        tabs = self.work_area.panel_tabs
        tabs.addTab(self.transform_panel, self.tr("Transform"))
        tabs.addTab(self.operations_panel, self.tr("Operations"))
        tabs.addTab(self.analysis_panel, self.tr("Analysis"))

        # --- SIGNAL CONNECTIONS ---
        self.mode_tabs.currentChanged.connect(lambda idx: self.store.set_mode(MODES[idx]))
        self.analysis_panel.analyze_requested.connect(self.on_analyze_requested)
        self.work_area.canvas2d.vector_moved.connect(self._on_vector_moved)

        self.store.mode_changed.connect(self._on_mode_changed)
        self.store.matrix_changed.connect(lambda *_: self._refresh_scene())
        self.store.vectors_changed.connect(lambda *_: self._refresh_scene())
        self.store.grid_changed.connect(self._on_grid_changed)
        self.store.insight_changed.connect(self.work_area.insight_view.set_insight)
        self.store.loading_changed.connect(self.work_area.insight_view.set_loading)

        # Initial Render
        self._on_mode_changed(self.store.mode)

    # --- SLOTS ---

    def _on_mode_changed(self, mode: DimensionMode) -> None:
        idx = MODES.index(mode)
        if self.mode_tabs.currentIndex() != idx:
            self.mode_tabs.blockSignals(True)
            self.mode_tabs.setCurrentIndex(idx)
            self.mode_tabs.blockSignals(False)
        self.work_area.set_canvas_index(CANVAS_2D if mode is DimensionMode.TWO_D else CANVAS_3D)
        self._refresh_scene()

    def _on_grid_changed(self, show: bool) -> None:
        self.work_area.canvas2d.set_show_grid(show)
        self.work_area.canvas3d.set_show_grid(show)

    def _refresh_scene(self) -> None:
        """Redraw the visible canvas and the statistics for the active mode."""
        matrix = self.store.active_matrix()
        vectors = self.store.active_vectors()
        if self.store.mode is DimensionMode.TWO_D:
            self.work_area.canvas2d.set_scene(matrix, vectors)
        else:
            self.work_area.canvas3d.set_scene(matrix, vectors)
        self.work_area.stats.set_stats(self.store.stats())

    def _on_vector_moved(self, index: int, x: float, y: float) -> None:
        try:
            self.store.move_vector(index, x, y)
        except (ValueError, IndexError) as e:
            logger.warning(f"Vector drag ignored: {e}")
            self._refresh_scene()

    def on_analyze_requested(self) -> None:
        matrix, vectors = self.store.begin_insight_request()

        worker = InsightWorker(matrix, vectors)
        worker.result_ready.connect(self.store.finish_insight_request)
        worker.error_occurred.connect(self.on_worker_error)
        self.workers.start(worker)
        logger.info(f"Insight requested for the {self.store.mode.value} scene.")

    def on_worker_error(self, msg: str) -> None:
        logger.error(f"Insight worker failed: {msg}")
        QMessageBox.warning(self, self.tr("AI Insight"), msg)

    def closeEvent(self, event) -> None:
        self.workers.wait_all()
        self.work_area.canvas3d.close()
        super().closeEvent(event)
