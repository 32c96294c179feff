from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QProgressBar, QFrame, QGroupBox, QFormLayout

from linearlab.model.scene import MatrixStats
from linearlab.model.types import Insight


class InsightView(QFrame):
    """
    Shows the AI insight under the canvas.

    Loading: a busy bar. No insight: hidden. Otherwise title, explanation
    and the list of key details.
    """
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFrameShape(QFrame.Shape.StyledPanel)

        root = QVBoxLayout(self)

        self.busy = QProgressBar(self)
        self.busy.setRange(0, 0)  # indeterminate
        self.busy.setTextVisible(False)
        root.addWidget(self.busy)

        self.lbl_title = QLabel(self)
        self.lbl_title.setStyleSheet("font-size: 16px; font-weight: bold;")
        self.lbl_title.setWordWrap(True)
        root.addWidget(self.lbl_title)

        self.lbl_explanation = QLabel(self)
        self.lbl_explanation.setWordWrap(True)
        self.lbl_explanation.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        root.addWidget(self.lbl_explanation)

        self.lbl_details_header = QLabel(self.tr("KEY DETAILS"), self)
        self.lbl_details_header.setStyleSheet("color: gray; font-size: 10px; font-weight: bold;")
        root.addWidget(self.lbl_details_header)

        self.lbl_details = QLabel(self)
        self.lbl_details.setWordWrap(True)
        self.lbl_details.setTextFormat(Qt.TextFormat.PlainText)
        root.addWidget(self.lbl_details)

        self._insight: Optional[Insight] = None
        self._loading = False
        self._refresh()

    def set_insight(self, insight: Optional[Insight]) -> None:
        self._insight = insight
        self._refresh()

    def set_loading(self, loading: bool) -> None:
        self._loading = loading
        self._refresh()

    def _refresh(self) -> None:
        insight = self._insight
        show_content = not self._loading and insight is not None

        self.busy.setVisible(self._loading)
        for w in (self.lbl_title, self.lbl_explanation, self.lbl_details_header, self.lbl_details):
            w.setVisible(show_content)
        self.setVisible(self._loading or insight is not None)

        if show_content:
            self.lbl_title.setText(insight.title)
            self.lbl_explanation.setText(insight.explanation)
            self.lbl_details.setText("\n".join(f"•  {d}" for d in insight.math_details))


class StatsOverlay(QGroupBox):
    """Determinant, trace and Frobenius norm of the active matrix."""
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(self.tr("Matrix Analysis"), parent)
        form = QFormLayout(self)
        self.lbl_det = QLabel(self)
        self.lbl_trace = QLabel(self)
        self.lbl_norm = QLabel(self)
        form.addRow(self.tr("Determinant"), self.lbl_det)
        form.addRow(self.tr("Trace"), self.lbl_trace)
        form.addRow(self.tr("Frobenius Norm"), self.lbl_norm)

    def set_stats(self, stats: MatrixStats) -> None:
        det_color = "#e11d48" if stats.is_singular else "#059669"
        self.lbl_det.setText(f"{stats.determinant:.2f}")
        self.lbl_det.setStyleSheet(f"color: {det_color}; font-family: monospace;")
        self.lbl_trace.setText(f"{stats.trace:.2f}")
        self.lbl_trace.setStyleSheet("color: #4f46e5; font-family: monospace;")
        self.lbl_norm.setText(f"{stats.norm:.2f}")
        self.lbl_norm.setStyleSheet("color: #ea580c; font-family: monospace;")
