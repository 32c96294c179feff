from __future__ import annotations

from typing import Sequence

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QPushButton, QFormLayout, QProgressBar, QLabel, QMessageBox
)

from linearlab.app.state import Store
from linearlab.app.ui.panels.base import BasePanel
from linearlab.app.ui.panels.editors import MatrixEditor
from linearlab.model.linalg import vector_norm
from linearlab.model.types import DimensionMode, Vector


def norm_bar_percent(norm: float) -> int:
    """Bar fill for a vector norm: ten percent per unit, capped at 100."""
    return int(min(norm * 10.0, 100.0))


class OperationsPanel(BasePanel):
    """
    Matrix product A = A x B (2D only) and the L2 norm of every vector.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        root = QVBoxLayout(self)

        # multiplicand, hidden in 3D
        self.grp_multiply = QGroupBox(self.tr("Matrix B (Multiplicand)"), self)
        m = QVBoxLayout(self.grp_multiply)
        self.matrix_b_editor = MatrixEditor("", color="#ea580c", parent=self.grp_multiply)
        m.addWidget(self.matrix_b_editor)
        self.btn_multiply = QPushButton(self.tr("Execute: A = A × B"), self.grp_multiply)
        self.btn_multiply.setMinimumHeight(32)
        m.addWidget(self.btn_multiply)
        root.addWidget(self.grp_multiply)

        # norms
        self.grp_norms = QGroupBox(self.tr("Vector Norms"), self)
        self.norms_form = QFormLayout(self.grp_norms)
        root.addWidget(self.grp_norms)

        root.addStretch()

        self.matrix_b_editor.entry_edited.connect(self.store.set_matrix_b_entry)
        self.btn_multiply.clicked.connect(self.on_multiply_clicked)

        self.store.matrix_b_changed.connect(self.matrix_b_editor.set_matrix)
        self.store.vectors_changed.connect(self._update_norms)

        self.matrix_b_editor.set_matrix(self.store.matrix_b2d)
        self.on_mode_changed(self.mode)
        self._update_norms(self.store.active_vectors())

    def on_mode_changed(self, mode: DimensionMode) -> None:
        self.grp_multiply.setVisible(mode is DimensionMode.TWO_D)

    def on_multiply_clicked(self) -> None:
        if not self.store.multiply():
            QMessageBox.warning(
                self,
                self.tr("Matrix Multiplication"),
                self.tr("The product has entries outside the editable range. Matrix A was kept."),
            )

    def _update_norms(self, vectors: Sequence[Vector]) -> None:
        while self.norms_form.rowCount():
            self.norms_form.removeRow(0)

        for v in vectors:
            norm = vector_norm(v.coords())
            bar = QProgressBar(self.grp_norms)
            bar.setRange(0, 100)
            bar.setValue(norm_bar_percent(norm))
            bar.setFormat(f"{norm:.2f}")
            bar.setStyleSheet(f"QProgressBar::chunk {{ background-color: {v.color}; }}")
            label = QLabel(self.tr("{label} Norm (L2)").format(label=v.label), self.grp_norms)
            label.setStyleSheet(f"color: {v.color}; font-weight: bold;")
            self.norms_form.addRow(label, bar)
