from __future__ import annotations

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QGridLayout, QPushButton, QScrollArea
)

from linearlab.app.state import Store
from linearlab.app.ui.panels.base import BasePanel
from linearlab.app.ui.panels.editors import MatrixEditor, VectorListEditor
from linearlab.model.presets import presets_for
from linearlab.model.types import DimensionMode

PRESET_COLUMNS = 2


class TransformPanel(BasePanel):
    """
    Edit the active matrix A and the vectors it acts on.

    Top: matrix grid with transpose / reset.
    Middle: one editor per vector.
    Bottom: preset transformations for the current mode.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        outer = QVBoxLayout(self)
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        outer.addWidget(scroll)
        content = QWidget(scroll)
        scroll.setWidget(content)
        root = QVBoxLayout(content)

        # matrix A
        self.matrix_editor = MatrixEditor(self.tr("Active Matrix (A)"), color="#4f46e5", parent=content)
        root.addWidget(self.matrix_editor)

        row = QHBoxLayout()
        self.btn_transpose = QPushButton(self.tr("Transpose (Aᵀ)"), content)
        self.btn_reset = QPushButton(self.tr("Reset Matrix"), content)
        row.addWidget(self.btn_transpose)
        row.addWidget(self.btn_reset)
        root.addLayout(row)

        # vectors
        grp_vectors = QGroupBox(self.tr("Active Vectors"), content)
        v = QVBoxLayout(grp_vectors)
        self.vector_editor = VectorListEditor(grp_vectors)
        v.addWidget(self.vector_editor)
        root.addWidget(grp_vectors)

        # presets
        self.grp_presets = QGroupBox(self.tr("Presets"), content)
        self.presets_grid = QGridLayout(self.grp_presets)
        self._preset_buttons: list[QPushButton] = []
        root.addWidget(self.grp_presets)

        root.addStretch()

        # wiring: widgets -> store
        self.matrix_editor.entry_edited.connect(self.store.set_matrix_entry)
        self.btn_transpose.clicked.connect(lambda: self.store.transpose())
        self.btn_reset.clicked.connect(lambda: self.store.reset_matrix())
        self.vector_editor.component_edited.connect(self.store.set_vector_component)
        self.vector_editor.reset_requested.connect(self.store.reset_vector)

        # wiring: store -> widgets
        self.store.matrix_changed.connect(self.matrix_editor.set_matrix)
        self.store.vectors_changed.connect(self.vector_editor.set_vectors)

        self.matrix_editor.set_matrix(self.store.active_matrix())
        self.vector_editor.set_vectors(self.store.active_vectors())
        self._build_presets()

    def on_mode_changed(self, mode: DimensionMode) -> None:
        self._build_presets()

    def _build_presets(self) -> None:
        for btn in self._preset_buttons:
            self.presets_grid.removeWidget(btn)
            btn.deleteLater()
        self._preset_buttons = []

        for i, name in enumerate(presets_for(self.mode)):
            btn = QPushButton(name, self.grp_presets)
            btn.clicked.connect(lambda _=False, n=name: self.store.apply_preset(n))
            self.presets_grid.addWidget(btn, i // PRESET_COLUMNS, i % PRESET_COLUMNS)
            self._preset_buttons.append(btn)
