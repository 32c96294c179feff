from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import Signal, Qt
from PySide6.QtWidgets import (
    QWidget, QGridLayout, QGroupBox, QHBoxLayout, QLabel, QPushButton, QSizePolicy,
    QDoubleSpinBox, QVBoxLayout,
)

from linearlab.config import MAX_ENTRY
from linearlab.model.types import AXES_2D, AXES_3D, Matrix, Vector

# matches the range the store accepts, so a shown value is always the stored one
ENTRY_LIMIT = MAX_ENTRY


def make_spin(parent: QWidget, value: float = 0.0, color: str | None = None) -> QDoubleSpinBox:
    """Numeric entry used for every matrix and vector component."""
    w = QDoubleSpinBox(parent)
    w.setRange(-ENTRY_LIMIT, ENTRY_LIMIT)
    w.setSingleStep(0.1)
    w.setDecimals(4)
    w.setValue(value)
    w.setKeyboardTracking(False)
    w.setAlignment(Qt.AlignmentFlag.AlignCenter)
    w.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
    if color:
        w.setStyleSheet(f"color: {color}; font-family: monospace;")
    return w


def _set_quietly(spin: QDoubleSpinBox, value: float) -> None:
    # store -> widget updates must not echo back as edits
    spin.blockSignals(True)
    spin.setValue(value)
    spin.blockSignals(False)


class MatrixEditor(QGroupBox):
    """An n x n grid of spin boxes. Emits (row, col, value) for every user edit."""
    entry_edited = Signal(int, int, float)

    def __init__(self, title: str, color: str | None = None, parent: QWidget | None = None) -> None:
        super().__init__(title, parent)
        self._color = color
        self.grid = QGridLayout(self)
        self.grid.setSpacing(6)
        self._spins: list[list[QDoubleSpinBox]] = []

    def dimension(self) -> int:
        return len(self._spins)

    def set_matrix(self, matrix: Matrix) -> None:
        if len(matrix) != self.dimension():
            self._rebuild(len(matrix))
        for i, row in enumerate(matrix):
            for j, value in enumerate(row):
                _set_quietly(self._spins[i][j], value)

    def _rebuild(self, n: int) -> None:
        for row in self._spins:
            for spin in row:
                self.grid.removeWidget(spin)
                spin.deleteLater()
        self._spins = []
        for i in range(n):
            row = []
            for j in range(n):
                spin = make_spin(self, color=self._color)
                spin.valueChanged.connect(lambda v, r=i, c=j: self.entry_edited.emit(r, c, float(v)))
                self.grid.addWidget(spin, i, j)
                row.append(spin)
            self._spins.append(row)


class VectorEditor(QGroupBox):
    """Coordinates of one vector plus a reset button."""
    component_edited = Signal(str, float)
    reset_requested = Signal()

    def __init__(self, vector: Vector, parent: QWidget | None = None) -> None:
        super().__init__(self.tr("Vector {label}").format(label=vector.label), parent)
        self.setStyleSheet(f"QGroupBox {{ color: {vector.color}; font-weight: bold; }}")

        self.axes = AXES_2D if vector.z is None else AXES_3D
        root = QHBoxLayout(self)
        self._spins: dict[str, QDoubleSpinBox] = {}
        for axis in self.axes:
            root.addWidget(QLabel(axis, self))
            spin = make_spin(self)
            spin.valueChanged.connect(lambda v, a=axis: self.component_edited.emit(a, float(v)))
            root.addWidget(spin, 1)
            self._spins[axis] = spin

        btn_reset = QPushButton(self.tr("Reset"), self)
        btn_reset.setToolTip(self.tr("Reset this vector"))
        btn_reset.clicked.connect(self.reset_requested)
        root.addWidget(btn_reset)

        self.set_vector(vector)

    def set_vector(self, vector: Vector) -> None:
        for axis, value in zip(self.axes, vector.coords()):
            _set_quietly(self._spins[axis], value)


class VectorListEditor(QWidget):
    """One VectorEditor per vector. Rebuilt when the vector set changes shape."""
    component_edited = Signal(int, str, float)
    reset_requested = Signal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._editors: list[VectorEditor] = []
        self._signature: tuple[tuple[str, int], ...] = ()

    def set_vectors(self, vectors: Sequence[Vector]) -> None:
        signature = tuple((v.label, v.dimension) for v in vectors)
        if signature != self._signature:
            self._rebuild(vectors)
            self._signature = signature
            return
        for editor, vector in zip(self._editors, vectors):
            editor.set_vector(vector)

    def _rebuild(self, vectors: Sequence[Vector]) -> None:
        for editor in self._editors:
            self._layout.removeWidget(editor)
            editor.deleteLater()
        self._editors = []
        for index, vector in enumerate(vectors):
            editor = VectorEditor(vector, self)
            editor.component_edited.connect(lambda a, v, i=index: self.component_edited.emit(i, a, v))
            editor.reset_requested.connect(lambda i=index: self.reset_requested.emit(i))
            self._layout.addWidget(editor)
            self._editors.append(editor)
