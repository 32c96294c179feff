from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from linearlab.config import MAX_ENTRY
from linearlab.model import linalg, presets
from linearlab.model.scene import MatrixStats, matrix_stats
from linearlab.model.snapshot import decode_snapshot, encode_snapshot
from linearlab.model.types import DimensionMode, Insight, Matrix, Snapshot, Vector, is_entry, is_valid_matrix, to_matrix

logger = logging.getLogger(__name__)


class Store(QObject):
    """
    Central state store with signals for panel/canvas sync.

    Holds one matrix and one vector set per mode, plus the 2D multiplicand B.
    Every edit publishes a new immutable value; the active-mode signals carry
    the new value so listeners never read a half-updated store.
    """
    mode_changed = Signal(object)
    matrix_changed = Signal(object)
    matrix_b_changed = Signal(object)
    vectors_changed = Signal(object)
    grid_changed = Signal(bool)
    insight_changed = Signal(object)
    loading_changed = Signal(bool)

    def __init__(self) -> None:
        super().__init__()
        self.mode: DimensionMode = DimensionMode.TWO_D
        self.matrix2d: Matrix = presets.INITIAL_MATRIX_2D
        self.matrix_b2d: Matrix = presets.INITIAL_MATRIX_2D
        self.vectors2d: tuple[Vector, ...] = presets.INITIAL_VECTORS_2D
        self.matrix3d: Matrix = presets.INITIAL_MATRIX_3D
        self.vectors3d: tuple[Vector, ...] = presets.INITIAL_VECTORS_3D
        self.show_grid: bool = True
        self.insight: Optional[Insight] = None
        self.loading: bool = False

    # ---- active-mode accessors ----

    def active_matrix(self) -> Matrix:
        return self.matrix2d if self.mode is DimensionMode.TWO_D else self.matrix3d

    def active_vectors(self) -> tuple[Vector, ...]:
        return self.vectors2d if self.mode is DimensionMode.TWO_D else self.vectors3d

    def stats(self) -> MatrixStats:
        return matrix_stats(self.active_matrix())

    # ---- mode ----

    def set_mode(self, mode: DimensionMode) -> None:
        mode = DimensionMode(mode)
        if mode is self.mode:
            return
        self.mode = mode
        self.mode_changed.emit(self.mode)
        self._emit_active()

    # ---- matrices ----

    def set_matrix(self, matrix: Matrix) -> None:
        """Replace the active matrix."""
        size = self.mode.size
        if not is_valid_matrix(matrix, size):
            raise ValueError(f"Expected a {size}x{size} matrix of finite numbers.")
        if self.mode is DimensionMode.TWO_D:
            self.matrix2d = to_matrix(matrix)
        else:
            self.matrix3d = to_matrix(matrix)
        self.matrix_changed.emit(self.active_matrix())

    def set_matrix_entry(self, row: int, col: int, value: float) -> None:
        self.set_matrix(self._with_entry(self.active_matrix(), row, col, value))

    def set_matrix_b(self, matrix: Matrix) -> None:
        if not is_valid_matrix(matrix, 2):
            raise ValueError("Matrix B must be a 2x2 matrix of finite numbers.")
        self.matrix_b2d = to_matrix(matrix)
        self.matrix_b_changed.emit(self.matrix_b2d)

    def set_matrix_b_entry(self, row: int, col: int, value: float) -> None:
        self.set_matrix_b(self._with_entry(self.matrix_b2d, row, col, value))

    def apply_preset(self, name: str) -> None:
        table = presets.presets_for(self.mode)
        if name not in table:
            raise KeyError(f"No {self.mode.value} preset named '{name}'.")
        self.set_matrix(table[name])

    def transpose(self) -> None:
        self.set_matrix(to_matrix(linalg.transpose(self.active_matrix())))

    def multiply(self) -> bool:
        """
        A = A x B.

        Returns:
            False (and A is unchanged) in 3D, or when the product has an
            entry outside ±MAX_ENTRY.
        """
        if self.mode is not DimensionMode.TWO_D:
            logger.debug("Matrix multiplication is only available in 2D mode.")
            return False
        product = to_matrix(linalg.multiply(self.matrix2d, self.matrix_b2d))
        if not is_valid_matrix(product, 2):
            logger.warning(f"A x B = {product} leaves the editable range, A was kept.")
            return False
        self.set_matrix(product)
        return True

    def reset_matrix(self) -> None:
        self.set_matrix(presets.initial_matrix(self.mode))

    # ---- vectors ----

    def set_vector_component(self, index: int, axis: str, value: float) -> None:
        vectors = list(self.active_vectors())
        vectors[index] = vectors[index].with_component(axis, value)
        self._set_active_vectors(tuple(vectors))

    def move_vector(self, index: int, x: float, y: float) -> None:
        """Set x and y of one vector in a single update (z is kept in 3D)."""
        vectors = list(self.active_vectors())
        vectors[index] = vectors[index].with_component("x", x).with_component("y", y)
        self._set_active_vectors(tuple(vectors))

    def reset_vector(self, index: int) -> bool:
        """
        Put one vector back to its start-up value.

        Vectors beyond the start-up set (a shared link may carry more) have
        no start-up value and are left as they are.

        Returns:
            True if the vector was reset.
        """
        initial = presets.initial_vectors(self.mode)
        vectors = list(self.active_vectors())
        if not 0 <= index < len(initial):
            logger.info(f"Vector {vectors[index].label} has no start-up value, nothing to reset.")
            return False
        vectors[index] = initial[index]
        self._set_active_vectors(tuple(vectors))
        return True

    def _set_active_vectors(self, vectors: tuple[Vector, ...]) -> None:
        if self.mode is DimensionMode.TWO_D:
            self.vectors2d = vectors
        else:
            self.vectors3d = vectors
        self.vectors_changed.emit(vectors)

    # ---- view options ----

    def set_show_grid(self, show: bool) -> None:
        if show != self.show_grid:
            self.show_grid = show
            self.grid_changed.emit(show)

    # ---- insight ----

    def set_insight(self, insight: Optional[Insight]) -> None:
        self.insight = insight
        self.insight_changed.emit(insight)

    def set_loading(self, loading: bool) -> None:
        if loading != self.loading:
            self.loading = loading
            self.loading_changed.emit(loading)

    def begin_insight_request(self) -> tuple[Matrix, tuple[Vector, ...]]:
        """Raise the loading flag and return the scene the request is about."""
        self.set_loading(True)
        return self.active_matrix(), self.active_vectors()

    def finish_insight_request(self, insight: Optional[Insight]) -> None:
        """Show a successful result and always clear the loading flag."""
        if insight is not None:
            self.set_insight(insight)
        else:
            logger.info("No insight available, keeping the current view.")
        self.set_loading(False)

    # ---- whole-scene operations ----

    def reset_all(self) -> None:
        self.matrix2d = presets.INITIAL_MATRIX_2D
        self.matrix_b2d = presets.INITIAL_MATRIX_2D
        self.vectors2d = presets.INITIAL_VECTORS_2D
        self.matrix3d = presets.INITIAL_MATRIX_3D
        self.vectors3d = presets.INITIAL_VECTORS_3D
        self.matrix_b_changed.emit(self.matrix_b2d)
        self._emit_active()
        self.set_insight(None)
        logger.info("Scene has been reset.")

    def snapshot(self) -> Snapshot:
        return Snapshot(
            mode=self.mode,
            matrix2d=self.matrix2d,
            vectors2d=self.vectors2d,
            matrix3d=self.matrix3d,
            vectors3d=self.vectors3d,
        )

    def share_token(self) -> str:
        return encode_snapshot(self.snapshot())

    def restore(self, token: str) -> bool:
        """
        Load a shared scene. On a malformed token the current scene is kept.

        Returns:
            True if the scene was replaced.
        """
        snap = decode_snapshot(token, defaults=self.snapshot())
        if snap is None:
            return False

        self.matrix2d = snap.matrix2d
        self.vectors2d = snap.vectors2d
        self.matrix3d = snap.matrix3d
        self.vectors3d = snap.vectors3d
        if snap.mode is not self.mode:
            self.mode = snap.mode
            self.mode_changed.emit(self.mode)
        self._emit_active()
        logger.info(f"Restored {self.mode.value} scene from shared link.")
        return True

    # ---- helpers ----

    def _emit_active(self) -> None:
        self.matrix_changed.emit(self.active_matrix())
        self.vectors_changed.emit(self.active_vectors())

    @staticmethod
    def _with_entry(matrix: Matrix, row: int, col: int, value: float) -> Matrix:
        if not is_entry(value):
            raise ValueError(f"Matrix entries must be finite and within ±{MAX_ENTRY:g}, got {value}.")
        size = len(matrix)
        if not (0 <= row < size and 0 <= col < size):
            raise IndexError(f"Entry ({row}, {col}) is outside a {size}x{size} matrix.")
        return tuple(
            tuple(float(value) if (i, j) == (row, col) else v for j, v in enumerate(r))
            for i, r in enumerate(matrix)
        )
