from __future__ import annotations

from PySide6.QtWidgets import QWidget

from linearlab.app.state import Store
from linearlab.model.types import DimensionMode


class BasePanel(QWidget):
    """
    Base class for the control tabs.

    Holds a reference to the global store and forwards mode switches to
    `on_mode_changed`, which panels override when their content depends on
    the active dimension.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self.store.mode_changed.connect(self.on_mode_changed)

    @property
    def mode(self) -> DimensionMode:
        return self.store.mode

    def on_mode_changed(self, mode: DimensionMode) -> None:
        pass
