from __future__ import annotations

import logging

from PySide6.QtCore import Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QCheckBox, QMessageBox, QInputDialog, QLineEdit
)

from linearlab.app.state import Store
from linearlab.app.ui.panels.base import BasePanel
from linearlab.model.snapshot import share_url

logger = logging.getLogger(__name__)


class AnalysisPanel(BasePanel):
    """
    AI insight request, scene sharing and global view options.
    """
    # The main window owns the worker thread
    analyze_requested = Signal()

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        root = QVBoxLayout(self)

        self.btn_analyze = QPushButton(self.tr("Deep AI Insight"), self)
        self.btn_analyze.setMinimumHeight(44)
        self.btn_analyze.setStyleSheet("font-weight: bold;")
        root.addWidget(self.btn_analyze)

        self.btn_share = QPushButton(self.tr("Share Current Scene"), self)
        self.btn_share.setMinimumHeight(32)
        root.addWidget(self.btn_share)

        self.btn_open = QPushButton(self.tr("Open Shared Link..."), self)
        root.addWidget(self.btn_open)

        row = QHBoxLayout()
        self.chk_grid = QCheckBox(self.tr("Show Grid"), self)
        self.chk_grid.setChecked(self.store.show_grid)
        row.addWidget(self.chk_grid)
        row.addStretch()
        self.btn_reset_all = QPushButton(self.tr("Full Reset"), self)
        self.btn_reset_all.setStyleSheet("color: #e11d48; font-weight: bold;")
        row.addWidget(self.btn_reset_all)
        root.addLayout(row)

        root.addStretch()

        self.btn_analyze.clicked.connect(self.analyze_requested)
        self.btn_share.clicked.connect(self.on_share_clicked)
        self.btn_open.clicked.connect(self.on_open_clicked)
        self.chk_grid.toggled.connect(self.store.set_show_grid)
        self.btn_reset_all.clicked.connect(lambda: self.store.reset_all())

        self.store.loading_changed.connect(self._on_loading_changed)

    # --- SLOTS ---

    def _on_loading_changed(self, loading: bool) -> None:
        self.btn_analyze.setEnabled(not loading)
        self.btn_analyze.setText(self.tr("Analyzing...") if loading else self.tr("Deep AI Insight"))

    def on_share_clicked(self) -> None:
        url = share_url(self.store.share_token())
        QGuiApplication.clipboard().setText(url)
        logger.info(f"Share link copied to clipboard ({len(url)} characters).")
        QMessageBox.information(
            self,
            self.tr("Share"),
            self.tr("Link copied to clipboard! Share it with your friends."),
        )

    def on_open_clicked(self) -> None:
        text, ok = QInputDialog.getText(
            self,
            self.tr("Open Shared Link"),
            self.tr("Paste a shared link or token:"),
            QLineEdit.EchoMode.Normal,
            QGuiApplication.clipboard().text(),
        )
        if not ok or not text.strip():
            return
        if not self.store.restore(text):
            QMessageBox.warning(
                self,
                self.tr("Open Shared Link"),
                self.tr("The link could not be read. The current scene was kept."),
            )
