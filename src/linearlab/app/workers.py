"""
Background Workers (Threading)
==============================
QThread subclasses for work that must not block the event loop.

Classes:
    InsightWorker: Runs one AI insight request and reports the result.
    WorkerSet: Keeps started workers alive until they finish.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from PySide6.QtCore import QObject, QThread, Signal

from linearlab.model.types import Insight, Matrix, Vector
from linearlab.services.insights import request_insight

logger = logging.getLogger(__name__)


class InsightWorker(QThread):
    # Always emitted exactly once per run, with None when there is no insight
    result_ready = Signal(object)
    error_occurred = Signal(str)

    def __init__(self, matrix: Matrix, vectors: Sequence[Vector]) -> None:
        super().__init__()
        self.matrix = matrix
        self.vectors = tuple(vectors)

    def run(self) -> None:
        result: Optional[Insight] = None
        try:
            logger.info("Starting insight request in background thread...")
            result = request_insight(self.matrix, self.vectors)
        except Exception as e:
            logger.error(f"Error in InsightWorker: {e}")
            self.error_occurred.emit(str(e))
        finally:
            self.result_ready.emit(result)


class WorkerSet(QObject):
    """
    Every started worker, until its `finished` signal arrives.

    A new request does not cancel the previous one, so more than one worker
    can be running at a time; shutdown must wait for all of them.
    """
    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._workers: set[QThread] = set()

    def __len__(self) -> int:
        return len(self._workers)

    def start(self, worker: QThread) -> None:
        # bound slot on a main-thread QObject: delivered queued, in the main thread
        worker.finished.connect(self._on_finished)
        self._workers.add(worker)
        worker.start()

    def wait_all(self) -> None:
        for worker in list(self._workers):
            if worker.isRunning():
                worker.wait()

    def _on_finished(self) -> None:
        worker = self.sender()
        self._workers.discard(worker)
        worker.deleteLater()
