"""Tests for the background insight worker (run() is called directly, no thread)."""
from linearlab.app import workers
from linearlab.app.workers import InsightWorker
from linearlab.model.presets import INITIAL_MATRIX_2D, INITIAL_VECTORS_2D
from linearlab.model.types import Insight


def test_result_is_emitted(qapp, monkeypatch):
    insight = Insight(title="Identity", explanation="Nothing moves.", math_details=())
    seen = []
    monkeypatch.setattr(workers, "request_insight", lambda m, v: seen.append((m, v)) or insight)

    worker = InsightWorker(INITIAL_MATRIX_2D, list(INITIAL_VECTORS_2D))
    results = []
    worker.result_ready.connect(results.append)
    worker.run()

    assert results == [insight]
    assert seen == [(INITIAL_MATRIX_2D, INITIAL_VECTORS_2D)]


def test_error_still_reports_a_result(qapp, monkeypatch):
    def boom(matrix, vectors):
        raise RuntimeError("boom")

    monkeypatch.setattr(workers, "request_insight", boom)

    worker = InsightWorker(INITIAL_MATRIX_2D, INITIAL_VECTORS_2D)
    results, errors = [], []
    worker.result_ready.connect(results.append)
    worker.error_occurred.connect(errors.append)
    worker.run()

    assert errors == ["boom"]
    assert results == [None]


def test_worker_set_waits_for_every_worker(qapp, monkeypatch):
    monkeypatch.setattr(workers, "request_insight", lambda m, v: None)

    pool = workers.WorkerSet()
    started = [InsightWorker(INITIAL_MATRIX_2D, INITIAL_VECTORS_2D) for _ in range(3)]
    for worker in started:
        pool.start(worker)
    assert len(pool) == 3

    pool.wait_all()
    assert not any(worker.isRunning() for worker in started)

    # `finished` is delivered through the event loop
    qapp.processEvents()
    assert len(pool) == 0
