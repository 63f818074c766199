import os
import threading
import time

from fastapi.testclient import TestClient

from app.main import create_app
from app.services.student.sweeper import OrphanSweeper

DAY = 24 * 60 * 60


def _backdate(path, seconds):
    past = time.time() - seconds
    os.utime(path, (past, past))


def test_run_once_respects_age_guard(uploads):
    ref = uploads.store(b"x", "orphan.jpg")
    sweeper = OrphanSweeper(uploads, set, interval=60, min_age=DAY)

    assert sweeper.run_once() == []
    assert (uploads.upload_dir / ref).exists()

    _backdate(uploads.upload_dir / ref, DAY + 1)

    assert sweeper.run_once() == [ref]
    assert not (uploads.upload_dir / ref).exists()


def test_run_once_keeps_referenced_files(uploads):
    ref = uploads.store(b"x", "kept.jpg")
    _backdate(uploads.upload_dir / ref, 2 * DAY)
    sweeper = OrphanSweeper(uploads, lambda: {ref}, interval=60, min_age=DAY)

    assert sweeper.run_once() == []
    assert (uploads.upload_dir / ref).exists()


def test_start_sweeps_immediately_and_stops(uploads):
    swept = threading.Event()

    def live_refs():
        swept.set()
        return set()

    sweeper = OrphanSweeper(uploads, live_refs, interval=3600, min_age=DAY)
    sweeper.start()
    try:
        assert swept.wait(5)
        assert sweeper.running
    finally:
        sweeper.stop()

    assert not sweeper.running
    # stopping twice is harmless
    sweeper.stop()


def test_sweep_does_not_overlap_itself(uploads):
    sweeper = OrphanSweeper(uploads, set, interval=60, min_age=0)
    ref = uploads.store(b"x", "a.jpg")
    _backdate(uploads.upload_dir / ref, 10)

    with sweeper._sweep_lock:
        assert sweeper.run_once() == []
    assert (uploads.upload_dir / ref).exists()


def test_failing_sweep_keeps_thread_alive(uploads):
    calls = []

    def flaky():
        calls.append(1)
        raise RuntimeError("boom")

    sweeper = OrphanSweeper(uploads, flaky, interval=0.01, min_age=DAY)
    sweeper.start()
    try:
        deadline = time.time() + 5
        while len(calls) < 2 and time.time() < deadline:
            time.sleep(0.01)
        assert len(calls) >= 2
        assert sweeper.running
    finally:
        sweeper.stop()


def test_app_lifespan_starts_and_stops_sweeper(settings):
    enabled = settings.model_copy(update={"ORPHAN_SWEEP_ENABLED": True})
    app = create_app(enabled)

    with TestClient(app):
        sweeper = app.state.sweeper
        assert sweeper.running

    assert not sweeper.running
