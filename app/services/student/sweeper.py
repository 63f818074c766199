import logging
import threading
from typing import Callable, Iterable, List, Optional

from app.services.student.uploads import DEFAULT_MIN_AGE_SECONDS, UploadManager

logger = logging.getLogger(__name__)


class OrphanSweeper:
    """
    Background thread that periodically reclaims unreferenced uploads.

    Sweeps once on start, then every `interval` seconds until stop().
    """

    def __init__(
        self,
        uploads: UploadManager,
        refs_provider: Callable[[], Iterable[str]],
        interval: float = 3600.0,
        min_age: float = DEFAULT_MIN_AGE_SECONDS,
    ):
        self.uploads = uploads
        self.refs_provider = refs_provider
        self.interval = interval
        self.min_age = min_age
        self.thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._sweep_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self.thread = threading.Thread(target=self._run, name="orphan-sweeper", daemon=True)
        self.thread.start()
        logger.info(f"Orphan sweeper started (every {self.interval}s, min age {self.min_age}s)")

    def stop(self, timeout: Optional[float] = 10.0) -> None:
        self._stop_event.set()
        if self.thread is not None:
            self.thread.join(timeout)
            self.thread = None
            logger.info("Orphan sweeper stopped")

    def run_once(self) -> List[str]:
        """Run a single sweep; skipped if another sweep is in progress."""
        if not self._sweep_lock.acquire(blocking=False):
            logger.debug("Sweep already running, skipping")
            return []
        try:
            # Fresh uploads missing from the snapshot are covered by min_age
            live = set(self.refs_provider())
            return self.uploads.reclaim_orphans(live, self.min_age)
        finally:
            self._sweep_lock.release()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"Orphan sweep failed: {e}", exc_info=True)
            if self._stop_event.wait(self.interval):
                break
