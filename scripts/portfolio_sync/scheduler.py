#------------------------------------------------------------
#                         scheduler.py
#        Runs the GitHub sync once on start and then on a
#                  fixed repeating interval.

import logging
import threading
from typing import Optional
from .config import DEFAULT_SYNC_INTERVAL_DAYS, SECONDS_PER_DAY
from .services.sync_service import SyncService

logger = logging.getLogger(__name__)

TRIGGER_INITIAL = "initial"
TRIGGER_SCHEDULED = "scheduled"
TRIGGER_MANUAL = "manual"

class SyncScheduler:
    """Repeating timer around a SyncService.

    Nothing runs until ``start()`` is called. At most one sync runs at a
    time: a trigger that fires while a sync is in progress is skipped, not
    queued. Sync failures are logged and never stop later ticks.
    """

    def __init__(self, sync_service: SyncService, interval_days: int = DEFAULT_SYNC_INTERVAL_DAYS):
        if interval_days <= 0:
            raise ValueError(f"interval_days must be positive, got {interval_days}")
        self.sync_service = sync_service
        self.interval_days = interval_days
        self._lock = threading.Lock()
        self._sync_in_progress = False
        self._stop_event: Optional[threading.Event] = None
        self._timer_thread: Optional[threading.Thread] = None

    @property
    def interval_seconds(self) -> int:
        return self.interval_days * SECONDS_PER_DAY

    @property
    def is_active(self) -> bool:
        return self._stop_event is not None

    @property
    def is_syncing(self) -> bool:
        with self._lock:
            return self._sync_in_progress

    def start(self) -> None:
        if self.is_active:
            logger.info("Scheduler already started")
            return

        stop_event = threading.Event()
        self._stop_event = stop_event
        self._dispatch(TRIGGER_INITIAL)

        self._timer_thread = threading.Thread(
            target=self._run_timer,
            args=(stop_event,),
            name="portfolio-sync-timer",
            daemon=True,
        )
        self._timer_thread.start()
        logger.info("Started. Will sync every %d days.", self.interval_days)

    def stop(self) -> None:
        if not self.is_active:
            return
        self._stop_event.set()
        self._stop_event = None
        self._timer_thread = None
        logger.info("Stopped.")

    # This function does block until the scheduler is stopped.
    # It returns immediately when the scheduler was never started.
    def wait(self, timeout: Optional[float] = None) -> bool:
        stop_event = self._stop_event
        if stop_event is None:
            return True
        return stop_event.wait(timeout)

    # This function does run one sync unless another is in progress.
    # It returns True when a sync ran, whether or not it succeeded.
    def run_once(self, trigger: str = TRIGGER_MANUAL) -> bool:
        with self._lock:
            if self._sync_in_progress:
                logger.info("Sync already running, skipping %s sync", trigger)
                return False
            self._sync_in_progress = True

        try:
            logger.info("Running %s sync...", trigger)
            self.sync_service.sync()
        except Exception:
            logger.exception("%s sync failed; will try again next cycle", trigger.capitalize())
        finally:
            with self._lock:
                self._sync_in_progress = False
        return True

    def _dispatch(self, trigger: str) -> None:
        worker = threading.Thread(
            target=self.run_once,
            args=(trigger,),
            name=f"portfolio-sync-{trigger}",
            daemon=True,
        )
        worker.start()

    def _run_timer(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval_seconds):
            self._dispatch(TRIGGER_SCHEDULED)
