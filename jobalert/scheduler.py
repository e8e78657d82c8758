"""
Scheduler module
Runs the pipeline on a fixed interval and on demand, one cycle at a time.
"""

import schedule
import threading
from typing import Dict, Optional
import logging
from datetime import datetime
import pytz

from .pipeline import JobPipeline

logger = logging.getLogger(__name__)


class JobScheduler:
    """Job alert scheduler"""

    def __init__(self, pipeline: JobPipeline, store, interval_minutes: int = 5,
                 timezone: str = 'UTC'):
        """
        Args:
            pipeline: Pipeline to run on each cycle
            store: Seen-job store, read for status reporting
            interval_minutes: Minutes between scheduled cycles
            timezone: Timezone name used for last_check timestamps
        """
        self.pipeline = pipeline
        self.store = store
        self.interval_minutes = interval_minutes
        self.tz = pytz.timezone(timezone)

        self._cycle_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._schedule = schedule.Scheduler()

        self.last_check: Optional[datetime] = None
        self.last_sent: Optional[int] = None

    def _now(self) -> datetime:
        return datetime.now(self.tz)

    @property
    def running(self) -> bool:
        return self._cycle_lock.locked()

    def trigger(self, source: str = 'manual') -> Optional[int]:
        """
        Run one cycle unless another is already in progress.

        Returns:
            Number of notifications sent, or None if the trigger was dropped
        """
        if not self._cycle_lock.acquire(blocking=False):
            logger.warning(f"Cycle already running, dropping {source} trigger")
            return None

        try:
            started = self._now()
            logger.info(f"Starting {source} cycle at {started.isoformat()}")
            try:
                sent = self.pipeline.run_cycle()
            except Exception as e:
                logger.exception(f"Cycle failed: {e}")
                sent = 0
            self.last_sent = sent
            self.last_check = started
            return sent
        finally:
            self._cycle_lock.release()

    def status(self) -> Dict:
        """Read-only status. Never waits on a running cycle."""
        return {
            'ok': True,
            'total_seen': len(self.store),
            'last_check': self.last_check.isoformat() if self.last_check else None,
            'running': self.running,
        }

    def _run(self):
        logger.info("Running initial check...")
        self.trigger('scheduled')
        while not self._stop_event.is_set():
            self._schedule.run_pending()
            self._stop_event.wait(1)

    def start(self):
        """Schedule cycles and start the background timer thread"""
        if self._thread and self._thread.is_alive():
            return

        logger.info("=" * 60)
        logger.info("Starting job scheduler")
        logger.info(f"Current time: {self._now().strftime('%Y-%m-%d %H:%M:%S %Z')}")
        logger.info(f"Scheduled checks every {self.interval_minutes} minutes")
        logger.info("=" * 60)

        self._schedule.clear()
        self._schedule.every(self.interval_minutes).minutes.do(self.trigger, 'scheduled')
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name='job-scheduler', daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        """Stop the timer thread. A cycle in progress runs to completion."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None
        self._schedule.clear()
        logger.info("Scheduler stopped")
