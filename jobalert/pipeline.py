"""
Pipeline module
Runs one fetch -> normalize -> filter -> notify -> persist cycle.
"""

import time
from typing import Callable, Dict
import logging

from .matcher import JobMatcher
from .source import normalize_job

logger = logging.getLogger(__name__)


class JobPipeline:
    """Job alert pipeline"""

    def __init__(self, source, matcher: JobMatcher, store, notifier,
                 notify_delay: float = 0.3, sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            source: Object with fetch() -> FetchResult
            matcher: Keyword matcher
            store: Seen-job store (contains / mark_seen / flush)
            notifier: Object with notify(job) -> NotifyResult
            notify_delay: Pause after each notification, in seconds
            sleep: Sleep function (replaced in tests)
        """
        self.source = source
        self.matcher = matcher
        self.store = store
        self.notifier = notifier
        self.notify_delay = notify_delay
        self.sleep = sleep

    def run_cycle(self) -> int:
        """
        Run one cycle and return the number of notifications sent.

        Jobs are marked seen before delivery is attempted: a failed
        notification is never retried in a later cycle.
        """
        logger.info("Checking for new job postings...")

        result = self.source.fetch()
        if not result.ok:
            logger.warning(f"Fetch failed, no jobs this cycle: {result.error}")
        logger.info(f"Found {len(result.records)} jobs from API")

        sent = 0
        for raw in result.records:
            try:
                job = normalize_job(raw)
                if not job.id:
                    continue
                job_id = str(job.id)
                if self.store.contains(job_id):
                    continue
                keyword = self.matcher.matched_keyword(job)
                if keyword is None:
                    continue

                self.store.mark_seen(job_id)
                sent += 1
                logger.info(f"New matching job {job_id}: {job.title} (keyword: {keyword})")

                try:
                    outcome = self.notifier.notify(job)
                    if not outcome.ok:
                        logger.warning(f"Notification for job {job_id} not delivered: {outcome.reason}")
                finally:
                    self.sleep(self.notify_delay)
            except Exception as e:
                logger.exception(f"Error processing job record: {e}")

        self.store.flush()
        logger.info(f"Notifications sent: {sent}")
        return sent

    def dry_run(self) -> Dict[str, int]:
        """
        Fetch and filter without notifying or touching the seen-job store.

        Returns:
            Counts of fetched records, records with an id, matching jobs,
            matching jobs not yet seen, and fetch errors
        """
        result = self.source.fetch()
        if not result.ok:
            logger.warning(f"Fetch failed: {result.error}")

        counts = {'fetched': len(result.records), 'with_id': 0, 'matched': 0, 'new': 0,
                  'errors': 0 if result.ok else 1}
        for raw in result.records:
            job = normalize_job(raw)
            if not job.id:
                continue
            counts['with_id'] += 1
            keyword = self.matcher.matched_keyword(job)
            if keyword is None:
                continue
            counts['matched'] += 1
            if not self.store.contains(str(job.id)):
                counts['new'] += 1
            logger.info(f"Match {job.id}: {job.title} @ {job.company} (keyword: {keyword})")
        return counts
