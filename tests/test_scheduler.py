"""
Unit tests for the scheduler and its single-cycle guard
"""

import threading

from jobalert.matcher import JobMatcher
from jobalert.models import FetchResult
from jobalert.pipeline import JobPipeline
from jobalert.scheduler import JobScheduler
from jobalert.store import MemorySeenStore
from conftest import FakeSource, RecordingNotifier, raw_job


class BlockingSource:
    """Source whose fetch waits until released"""

    def __init__(self, records):
        self.records = records
        self.entered = threading.Event()
        self.release = threading.Event()

    def fetch(self):
        self.entered.set()
        self.release.wait(5)
        return FetchResult(records=list(self.records))


def make_scheduler(source, store=None, notifier=None):
    store = store if store is not None else MemorySeenStore()
    pipeline = JobPipeline(
        source, JobMatcher(['remote', 'intern']), store,
        notifier or RecordingNotifier(), sleep=lambda _: None,
    )
    return JobScheduler(pipeline, store, interval_minutes=5)


class TestJobScheduler:
    def test_trigger_returns_count(self):
        scheduler = make_scheduler(FakeSource([raw_job('J1', 'Remote Intern')]))
        assert scheduler.trigger() == 1
        assert scheduler.last_sent == 1
        assert scheduler.last_check is not None

    def test_status(self):
        store = MemorySeenStore(['a', 'b'])
        scheduler = make_scheduler(FakeSource(), store=store)
        status = scheduler.status()
        assert status['ok'] == True
        assert status['total_seen'] == 2
        assert status['last_check'] is None
        assert status['running'] == False

        scheduler.trigger()
        assert 'T' in scheduler.status()['last_check']

    def test_overlapping_trigger_is_dropped(self):
        """Test two simultaneous triggers run exactly one cycle"""
        source = BlockingSource([raw_job('J1', 'Remote Intern')])
        store = MemorySeenStore()
        notifier = RecordingNotifier()
        scheduler = make_scheduler(source, store=store, notifier=notifier)

        results = {}
        worker = threading.Thread(target=lambda: results.update(first=scheduler.trigger('scheduled')))
        worker.start()
        assert source.entered.wait(5)

        assert scheduler.running == True
        assert scheduler.status()['total_seen'] == 0
        assert scheduler.trigger('manual') is None

        source.release.set()
        worker.join(5)

        assert results['first'] == 1
        assert len(notifier.sent) == 1
        assert store.snapshot() == {'J1'}
        assert scheduler.running == False

    def test_pipeline_exception_still_returns_count(self):
        class BrokenPipeline:
            def run_cycle(self):
                raise RuntimeError('boom')

        scheduler = JobScheduler(BrokenPipeline(), MemorySeenStore())
        assert scheduler.trigger() == 0
        assert scheduler.running == False

    def test_start_runs_initial_cycle_and_stop(self):
        source = FakeSource([raw_job('J1', 'Remote Intern')])
        scheduler = make_scheduler(source)
        scheduler.start()
        try:
            for _ in range(50):
                if scheduler.last_check is not None:
                    break
                threading.Event().wait(0.1)
            assert source.fetches >= 1
            assert scheduler.last_sent == 1
        finally:
            scheduler.stop(timeout=5)

    def test_start_registers_interval_job(self):
        """Test the timer fires every interval_minutes minutes"""
        scheduler = make_scheduler(FakeSource())
        scheduler.start()
        try:
            jobs = scheduler._schedule.jobs
            assert len(jobs) == 1
            assert jobs[0].interval == 5
            assert jobs[0].unit == 'minutes'
        finally:
            scheduler.stop(timeout=5)
        assert scheduler._schedule.jobs == []
