"""
Tests for the HTTP control surface
"""

from fastapi.testclient import TestClient

from jobalert.matcher import JobMatcher
from jobalert.pipeline import JobPipeline
from jobalert.scheduler import JobScheduler
from jobalert.server import create_app
from jobalert.store import MemorySeenStore
from conftest import FakeSource, RecordingNotifier, raw_job


def make_client(records=()):
    store = MemorySeenStore()
    pipeline = JobPipeline(
        FakeSource(list(records)), JobMatcher(['remote', 'intern']), store,
        RecordingNotifier(), sleep=lambda _: None,
    )
    scheduler = JobScheduler(pipeline, store)
    return TestClient(create_app(scheduler)), scheduler


class TestServer:
    def test_index(self):
        client, _ = make_client()
        response = client.get('/')
        assert response.status_code == 200
        assert 'running' in response.text

    def test_trigger_then_status(self):
        client, _ = make_client([raw_job('J1', 'Remote Software Intern'), raw_job('J2', 'Accountant')])

        response = client.get('/trigger')
        assert response.status_code == 200
        assert response.json() == {'ok': True, 'sent': 1}

        assert client.get('/trigger').json() == {'ok': True, 'sent': 0}

        status = client.get('/status').json()
        assert status['ok'] == True
        assert status['total_seen'] == 1
        assert status['last_check'] is not None

    def test_trigger_while_running(self):
        client, scheduler = make_client()
        scheduler._cycle_lock.acquire()
        try:
            response = client.get('/trigger')
        finally:
            scheduler._cycle_lock.release()
        assert response.status_code == 409
        assert response.json()['ok'] == False
        assert response.json()['sent'] == 0

    def test_status_before_first_cycle(self):
        """Test last_check is null until a cycle has completed"""
        client, _ = make_client()
        response = client.get('/status')
        assert response.status_code == 200
        assert response.json() == {'ok': True, 'total_seen': 0, 'last_check': None, 'running': False}
