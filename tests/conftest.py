"""
Shared test fakes
"""

import requests

from jobalert.models import FetchResult, NotifyResult


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else str(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Records requests and replays a canned response or exception"""

    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []

    def _reply(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._reply('GET', url, **kwargs)

    def post(self, url, **kwargs):
        return self._reply('POST', url, **kwargs)


class FakeSource:
    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.fetches = 0

    def fetch(self):
        self.fetches += 1
        return FetchResult(records=list(self.records), error=self.error)


class RecordingNotifier:
    def __init__(self, ok=True):
        self.ok = ok
        self.sent = []

    def notify(self, job):
        self.sent.append(job)
        if self.ok:
            return NotifyResult(ok=True)
        return NotifyResult(ok=False, reason='boom')


def raw_job(job_id, title, company='Acme', country='US', description='', link='https://example.com/apply'):
    record = {
        'job_title': title,
        'employer_name': company,
        'job_country': country,
        'job_description': description,
        'job_apply_link': link,
    }
    if job_id is not None:
        record['job_id'] = job_id
    return record
