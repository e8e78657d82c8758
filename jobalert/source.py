"""
Listing source module
Fetches job postings from the JSearch API (RapidAPI) and normalizes them.
"""

import requests
from typing import Any, Dict, Optional
import logging

from .models import FetchResult, Job

logger = logging.getLogger(__name__)

DEFAULT_HOST = 'jsearch.p.rapidapi.com'


def _text(value: Any) -> str:
    if value is None:
        return ''
    return value if isinstance(value, str) else str(value)


def normalize_job(raw: Dict[str, Any]) -> Job:
    """
    Map a raw JSearch record to a Job.

    The id is passed through untouched so records without one can be
    dropped by the pipeline instead of being deduplicated on a placeholder.
    """
    link = raw.get('job_apply_link') or raw.get('job_google_link')
    return Job(
        id=raw.get('job_id'),
        title=_text(raw.get('job_title')),
        company=_text(raw.get('employer_name')),
        location=_text(raw.get('job_country')),
        description=_text(raw.get('job_description')),
        link=_text(link),
    )


class JSearchSource:
    """JSearch listing source"""

    def __init__(self, api_key: str, query: str, host: str = DEFAULT_HOST,
                 timeout: float = 15, session: Optional[requests.Session] = None):
        """
        Args:
            api_key: RapidAPI key
            query: Fixed search query sent on every fetch
            host: RapidAPI host for JSearch
            timeout: Request timeout in seconds
            session: Optional requests session (injected in tests)
        """
        self.query = query
        self.host = host
        self.timeout = timeout
        self.url = f"https://{host}/search"
        self.session = session or requests.Session()
        self.session.headers.update({
            'x-rapidapi-key': api_key,
            'x-rapidapi-host': host,
        })

    def fetch(self) -> FetchResult:
        """Request one page of results. Failures degrade to an empty result."""
        params = {'query': self.query, 'num_pages': 1}
        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"JSearch request failed: {e}")
            return FetchResult(error=str(e))
        except ValueError as e:
            logger.error(f"JSearch returned malformed JSON: {e}")
            return FetchResult(error=f"malformed response: {e}")

        if not isinstance(payload, dict):
            logger.error(f"Unexpected JSearch response type: {type(payload).__name__}")
            return FetchResult(error="unexpected response shape")

        records = payload.get('data')
        if not isinstance(records, list):
            return FetchResult()

        return FetchResult(records=[r for r in records if isinstance(r, dict)])
