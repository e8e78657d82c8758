"""
Job matching module
Decides whether a job posting is of interest using keyword substring matching.
"""

from typing import Iterable, List, Optional
import logging

from .models import Job

logger = logging.getLogger(__name__)


class JobMatcher:
    """Job matching class"""

    def __init__(self, keywords: Iterable[str]):
        """
        Args:
            keywords: Keyword profile. Matching is case-insensitive substring
                matching with no word boundaries, so "ai" also matches "main".
        """
        self.keywords: List[str] = [kw.lower() for kw in keywords if kw and kw.strip()]

    @staticmethod
    def haystack(job: Job) -> str:
        """Lowercased title, company, location and description"""
        return f"{job.title} {job.company} {job.location} {job.description}".lower()

    def matched_keyword(self, job: Job) -> Optional[str]:
        """Return the first keyword found in the job text, if any"""
        text = self.haystack(job)
        for keyword in self.keywords:
            if keyword in text:
                return keyword
        return None

    def matches(self, job: Job) -> bool:
        return self.matched_keyword(job) is not None
