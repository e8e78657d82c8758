"""
Data models
Canonical job record and per-stage result types.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Job:
    """Normalized job posting"""
    id: Optional[str]
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    link: str = ""


@dataclass
class FetchResult:
    """Outcome of one listing fetch. An empty result is never an exception."""
    records: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class NotifyResult:
    """Outcome of one notification delivery"""
    ok: bool
    reason: Optional[str] = None
