"""
Job Alert - Job listing monitoring and Telegram alerts
"""

__version__ = "1.0.0"

from .models import Job, FetchResult, NotifyResult
from .source import JSearchSource, normalize_job
from .matcher import JobMatcher
from .store import SeenStore, MemorySeenStore
from .notifier import TelegramNotifier
from .pipeline import JobPipeline
from .scheduler import JobScheduler

__all__ = [
    'Job',
    'FetchResult',
    'NotifyResult',
    'JSearchSource',
    'normalize_job',
    'JobMatcher',
    'SeenStore',
    'MemorySeenStore',
    'TelegramNotifier',
    'JobPipeline',
    'JobScheduler',
]
