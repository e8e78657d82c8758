"""
Seen-job store
Durable set of job ids that have already been notified.
"""

import json
import os
import tempfile
import threading
from typing import Iterable, Set
import logging

logger = logging.getLogger(__name__)


class MemorySeenStore:
    """In-memory seen-job store. Nothing survives a restart."""

    def __init__(self, ids: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._seen: Set[str] = set(ids)

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)

    def contains(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._seen

    def mark_seen(self, job_id: str):
        with self._lock:
            self._seen.add(job_id)

    def snapshot(self) -> Set[str]:
        with self._lock:
            return set(self._seen)

    def load(self) -> int:
        return len(self)

    def flush(self) -> bool:
        return True


class SeenStore(MemorySeenStore):
    """Seen-job store persisted as a JSON array of ids"""

    def __init__(self, path: str):
        """
        Args:
            path: Location of the JSON file
        """
        super().__init__()
        self.path = path

    def load(self) -> int:
        """Load previously seen ids. Any read or parse failure resets to empty."""
        seen: Set[str] = set()
        if os.path.exists(self.path):
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, list):
                    seen = {str(item) for item in data if item is not None}
                else:
                    logger.error(f"Seen file {self.path} is not a JSON array, starting empty")
            except (OSError, ValueError, RecursionError) as e:
                logger.error(f"Error loading seen jobs from {self.path}: {e}")

        with self._lock:
            self._seen = seen
        logger.info(f"Loaded {len(seen)} seen job(s)")
        return len(seen)

    def flush(self) -> bool:
        """Write the full set to disk via a temp file and an atomic rename"""
        ids = sorted(self.snapshot())
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.seen-', suffix='.tmp', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(ids, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            return True
        except OSError as e:
            logger.error(f"Error saving seen jobs to {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            return False
