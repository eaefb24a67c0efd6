"""Saved-job bookmarks in a JSON key-value file with file locking."""
from __future__ import annotations

import fcntl
import json
import uuid
from pathlib import Path
from typing import Iterable

from gradhire.log import get_logger
from gradhire.models import Job

log = get_logger(__name__)

SAVED_JOBS_KEY = "saved_jobs"
STORE_NAME = "bookmarks.json"


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


def _parse_id(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


class BookmarkStore:
    def __init__(self, path: Path) -> None:
        self.path = path
        self._saved: set[str] = self._load()

    @classmethod
    def in_dir(cls, data_dir: Path) -> BookmarkStore:
        return cls(data_dir / STORE_NAME)

    @property
    def saved_ids(self) -> frozenset[str]:
        return frozenset(self._saved)

    def is_saved(self, job: Job) -> bool:
        return job.id in self._saved

    def toggle(self, job: Job) -> bool:
        """Flip the job's saved state, persist, and return the new state."""
        if job.id in self._saved:
            self._saved.remove(job.id)
        else:
            self._saved.add(job.id)
        self._persist()
        return job.id in self._saved

    def saved_jobs(self, jobs: Iterable[Job]) -> list[Job]:
        return [j for j in jobs if j.id in self._saved]

    def _read_store(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                _lock(f, exclusive=False)
                try:
                    data = json.load(f)
                finally:
                    _unlock(f)
        except (OSError, ValueError) as exc:
            log.warning("Bookmark store unreadable (%s); starting empty", exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _load(self) -> set[str]:
        raw = self._read_store().get(SAVED_JOBS_KEY)
        if not isinstance(raw, list):
            return set()
        ids = {parsed for parsed in map(_parse_id, raw) if parsed}
        if len(ids) != len(raw):
            log.debug("Dropped %d malformed bookmark id(s)", len(raw) - len(ids))
        return ids

    def _persist(self) -> None:
        store = self._read_store()
        store[SAVED_JOBS_KEY] = sorted(self._saved)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            _lock(f)
            json.dump(store, f, indent=2)
            _unlock(f)
        log.debug("Saved %d bookmark(s) → %s", len(self._saved), self.path.name)
