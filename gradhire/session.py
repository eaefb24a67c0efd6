"""The currently uploaded resume, shared by every flow."""
from __future__ import annotations

import threading
from dataclasses import dataclass

from gradhire.files import ResumeFile


@dataclass(frozen=True)
class ResumeSnapshot:
    resume_file: ResumeFile | None = None
    resume_text: str | None = None


class ResumeSession:
    """Holds the file and extracted text of the latest successful upload.

    Both fields change together in `commit`; readers always get the pair as
    last committed, never a half-updated one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = ResumeSnapshot()

    def commit(self, resume_file: ResumeFile, resume_text: str) -> None:
        with self._lock:
            self._current = ResumeSnapshot(resume_file, resume_text)

    def clear(self) -> None:
        with self._lock:
            self._current = ResumeSnapshot()

    def snapshot(self) -> ResumeSnapshot:
        with self._lock:
            return self._current

    @property
    def resume_file(self) -> ResumeFile | None:
        return self.snapshot().resume_file

    @property
    def resume_text(self) -> str | None:
        return self.snapshot().resume_text
