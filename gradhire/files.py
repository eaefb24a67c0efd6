"""Local file references with scoped access.

Files the user picks may sit behind a sandbox that grants access only between
`start_access()` and `stop_access()`. Every read of such a file goes through
`scoped_access`, which releases on every exit path.
"""
from __future__ import annotations

import shutil
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from gradhire.errors import EncodingError, ValidationError
from gradhire.log import get_logger

log = get_logger(__name__)

STAGED_PREFIX = "uploaded_resume-"


@dataclass(frozen=True)
class ResumeFile:
    path: Path
    filename: str = "resume.pdf"

    def start_access(self) -> bool:
        """Acquire access to the file; plain local paths are always granted."""
        return True

    def stop_access(self) -> None:
        pass


@contextmanager
def scoped_access(ref: ResumeFile) -> Iterator[bool]:
    granted = ref.start_access()
    try:
        yield granted
    finally:
        if granted:
            ref.stop_access()


def read_bytes(ref: ResumeFile) -> bytes:
    with scoped_access(ref):
        try:
            return Path(ref.path).read_bytes()
        except OSError as exc:
            log.debug("Cannot read %s: %s", ref.path, exc)
            raise EncodingError("Failed to read file") from exc


def stage_copy(ref: ResumeFile, work_dir: Path) -> ResumeFile:
    """Copy a picked file into work_dir under a name unique to this attempt."""
    with scoped_access(ref) as granted:
        if not granted:
            raise ValidationError("Permission denied")
        work_dir.mkdir(parents=True, exist_ok=True)
        dest = work_dir / f"{STAGED_PREFIX}{uuid.uuid4().hex}.pdf"
        try:
            shutil.copyfile(ref.path, dest)
        except OSError as exc:
            log.debug("Staging %s failed: %s", ref.path, exc)
            dest.unlink(missing_ok=True)
            raise EncodingError("Failed to read file") from exc
    log.debug("Staged %s -> %s", ref.path, dest)
    return ResumeFile(path=dest, filename=ref.filename)


def is_staged(ref: ResumeFile | None, work_dir: Path) -> bool:
    if ref is None:
        return False
    path = Path(ref.path)
    return path.parent.resolve() == work_dir.resolve() and path.name.startswith(STAGED_PREFIX)


def discard_staged(ref: ResumeFile | None, work_dir: Path) -> None:
    """Delete a staged copy; files outside work_dir are never touched."""
    if not is_staged(ref, work_dir):
        return
    try:
        Path(ref.path).unlink(missing_ok=True)
    except OSError as exc:
        log.warning("Could not remove staged resume %s: %s", ref.path, exc)
