"""
User journeys built on the API client.

upload:   gate → stage copy → upload → commit session → fetch jobs   (30s watchdog)
optimize: gate → resume text from session → optimize → reject empty results
download: gate → resume file from session → download optimized PDF

Each flow runs its steps strictly in order on a worker thread and hands back a
Future. Gate and validation failures come back as already-failed futures, so
callers have a single completion path.
"""
from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from gradhire.api_client import ApiClient
from gradhire.config import COUNTRIES, Settings
from gradhire.errors import (
    ApiError,
    EmptyResultError,
    FlowTimeoutError,
    ValidationError,
)
from gradhire.files import ResumeFile, discard_staged, stage_copy
from gradhire.log import get_logger
from gradhire.models import Job, ResumeOptimizationResponse
from gradhire.network import NetworkMonitor
from gradhire.session import ResumeSession

log = get_logger(__name__)

NO_JOBS_MESSAGE = "No jobs found for this resume"
EMPTY_AI_MESSAGE = "AI returned empty results"
TIMEOUT_MESSAGE = "Request timed out, please retry"


def _failed(exc: BaseException) -> Future:
    f: Future = Future()
    f.set_exception(exc)
    return f


class _Outcome:
    """Delivers a flow's result at most once; later deliveries are dropped."""

    def __init__(self) -> None:
        self.future: Future = Future()
        self._lock = threading.Lock()

    @contextmanager
    def pending(self) -> Iterator[bool]:
        """Hold the delivery lock; yields True while nothing has been delivered."""
        with self._lock:
            yield not self.future.done()

    def deliver(self, setter: Callable[[Any], None], value: Any) -> bool:
        with self._lock:
            if self.future.done():
                return False
            setter(value)
            return True

    def set_result(self, value: Any) -> bool:
        return self.deliver(self.future.set_result, value)

    def set_exception(self, exc: BaseException) -> bool:
        return self.deliver(self.future.set_exception, exc)


class ResumeFlows:
    def __init__(
        self,
        client: ApiClient,
        session: ResumeSession,
        monitor: NetworkMonitor,
        settings: Settings | None = None,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.client = client
        self.session = session
        self.monitor = monitor
        self.settings = settings or client.settings
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.settings.max_workers, thread_name_prefix="gradhire-flow"
        )

    def __enter__(self) -> ResumeFlows:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    # ── Upload ──────────────────────────────────────────────────────────

    def upload(self, picked: ResumeFile, country: str | None = None) -> Future:
        """Upload the picked resume and fetch matching jobs; Future[list[Job]]."""
        country = (country or self.settings.default_country).lower()
        if country not in COUNTRIES:
            return _failed(ValidationError(f"Unsupported country: {country}"))
        try:
            self.monitor.require_connection()
        except ApiError as exc:
            return _failed(exc)

        outcome = _Outcome()
        timer = threading.Timer(self.settings.watchdog_seconds, self._expire, args=(outcome,))
        timer.daemon = True
        outcome.future.add_done_callback(lambda _: timer.cancel())
        timer.start()
        self._executor.submit(self._run_upload, outcome, picked, country)
        return outcome.future

    def _expire(self, outcome: _Outcome) -> None:
        if outcome.set_exception(FlowTimeoutError(TIMEOUT_MESSAGE)):
            log.warning("Upload flow timed out after %.0fs", self.settings.watchdog_seconds)

    def _run_upload(self, outcome: _Outcome, picked: ResumeFile, country: str) -> None:
        work_dir = self.settings.work_dir
        local: ResumeFile | None = None
        committed = False
        try:
            local = stage_copy(picked, work_dir)
            text = self.client.upload_resume(local)
            with outcome.pending() as live:
                if live:
                    previous = self.session.resume_file
                    self.session.commit(local, text)
                    committed = True
            if not committed:
                log.info("Upload finished after the flow ended; result discarded")
                discard_staged(local, work_dir)
                return
            if previous is not None and previous.path != local.path:
                discard_staged(previous, work_dir)

            jobs = self.client.fetch_jobs_from_resume(local, country)
            if not jobs:
                raise EmptyResultError(NO_JOBS_MESSAGE)
            delivered = outcome.set_result(jobs)
        except Exception as exc:
            # staged copies that never reached the session are removed before delivery
            if not committed:
                discard_staged(local, work_dir)
            if isinstance(exc, ApiError):
                log.warning("Upload flow failed: %s", exc)
            else:
                log.exception("Upload flow crashed")
            delivered = outcome.set_exception(exc)
        if not delivered:
            log.info("Late upload flow result discarded")

    # ── Optimize ────────────────────────────────────────────────────────

    def optimize(self, job: Job) -> Future:
        """Future[ResumeOptimizationResponse] for the current resume against job."""
        try:
            self.monitor.require_connection()
        except ApiError as exc:
            return _failed(exc)
        resume_text = self.session.resume_text
        if not resume_text:
            return _failed(ValidationError("Resume not found"))
        return self._executor.submit(self._run_optimize, resume_text, job)

    def _run_optimize(self, resume_text: str, job: Job) -> ResumeOptimizationResponse:
        result = self.client.optimize_resume(resume_text, job.title, job.description)
        if result.is_empty:
            log.warning("Optimization for %s @ %s came back empty", job.title, job.company)
            raise EmptyResultError(EMPTY_AI_MESSAGE)
        log.info(
            "Optimization for %s @ %s: %d missing skills, %d bullets",
            job.title, job.company, len(result.missing_skills), len(result.improved_bullets),
        )
        return result

    # ── Download ────────────────────────────────────────────────────────

    def download(self, job: Job) -> Future:
        """Future[Path] of the optimized PDF tailored to job."""
        try:
            self.monitor.require_connection()
        except ApiError as exc:
            return _failed(exc)
        resume_file = self.session.resume_file
        if resume_file is None:
            return _failed(ValidationError("No resume uploaded"))
        if not job.description.strip():
            return _failed(ValidationError("Job description is empty"))
        return self._executor.submit(
            self.client.download_optimized_resume, resume_file, job.description
        )
