"""HTTP client for the resume/jobs backend.

One method per backend operation. Each builds its request, sends it with the
operation's timeout and funnels the response through the same
classification: transport failure, non-2xx status, missing body, bad shape.
"""
from __future__ import annotations

import contextlib
from pathlib import Path
from typing import Any

import requests

from gradhire.config import Settings
from gradhire.endpoints import Endpoints
from gradhire.errors import (
    DecodeError,
    EmptyResponseError,
    EncodingError,
    MalformedResponseError,
    NetworkError,
    ServerError,
    ValidationError,
)
from gradhire.files import ResumeFile
from gradhire.log import get_logger
from gradhire.models import Job, ResumeOptimizationResponse
from gradhire.multipart import content_type_header, encode, field_part, file_part

log = get_logger(__name__)

DOWNLOAD_NAME = "optimized_resume.pdf"
_CHUNK_SIZE = 64 * 1024
_PREVIEW_LEN = 500


def _default_headers() -> dict[str, str]:
    return {"User-Agent": "gradhire-client/0.1", "Accept": "application/json"}


def _detail_message(resp: requests.Response) -> str | None:
    """The backend's `detail` string from an error body, if there is one."""
    try:
        payload = resp.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    return None


class ApiClient:
    def __init__(
        self,
        endpoints: Endpoints,
        settings: Settings | None = None,
        http: requests.Session | None = None,
    ) -> None:
        self.endpoints = endpoints
        self.settings = settings or Settings(base_url=endpoints.base_url)
        self.http = http or requests.Session()

    # ── Transport and classification ────────────────────────────────────

    def _post(
        self,
        url: str,
        *,
        timeout: float,
        default_message: str | None = None,
        headers: dict[str, str] | None = None,
        stream: bool = False,
        **kwargs: Any,
    ) -> requests.Response:
        merged = _default_headers()
        merged.update(headers or {})
        try:
            resp = self.http.post(url, headers=merged, timeout=timeout, stream=stream, **kwargs)
        except requests.Timeout as exc:
            log.warning("POST %s timed out after %.0fs", url, timeout)
            raise NetworkError("The request timed out", cause=exc) from exc
        except requests.RequestException as exc:
            log.warning("POST %s failed: %s", url, exc)
            raise NetworkError("Could not reach the server", cause=exc) from exc

        status = resp.status_code
        if not 200 <= status <= 299:
            message = _detail_message(resp) or default_message or f"Server error {status}"
            log.warning("POST %s -> %d (%s)", url, status, message)
            resp.close()
            raise ServerError(status, message)
        log.debug("POST %s -> %d", url, status)
        return resp

    def _json_body(self, resp: requests.Response, failure_message: str) -> Any:
        if not resp.content:
            raise EmptyResponseError("No response from server")
        try:
            return resp.json()
        except ValueError as exc:
            log.debug(
                "Decode error: %s; raw response: %s",
                exc,
                resp.content[:_PREVIEW_LEN].decode("utf-8", errors="replace"),
            )
            raise DecodeError(failure_message) from exc

    def _post_multipart(self, url: str, parts: list, **kwargs: Any) -> requests.Response:
        body, boundary = encode(parts)
        return self._post(
            url,
            data=body,
            headers={"Content-Type": content_type_header(boundary)},
            **kwargs,
        )

    # ── Operations ──────────────────────────────────────────────────────

    def upload_resume(self, resume: ResumeFile) -> str:
        """Upload a PDF and return the text the server extracted from it."""
        resp = self._post_multipart(
            self.endpoints.upload_resume,
            [file_part("file", resume)],
            timeout=self.settings.upload_timeout,
            default_message="Upload failed",
        )
        payload = self._json_body(resp, "Invalid server response")
        text = payload.get("text") if isinstance(payload, dict) else None
        if not isinstance(text, str):
            log.debug("Upload response has no 'text' string: %r", payload)
            raise MalformedResponseError("Invalid server response")
        log.info("Resume uploaded, %d characters extracted", len(text))
        return text

    def fetch_jobs_from_resume(self, resume: ResumeFile, country: str) -> list[Job]:
        resp = self._post_multipart(
            self.endpoints.jobs_from_resume(country),
            [file_part("file", resume)],
            timeout=self.settings.jobs_timeout,
            default_message="Upload failed",
        )
        payload = self._json_body(resp, "Could not read job listings")
        if not isinstance(payload, list):
            log.debug("Jobs response is not a list: %r", payload)
            raise DecodeError("Could not read job listings")
        try:
            jobs = [Job.from_dict(item) for item in payload]
        except DecodeError as exc:
            log.debug("Bad job entry: %s", exc)
            raise DecodeError("Could not read job listings") from exc
        log.info("Fetched %d jobs for country=%s", len(jobs), country)
        return jobs

    def optimize_resume(
        self, resume_text: str, job_title: str, job_description: str
    ) -> ResumeOptimizationResponse:
        resp = self._post(
            self.endpoints.optimize_resume,
            json={
                "resume_text": resume_text,
                "job_title": job_title,
                "job_description": job_description,
            },
            timeout=self.settings.optimize_timeout,
        )
        failure = "Optimization failed, please try again."
        payload = self._json_body(resp, failure)
        try:
            return ResumeOptimizationResponse.from_dict(payload)
        except DecodeError as exc:
            log.debug("Bad optimization payload (%s): %r", exc, payload)
            raise DecodeError(failure) from exc

    def download_optimized_resume(self, resume: ResumeFile, job_description: str) -> Path:
        """Fetch the optimized PDF and save it to the fixed download path."""
        if not job_description.strip():
            raise ValidationError("Job description is empty")

        resp = self._post_multipart(
            self.endpoints.download_resume,
            [file_part("file", resume), field_part("job_description", job_description)],
            timeout=self.settings.download_timeout,
            stream=True,
        )
        dest = self.settings.work_dir / DOWNLOAD_NAME
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.unlink(missing_ok=True)
            written = 0
            with open(dest, "wb") as f:
                for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
        except requests.RequestException as exc:
            dest.unlink(missing_ok=True)
            raise NetworkError("Download interrupted", cause=exc) from exc
        except OSError as exc:
            log.error("Cannot write %s: %s", dest, exc)
            with contextlib.suppress(OSError):
                dest.unlink(missing_ok=True)
            raise EncodingError("Could not save the downloaded file") from exc
        finally:
            resp.close()

        if written == 0:
            dest.unlink(missing_ok=True)
            raise EmptyResponseError("No file received")
        log.info("Optimized resume saved → %s (%d bytes)", dest, written)
        return dest
