"""Shared fixtures: a scripted stand-in for requests.Session and sample data."""
import json
import os
import sys
from pathlib import Path

os.environ.setdefault("GRADHIRE_LOG_FILE", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest  # noqa: E402
import requests  # noqa: E402

from gradhire.api_client import ApiClient  # noqa: E402
from gradhire.config import Settings  # noqa: E402
from gradhire.endpoints import Endpoints  # noqa: E402
from gradhire.files import ResumeFile  # noqa: E402

BASE_URL = "https://api.test"

JOB_PAYLOAD = {
    "id": "3f2b8c1e-9d4a-4f6e-8b7a-1c2d3e4f5a6b",
    "title": "Backend Engineer",
    "company": "Acme",
    "location": "Bengaluru",
    "description": "Build Python\r\nservices on AWS with Docker.",
    "matchScore": 91,
    "applyURL": "https://acme.example/jobs/1",
}

OPTIMIZATION_PAYLOAD = {
    "missing_skills": ["Kubernetes"],
    "improved_bullets": ["Cut API latency by 35% by caching hot paths"],
    "ats_keywords": ["Python", "AWS"],
}


def make_response(status=200, body=b"", content_type="application/json"):
    """A real requests.Response with its body already loaded."""
    if not isinstance(body, bytes):
        body = json.dumps(body).encode("utf-8")
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    resp._content_consumed = True
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = content_type
    resp.url = BASE_URL
    return resp


class FakeHttp:
    """Replays queued responses (or raises queued exceptions) and records calls."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if not self.outcomes:
            raise AssertionError(f"unexpected POST {url}")
        outcome = self.outcomes.pop(0)
        if callable(outcome) and not isinstance(outcome, requests.Response):
            outcome = outcome(url, kwargs)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def settings(tmp_path):
    return Settings(
        base_url=BASE_URL,
        data_dir=tmp_path / "data",
        work_dir=tmp_path / "work",
        watchdog_seconds=5,
    )


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def client(settings, http):
    return ApiClient(Endpoints(settings.base_url), settings, http=http)


@pytest.fixture
def resume_pdf(tmp_path):
    path = tmp_path / "picked" / "my_resume.pdf"
    path.parent.mkdir()
    path.write_bytes(b"%PDF-1.4\n\x00\xff binary body\r\n--not-a-boundary\n%%EOF")
    return ResumeFile(path, filename="my_resume.pdf")
