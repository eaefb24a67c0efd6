"""Backend endpoint registry."""
from __future__ import annotations

from urllib.parse import urlencode


class Endpoints:
    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    @property
    def upload_resume(self) -> str:
        return f"{self.base_url}/resume/upload"

    @property
    def optimize_resume(self) -> str:
        return f"{self.base_url}/resume/optimize"

    @property
    def download_resume(self) -> str:
        return f"{self.base_url}/resume/download"

    @property
    def jobs_match(self) -> str:
        return f"{self.base_url}/jobs/match"

    def jobs_from_resume(self, country: str) -> str:
        return f"{self.base_url}/jobs/from-resume?{urlencode({'country': country})}"
