"""Data models for job listings and resume optimizations."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from gradhire.errors import DecodeError

TOP_MATCH_SCORE = 85
SHORT_DESCRIPTION_LIMIT = 350
MAX_SKILLS = 8

# Keywords highlighted on a job card when they appear in the description.
TECH_KEYWORDS: tuple[str, ...] = (
    "AWS", "Azure", "Backend", "Cloud", "CSS", "Django",
    "Docker", "Frontend", "Git", "GraphQL", "HTML",
    "Java", "JavaScript", "Kotlin", "Kubernetes",
    "MongoDB", "Node.js", "Python", "React",
    "REST", "SQL", "Swift", "TypeScript", "React.js", "Next.js",
)


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise DecodeError(f"Job field {key!r} missing or not a string")
    return value


def _require_str_list(data: dict, key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DecodeError(f"Field {key!r} missing or not a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class Job:
    id: str
    title: str
    company: str
    location: str
    description: str
    match_score: int
    apply_url: str

    @classmethod
    def from_dict(cls, data: Any) -> Job:
        if not isinstance(data, dict):
            raise DecodeError("Job entry is not an object")
        raw_id = _require_str(data, "id")
        try:
            job_id = str(uuid.UUID(raw_id))
        except ValueError:
            raise DecodeError(f"Job id {raw_id!r} is not a UUID") from None
        score = data.get("matchScore")
        if isinstance(score, bool) or not isinstance(score, int):
            raise DecodeError("Job field 'matchScore' missing or not an integer")
        if not 0 <= score <= 100:
            raise DecodeError(f"Job matchScore {score} outside 0-100")
        return cls(
            id=job_id,
            title=_require_str(data, "title"),
            company=_require_str(data, "company"),
            location=_require_str(data, "location"),
            description=_require_str(data, "description"),
            match_score=score,
            apply_url=_require_str(data, "applyURL"),
        )

    @property
    def cleaned_description(self) -> str:
        return self.description.replace("\r", " ").replace("\n", " ").strip()

    def short_description(self, limit: int = SHORT_DESCRIPTION_LIMIT) -> str:
        text = self.cleaned_description
        if len(text) <= limit:
            return text
        return text[:limit] + "..."

    @property
    def skills(self) -> list[str]:
        """Known tech keywords mentioned in the description, sorted, at most 8."""
        lower = self.description.lower()
        found = sorted(k for k in TECH_KEYWORDS if k.lower() in lower)
        return found[:MAX_SKILLS]

    @property
    def is_top_match(self) -> bool:
        return self.match_score >= TOP_MATCH_SCORE

    @property
    def apply_link(self) -> str | None:
        """The apply URL if it is usable as a link, otherwise None."""
        url = self.apply_url.strip()
        if not url:
            return None
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return None
        return url


@dataclass(frozen=True)
class ResumeOptimizationResponse:
    missing_skills: tuple[str, ...]
    improved_bullets: tuple[str, ...]
    ats_keywords: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Any) -> ResumeOptimizationResponse:
        if not isinstance(data, dict):
            raise DecodeError("Optimization payload is not an object")
        return cls(
            missing_skills=_require_str_list(data, "missing_skills"),
            improved_bullets=_require_str_list(data, "improved_bullets"),
            ats_keywords=_require_str_list(data, "ats_keywords"),
        )

    @property
    def is_empty(self) -> bool:
        # ats_keywords alone is not a usable result
        return not self.missing_skills and not self.improved_bullets
