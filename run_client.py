#!/usr/bin/env python3
"""
Interactive terminal front end for the resume client.

    python run_client.py

Walks through: resume → country → matched jobs → optimize / download / bookmark.
"""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from gradhire.api_client import ApiClient
from gradhire.bookmarks import BookmarkStore
from gradhire.config import COUNTRIES, ensure_dirs, load_settings
from gradhire.endpoints import Endpoints
from gradhire.errors import ApiError
from gradhire.files import ResumeFile
from gradhire.flows import ResumeFlows
from gradhire.log import get_logger
from gradhire.models import Job
from gradhire.network import NetworkMonitor, check_reachability
from gradhire.session import ResumeSession

log = get_logger(__name__)

# ── Helpers ──────────────────────────────────────────────────────────────


def _ask(prompt: str, default: str = "") -> str:
    hint = f" [{default}]" if default else ""
    val = input(f"  {prompt}{hint}: ").strip()
    return val or default


def _banner() -> None:
    print()
    print("╔════════════════════════════════════════════╗")
    print("║   GradHire: AI job matching for new grads  ║")
    print("╚════════════════════════════════════════════╝")
    print()


def _print_jobs(jobs: list[Job], bookmarks: BookmarkStore) -> None:
    print()
    for i, job in enumerate(jobs, 1):
        badge = "  TOP MATCH" if job.is_top_match else ""
        saved = " ★" if bookmarks.is_saved(job) else ""
        print(f"  {i:>2}. [{job.match_score:>3}%] {job.title} @ {job.company}{badge}{saved}")
        print(f"      {job.location}")
        if job.skills:
            print(f"      {', '.join(job.skills)}")
    print()


def _print_job(job: Job) -> None:
    print(f"\n  {job.title} @ {job.company} ({job.location})")
    print(f"  AI Match Score {job.match_score}%")
    print(f"\n  {job.short_description()}\n")
    link = job.apply_link
    if link:
        print(f"  Apply / View Posting: {link}")


def _print_optimization(result) -> None:
    for title, items in (
        ("Missing skills", result.missing_skills),
        ("Improved bullets", result.improved_bullets),
        ("ATS keywords", result.ats_keywords),
    ):
        if items:
            print(f"\n  {title}:")
            for item in items:
                print(f"    • {item}")
    print()


def _await(future, label: str):
    print(f"  {label}...")
    try:
        return future.result()
    except ApiError as exc:
        print(f"  ✗ {exc}")
        return None


# ── Screens ──────────────────────────────────────────────────────────────


def job_menu(flows: ResumeFlows, bookmarks: BookmarkStore, job: Job) -> None:
    while True:
        _print_job(job)
        choice = _ask("[o]ptimize, [d]ownload optimized PDF, [s]ave/unsave, [b]ack", "b").lower()
        if choice.startswith("o"):
            result = _await(flows.optimize(job), "Analyzing with AI")
            if result is not None:
                _print_optimization(result)
        elif choice.startswith("d"):
            path = _await(flows.download(job), "Downloading optimized resume")
            if path is not None:
                print(f"  ✓ Saved to {path}")
        elif choice.startswith("s"):
            saved = bookmarks.toggle(job)
            print("  ★ Saved" if saved else "  ☆ Removed from saved")
        else:
            return


def main() -> int:
    settings = load_settings()
    ensure_dirs(settings)
    endpoints = Endpoints(settings.base_url)
    monitor = NetworkMonitor()
    monitor.path_update_handler(check_reachability(settings.base_url))
    log.info("Backend %s (%s)", settings.base_url, "online" if monitor.is_connected else "offline")
    bookmarks = BookmarkStore.in_dir(settings.data_dir)

    _banner()
    with ResumeFlows(ApiClient(endpoints, settings), ResumeSession(), monitor, settings) as flows:
        jobs: list[Job] = []
        while not jobs:
            path_str = _ask("Resume PDF path").strip("'\"")
            if not path_str:
                return 1
            src = Path(path_str).expanduser().resolve()
            if not src.is_file():
                print(f"  ✗ File not found: {src}")
                continue
            options = ", ".join(f"{code} = {label}" for code, label in COUNTRIES.items())
            country = _ask(f"Country ({options})", settings.default_country).lower()
            jobs = _await(flows.upload(ResumeFile(src, filename=src.name), country),
                          "Analyzing resume") or []

        while True:
            _print_jobs(jobs, bookmarks)
            pick = _ask("Job number (blank to quit, 's' for saved jobs)")
            if not pick:
                return 0
            if pick.lower() == "s":
                saved = bookmarks.saved_jobs(jobs)
                if not saved:
                    print("  No saved jobs yet.")
                else:
                    _print_jobs(saved, bookmarks)
                continue
            if not pick.isdigit() or not 1 <= int(pick) <= len(jobs):
                print("  ✗ Pick a number from the list")
                continue
            job_menu(flows, bookmarks, jobs[int(pick) - 1])


if __name__ == "__main__":
    try:
        sys.exit(main())
    except (KeyboardInterrupt, EOFError):
        print()
        sys.exit(130)
