"""Logging setup shared by every gradhire module."""
from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(threadName)s  %(name)s  %(message)s"
_DATE_FMT = "%H:%M:%S"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Named logger; the first call installs the console and file handlers."""
    if not _configured:
        configure()
    return logging.getLogger(name)


def configure(level: str | None = None, log_dir: Path | None = None) -> None:
    """Set the root level and, unless GRADHIRE_LOG_FILE=0, a daily debug file."""
    global _configured
    _configured = True

    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    if root.handlers:
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(root.level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if os.environ.get("GRADHIRE_LOG_FILE", "1").lower() in ("0", "false", "no"):
        return
    target = log_dir or LOG_DIR
    try:
        target.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(target / f"client_{date.today():%Y-%m-%d}.log", encoding="utf-8")
    except OSError:
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)
    root.addHandler(fh)
