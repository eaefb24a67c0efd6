"""Connectivity state fed by a platform path observer."""
from __future__ import annotations

import socket
import threading
from urllib.parse import urlparse

from gradhire.errors import NetworkError
from gradhire.log import get_logger

log = get_logger(__name__)

OFFLINE_MESSAGE = "No internet connection"


class NetworkMonitor:
    def __init__(self, is_connected: bool = True) -> None:
        self._lock = threading.Lock()
        self._connected = is_connected

    @property
    def is_connected(self) -> bool:
        with self._lock:
            return self._connected

    def path_update_handler(self, satisfied: bool) -> None:
        """Observer callback: record the latest reachability status."""
        with self._lock:
            changed = self._connected != satisfied
            self._connected = satisfied
        if changed:
            log.info("Network %s", "online" if satisfied else "offline")

    def require_connection(self) -> None:
        if not self.is_connected:
            raise NetworkError(OFFLINE_MESSAGE)


def check_reachability(url: str, timeout: float = 3.0) -> bool:
    """One TCP connect to the URL's host; True if it succeeds."""
    parsed = urlparse(url)
    host = parsed.hostname
    if not host:
        return False
    port = parsed.port or (443 if parsed.scheme == "https" else 80)
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as exc:
        log.debug("Reachability check to %s:%d failed: %s", host, port, exc)
        return False
