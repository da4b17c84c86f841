"""Per-address token-bucket rate limiting with background garbage collection."""

from __future__ import annotations

import ipaddress
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

PACKETS_PER_SECOND = 20
PACKETS_BURSTABLE = 5
GARBAGE_COLLECT_NANOS = 1_000_000_000
PACKET_COST = 1_000_000_000 // PACKETS_PER_SECOND
MAX_TOKENS = PACKET_COST * PACKETS_BURSTABLE

_GC_INTERVAL_SECONDS = 1.0


@dataclass
class _Entry:
    last_time: int
    tokens: int


class Ratelimiter:
    """Allows a short burst of packets per source address, then a steady rate.

    ``time_now`` returns the current time in nanoseconds.
    """

    def __init__(self, time_now: Callable[[], int] | None = None) -> None:
        self._time_now = time_now or time.monotonic_ns
        self._lock = threading.Lock()
        self._table: dict[ipaddress.IPv4Address | ipaddress.IPv6Address, _Entry] = {}
        self._stop: threading.Event | None = None
        self._wake: threading.Event | None = None

    def init(self) -> None:
        """Clear the table and (re)start the garbage collection thread."""
        with self._lock:
            self._signal_stop()
            stop = threading.Event()
            wake = threading.Event()
            self._stop, self._wake = stop, wake
            self._table = {}
        threading.Thread(
            target=self._collect_garbage, args=(stop, wake), daemon=True
        ).start()

    def close(self) -> None:
        """Stop the garbage collection thread."""
        with self._lock:
            self._signal_stop()

    def _signal_stop(self) -> None:
        if self._stop is not None and self._wake is not None:
            self._stop.set()
            self._wake.set()

    def _collect_garbage(self, stop: threading.Event, wake: threading.Event) -> None:
        while True:
            wake.wait()
            if stop.is_set():
                return
            wake.clear()
            while True:
                if stop.wait(_GC_INTERVAL_SECONDS):
                    return
                wake.clear()
                if self.cleanup():
                    break

    def cleanup(self) -> bool:
        """Drop entries idle for longer than a second; report whether the table is empty."""
        with self._lock:
            now = self._time_now()
            stale = [
                addr
                for addr, entry in self._table.items()
                if now - entry.last_time > GARBAGE_COLLECT_NANOS
            ]
            for addr in stale:
                del self._table[addr]
            return not self._table

    def allow(self, ip) -> bool:
        """Charge one packet to ``ip`` and report whether it may pass."""
        addr = ipaddress.ip_address(ip)
        with self._lock:
            now = self._time_now()
            entry = self._table.get(addr)
            if entry is None:
                self._table[addr] = _Entry(now, MAX_TOKENS - PACKET_COST)
                if len(self._table) == 1 and self._wake is not None:
                    self._wake.set()
                return True

            entry.tokens = min(entry.tokens + now - entry.last_time, MAX_TOKENS)
            entry.last_time = now
            if entry.tokens > PACKET_COST:
                entry.tokens -= PACKET_COST
                return True
            return False