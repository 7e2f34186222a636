"""Running hit/miss counters for a scan."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

from caduceus.models import Result


class Stats:
    """Thread-safe tally of probe outcomes."""

    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0
        self.total = 0
        self._lock = threading.Lock()

    def hit_percentage(self) -> float:
        """Percentage of probes that returned a certificate, 0 when nothing was probed."""
        if self.total == 0:
            return 0.0
        return self.hits / self.total * 100

    def update(self, result: Result) -> None:
        """Count one result."""
        with self._lock:
            self.total += 1
            if result.hit:
                self.hits += 1
            else:
                self.misses += 1

    def display(self, stream: TextIO | None = None) -> None:
        """Overwrite the current terminal line with the counters."""
        out = sys.stdout if stream is None else stream
        out.write(
            f"\r\033[KHits: {self.hits}, Misses: {self.misses}, "
            f"Total: {self.total}, Hit Rate: {self.hit_percentage():.2f}%"
        )
        out.flush()