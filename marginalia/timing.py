"""
Name: Scan Timing

Responsibilities:
  - Time fingerprint scans and relocation batches for logs and metrics

Collaborators:
  - application/use_cases/relocate_comments.py: one ScanTimer per anchor,
    one per batch

Notes:
  - stop() returns the elapsed seconds so callers can feed metrics directly
"""

import time
from typing import Optional


class ScanTimer:
    """R: perf_counter stopwatch for a single scan or batch."""

    def __init__(self) -> None:
        self.started_at: Optional[float] = None
        self.stopped_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self.started_at is not None and self.stopped_at is None

    def start(self) -> "ScanTimer":
        self.started_at = time.perf_counter()
        self.stopped_at = None
        return self

    def stop(self) -> float:
        if self.started_at is None:
            raise RuntimeError("ScanTimer was not started")
        self.stopped_at = time.perf_counter()
        return self.elapsed_seconds

    @property
    def elapsed_seconds(self) -> float:
        if self.started_at is None:
            return 0.0
        until = time.perf_counter() if self.stopped_at is None else self.stopped_at
        return until - self.started_at

    @property
    def elapsed_ms(self) -> float:
        return round(self.elapsed_seconds * 1000, 2)

    def __enter__(self) -> "ScanTimer":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()
