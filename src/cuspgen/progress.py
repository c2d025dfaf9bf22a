# src/cuspgen/progress.py
from __future__ import annotations

import sys
import time


class DilationProgress:
    """Single-line spinner on STDERR: current Δ against the ceiling, cusps so far."""

    THROTTLE = 0.05
    SPIN = "|/-\\"

    def __init__(self, max_dilation: int, *, enabled: bool = True):
        self.max_dilation = max(1, int(max_dilation))
        self.enabled = enabled
        self.start = time.perf_counter()
        self.last_draw = 0.0
        self.i = 0

    def update(self, dilation: int, found: int, *, force: bool = False) -> None:
        if not self.enabled:
            return
        now = time.perf_counter()
        if not force and now - self.last_draw < self.THROTTLE:
            return
        self.last_draw = now
        self.i = (self.i + 1) % len(self.SPIN)
        frac = min(max(dilation / self.max_dilation, 0.0), 1.0)
        fill = int(frac * 24)
        bar = "#" * fill + "-" * (24 - fill)
        sys.stderr.write(
            f"\r[{self.SPIN[self.i]}] [{bar}] Δ {dilation}/{self.max_dilation}"
            f"  cusps {found}  {now - self.start:6.1f} s"
        )
        sys.stderr.flush()

    def done(self) -> None:
        if not self.enabled:
            return
        sys.stderr.write("\r" + " " * 80 + "\r")
        sys.stderr.flush()
