# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cooperative wall-clock deadline for one interpretation run.

The interpreter calls ``check()`` before each statement and before each
loop iteration; expression evaluation is never interrupted.
"""

import math
import time

from . import error as sf_error
from .types.constants import DEFAULT_EXECUTION_TIMEOUT


class TimeoutGuard:

    def __init__(self, timeout_ms: float = DEFAULT_EXECUTION_TIMEOUT, clock=time.monotonic) -> None:
        if not math.isfinite(timeout_ms) or timeout_ms <= 0:
            raise ValueError(f"timeout must be a positive finite number of milliseconds, got {timeout_ms!r}")
        self.timeout_ms = timeout_ms
        self.clock = clock
        self.start = clock()
        self.deadline = self.start + timeout_ms / 1000.0
        self.checks = 0

    def elapsed_ms(self) -> float:
        return (self.clock() - self.start) * 1000.0

    def expired(self) -> bool:
        return self.clock() > self.deadline

    def check(self) -> None:
        """Raise ExecutionTimedOut once the budget has been used up."""
        self.checks += 1
        if self.expired():
            raise sf_error.ExecutionTimedOut(self.timeout_ms)
