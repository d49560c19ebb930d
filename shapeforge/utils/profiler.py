# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ShapeForge Profiling Support

Optional cProfile instrumentation of an interpretation run, switched on
from the command line::

    shapeforge --profile script.fmt input.txt
    shapeforge --profile --profile-output=run.prof script.fmt input.txt

In code::

    profiler = initialize_profiler("cprofile", "run.prof", enabled=True)
    with profiler.profile_context():
        interpret(script, data)
"""

from __future__ import annotations

import cProfile
import io
import logging
import pstats
import sys
import time
from abc import ABC, abstractmethod
from collections.abc import Generator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

# functions of interest when summarising a run
HOTSPOT_PATTERN = "process_block|expression|control_flow|shape_ops|tokenizer"


class ProfilerBackend(ABC):
    """Abstract base class for profiler backends"""

    def __init__(self, output_path: str | None = None) -> None:
        self.output_path = output_path
        self.enabled = True

    @abstractmethod
    def start_profiling(self) -> None:
        """Start profiling session"""

    @abstractmethod
    def stop_profiling(self) -> None:
        """Stop profiling session"""

    @abstractmethod
    def generate_report(self) -> str:
        """Generate human-readable report"""

    @abstractmethod
    def save_results(self) -> None:
        """Save profiling results to file"""


class CProfileBackend(ProfilerBackend):
    """cProfile-based profiling backend"""

    def __init__(self, output_path: str | None = None) -> None:
        super().__init__(output_path)
        self.profiler = cProfile.Profile()
        self.stats: pstats.Stats | None = None

    def start_profiling(self) -> None:
        self.profiler.enable()

    def stop_profiling(self) -> None:
        self.profiler.disable()
        self.stats = pstats.Stats(self.profiler)

    def generate_report(self, limit: int = 30) -> str:
        if not self.stats:
            return "No profiling data available"
        s = io.StringIO()
        pstats.Stats(self.profiler, stream=s).sort_stats("cumulative").print_stats(limit)
        return s.getvalue()

    def save_results(self) -> None:
        """Write the binary stats file plus a readable report beside it."""
        if not self.stats or not self.output_path:
            return
        self.stats.dump_stats(self.output_path)

        report_path = self.output_path.rsplit(".", 1)[0] + "_report.txt"
        with open(report_path, "w") as f:
            f.write("ShapeForge Performance Profiling Report\n")
            f.write("=" * 50 + "\n\n")
            report = pstats.Stats(self.profiler, stream=f)
            f.write("Top 30 functions by cumulative time:\n")
            report.sort_stats("cumulative").print_stats(30)
            f.write("\n\nInterpreter functions:\n")
            report.print_stats(HOTSPOT_PATTERN)


class NoOpBackend(ProfilerBackend):
    """Backend used when profiling is disabled"""

    def __init__(self, output_path: str | None = None) -> None:
        super().__init__(output_path)
        self.enabled = False

    def start_profiling(self) -> None:
        pass

    def stop_profiling(self) -> None:
        pass

    def generate_report(self) -> str:
        return "Profiling disabled"

    def save_results(self) -> None:
        pass


class ShapeForgeProfiler:
    """Selects a backend and wraps a profiled section of code."""

    BACKEND_TYPES = {
        "cprofile": CProfileBackend,
        "none": NoOpBackend,
    }

    def __init__(self,
                 backend_type: str = "none",
                 output_path: str | None = None,
                 enabled: bool = False) -> None:
        self.backend_type = backend_type
        self.output_path = output_path
        self.enabled = enabled
        if enabled:
            backend_class = self.BACKEND_TYPES.get(backend_type, NoOpBackend)
        else:
            backend_class = NoOpBackend
        self.backend = backend_class(output_path)

    @contextmanager
    def profile_context(self) -> Generator[ShapeForgeProfiler, None, None]:
        try:
            self.start()
            yield self
        finally:
            self.stop()

    def start(self) -> None:
        if self.enabled:
            logger.debug("Starting %s profiling", self.backend_type)
            self.backend.start_profiling()

    def stop(self) -> None:
        if self.enabled:
            self.backend.stop_profiling()
            logger.debug("Profiling stopped")

    def generate_report(self) -> str:
        return self.backend.generate_report()

    def save_results(self) -> None:
        if self.enabled:
            self.backend.save_results()
            if self.output_path:
                print(f"Profiling results saved to: {self.output_path}", file=sys.stderr)


def initialize_profiler(backend_type: str = "none",
                        output_path: str | None = None,
                        enabled: bool = False) -> ShapeForgeProfiler:
    """Create a profiler for one run (disabled unless asked for)"""
    return ShapeForgeProfiler(backend_type, output_path, enabled)


def generate_default_output_path(backend_type: str) -> str:
    timestamp = time.strftime("%Y%m%d_%H%M%S")
    ext = "prof" if backend_type == "cprofile" else "out"
    return f"shapeforge_profile_{timestamp}.{ext}"
