# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from shapeforge.core.interpreter import interpret
from shapeforge.utils.profiler import (
    CProfileBackend,
    NoOpBackend,
    ProfilerBackend,
    generate_default_output_path,
    initialize_profiler,
)


def test_backend_interface_is_abstract():
    with pytest.raises(TypeError):
        ProfilerBackend()


def test_backend_must_implement_every_method():
    class Partial(ProfilerBackend):
        def start_profiling(self):
            pass

    with pytest.raises(TypeError):
        Partial()


def test_disabled_profiler_uses_noop_backend():
    profiler = initialize_profiler("cprofile", "run.prof", enabled=False)
    assert isinstance(profiler.backend, NoOpBackend)
    with profiler.profile_context():
        interpret("Point 0 0", "")
    assert profiler.generate_report() == "Profiling disabled"


def test_each_call_returns_a_fresh_profiler():
    assert initialize_profiler() is not initialize_profiler()


def test_cprofile_report(tmp_path):
    out = tmp_path / "run.prof"
    profiler = initialize_profiler("cprofile", str(out), enabled=True)
    assert isinstance(profiler.backend, CProfileBackend)
    with profiler.profile_context():
        interpret("rep i 5:\n  Point i i", "")
    assert "function calls" in profiler.generate_report()
    profiler.save_results()
    assert out.exists()
    assert "Interpreter functions" in (tmp_path / "run_report.txt").read_text()


def test_default_output_path():
    assert generate_default_output_path("cprofile").endswith(".prof")
