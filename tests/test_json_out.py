# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import math

from shapeforge.core import types as sf
from shapeforge.core.interpreter import interpret
from shapeforge.devices.json_out import json_out

SCRIPT = (
    "Point 0 0\n"
    "Line 0 0 1 1\n"
    "Seg -5 -5 5 5 #000000 diag\n"
    "Circle 2 2 3\n"
    "Poly 0 0 4 0 4 4\n"
    'Text 1 1 "label"'
)


def sample_shapes():
    result = interpret(SCRIPT, "")
    assert result.error is None
    return result.shapes


def test_dumps_non_finite_as_null():
    shapes = [sf.Point(id="P0", x=math.inf, y=math.nan)]
    doc = json.loads(json_out.dumps(shapes))
    assert doc["shapes"][0]["x"] is None
    assert doc["shapes"][0]["y"] is None


def test_dumps_index_base():
    doc = json.loads(json_out.dumps(sample_shapes(), index_base=1))
    assert [s["id"] for s in doc["shapes"]] == ["P1", "L1", "S1", "C1", "Pg1", "Tx1"]
    assert doc["shapes"][2]["label"] == "diag"
    assert doc["shapes"][2]["color"] == "#000000"


def test_showpage_to_file(tmp_path):
    path = json_out.showpage(sample_shapes(), {"OutputFile": str(tmp_path / "s.json")})
    with open(path) as f:
        doc = json.load(f)
    assert doc["error"] is None
    assert len(doc["shapes"]) == 6


def test_showpage_to_stdout(capsys):
    assert json_out.showpage(sample_shapes(), {}) is None
    assert json.loads(capsys.readouterr().out)["shapes"][0]["type"] == "POINT"
