# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
JSON Output Device

Writes the shape list as a JSON document ``{"shapes": [...], "error": null}``
to a file, or to standard output when no output file is given.
"""

import json
import math
import os
import sys

from ...core import types as sf


def _json_number(val):
    # JSON has no NaN or Infinity; emit null like JSON.stringify does
    if isinstance(val, float) and not math.isfinite(val):
        return None
    return val


def _sanitize(obj):
    if isinstance(obj, dict):
        return {k: _sanitize(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_sanitize(v) for v in obj]
    return _json_number(obj)


def dumps(shapes: list[sf.Shape], index_base: int = 0) -> str:
    items = []
    for shape in shapes:
        d = shape.to_dict()
        d["id"] = sf.format_shape_id(shape.id, index_base)
        items.append(_sanitize(d))
    return json.dumps({"shapes": items, "error": None}, indent=2)


def showpage(shapes: list[sf.Shape], pd: dict) -> str | None:
    """
    Write ``shapes`` as JSON.

    Returns:
        Path of the written file, or None when written to stdout.
    """
    text = dumps(shapes, pd.get("IndexBase", 0))
    output_file = pd.get("OutputFile")
    if not output_file:
        sys.stdout.write(text + "\n")
        return None
    output_file = os.path.abspath(output_file)
    with open(output_file, "w") as f:
        f.write(text + "\n")
    return output_file
