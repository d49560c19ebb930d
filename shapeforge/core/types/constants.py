# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ShapeForge Types Constants Module

This module contains the constants shared throughout the ShapeForge format
script interpreter: the reserved keyword set, the shape type tags and id
prefixes, the automatic colour palette and the default limits.
"""

# Reserved keywords (compared case-insensitively)
KEYWORDS = frozenset({
    "point",
    "line",
    "seg",
    "circle",
    "poly",
    "push",
    "text",
    "read",
    "rep",
    "group",
    "if",
    "elif",
    "else",
    "break",
    "continue",
})

# Shape commands handled by the command executor
SHAPE_COMMANDS = frozenset({"point", "line", "seg", "circle", "poly", "push", "text"})

# Shape types
T_POINT = "POINT"
T_LINE = "LINE"
T_SEGMENT = "SEGMENT"
T_CIRCLE = "CIRCLE"
T_POLYGON = "POLYGON"
T_TEXT = "TEXT"

SHAPE_TYPES = (T_POINT, T_LINE, T_SEGMENT, T_CIRCLE, T_POLYGON, T_TEXT)

# Shape id prefixes
ID_PREFIXES = {
    T_POINT: "P",
    T_LINE: "L",
    T_SEGMENT: "S",
    T_CIRCLE: "C",
    T_POLYGON: "Pg",
    T_TEXT: "Tx",
}

# Colours assigned to shapes that carry no explicit colour argument,
# indexed by the number of shapes emitted so far
COLORS = (
    "#ef4444",  # red-500
    "#3b82f6",  # blue-500
    "#22c55e",  # green-500
    "#eab308",  # yellow-500
    "#a855f7",  # purple-500
    "#ec4899",  # pink-500
    "#06b6d4",  # cyan-500
    "#f97316",  # orange-500
    "#14b8a6",  # teal-500
)

# Tabs expand to the next multiple of this many columns
INDENT_TAB_WIDTH = 4

DEFAULT_FONT_SIZE = 12

# Minimum numeric argument counts for shape commands
MIN_ARGS_POINT = 2
MIN_ARGS_PUSH = 2
MIN_ARGS_LINE = 4
MIN_ARGS_CIRCLE = 3
MIN_ARGS_POLY = 6
MIN_ARGS_TEXT = 2

# Timeouts in milliseconds
DEFAULT_EXECUTION_TIMEOUT = 3000
DEFAULT_RENDER_TIMEOUT = 200

# the output directory
OUTPUT_DIRECTORY = "sf_output"
