# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ShapeForge Types Context Module

The execution context owns all mutable state of one interpretation run:
the variable scopes, the shape list, the point buffer, the per-type id
counters, the current group id, the loop depth, the input token stream and
the timeout guard. A context is never shared between runs.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .. import error as sf_error
from .constants import COLORS, ID_PREFIXES, KEYWORDS, SHAPE_TYPES
from .shapes import Coord, Shape

if TYPE_CHECKING:
    from ..timeout import TimeoutGuard
    from ..tokenizer import InputStream

IDENTIFIER_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
NUMBER_LITERAL_RE = re.compile(r"\d+(?:\.\d+)?")


def validate_variable_name(name: str) -> None:
    if name.lower() in KEYWORDS:
        raise sf_error.ScriptSyntaxError(
            f"'{name}' is a reserved keyword and cannot be used as a variable name."
        )
    if IDENTIFIER_RE.fullmatch(name) is None:
        raise sf_error.ScriptSyntaxError(
            f"'{name}' is not a valid variable name. Must start with a letter or underscore."
        )


class Context:
    """State of one format script run."""

    def __init__(self, input_stream: InputStream, guard: TimeoutGuard) -> None:
        self.input = input_stream
        self.guard = guard

        self.scopes: list[dict[str, float]] = [{}]  # innermost scope last
        self.shapes: list[Shape] = []
        self.point_buffer: list[Coord] = []
        self.counts = {shape_type: 0 for shape_type in SHAPE_TYPES}

        self.current_group_id: str | None = None
        self.loop_depth = 0

    # ------------------------------------------------------------------
    # Variables
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> float | None:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    def bind(self, name: str, val: float) -> None:
        """Assign to the innermost scope holding ``name``, else define it in the innermost scope."""
        for scope in reversed(self.scopes):
            if name in scope:
                scope[name] = val
                return
        self.scopes[-1][name] = val

    def push_scope(self) -> None:
        self.scopes.append({})

    def pop_scope(self) -> None:
        self.scopes.pop()

    def variables(self) -> dict[str, float]:
        """Flattened view of every visible binding."""
        merged: dict[str, float] = {}
        for scope in self.scopes:
            merged.update(scope)
        return merged

    def resolve_value(self, token: str) -> float:
        """Value of an expression operand: a variable first, then a numeric literal."""
        val = self.lookup(token)
        if val is not None:
            return val
        if NUMBER_LITERAL_RE.fullmatch(token):
            return float(token)
        raise sf_error.UndefinedVariableError(token)

    # ------------------------------------------------------------------
    # Shapes
    # ------------------------------------------------------------------

    def generate_id(self, shape_type: str) -> str:
        count = self.counts[shape_type]
        self.counts[shape_type] = count + 1
        return f"{ID_PREFIXES[shape_type]}{count}"

    def next_color(self) -> str:
        return COLORS[len(self.shapes) % len(COLORS)]

    def add_shape(self, shape: Shape) -> None:
        self.shapes.append(shape)
