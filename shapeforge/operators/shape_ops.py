# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Shape commands and Read.

Each argument token of a command is classified on its own:

    #rrggbb          colour literal
    "text" 'text'    string literal
    anything else    expression; if it does not evaluate it is kept as a
                     plain string (so ``Point 1 2 A`` labels the point "A")

Numbers are collected positionally. The first string becomes the label;
a Text shape takes its content from the last string instead. A command
given fewer numbers than it needs does nothing.
"""

import logging
import math

from ..core import error as sf_error
from ..core import expression
from ..core import types as sf
from ..core.tokenizer import is_quoted, split_tokens, unquote

logger = logging.getLogger(__name__)


def process_arg(ctxt: sf.Context, token: str) -> float | str:
    if token.startswith("#"):
        return token
    if is_quoted(token):
        return unquote(token)
    try:
        return expression.evaluate(token, ctxt.resolve_value)
    except sf_error.ExpressionError:
        return token


def classify_args(ctxt: sf.Context, tokens: list[str]) -> tuple[list[float], list[str], str | None]:
    """Split argument tokens into (numbers, strings, colour)."""
    nums: list[float] = []
    strs: list[str] = []
    color = None
    for token in tokens:
        arg = process_arg(ctxt, token)
        if isinstance(arg, float):
            nums.append(arg)
        elif token.startswith("#"):
            color = arg
        else:
            strs.append(arg)
    return nums, strs, color


def _pairs(nums: list[float]) -> tuple[sf.Coord, ...]:
    return tuple(sf.Coord(nums[k], nums[k + 1]) for k in range(0, len(nums) - 1, 2))


def sf_read(ctxt: sf.Context, names: list[str]) -> None:
    """
    Read name₁ name₂ ... **Read** -

    Consumes one number from the input data per name and binds it.
    """
    for name in names:
        sf.validate_variable_name(name)
        ctxt.bind(name, ctxt.input.consume_number())


def sf_point(ctxt, nums, strs, attrs):
    if len(nums) >= sf.MIN_ARGS_POINT:
        ctxt.add_shape(sf.Point(id=ctxt.generate_id(sf.T_POINT), x=nums[0], y=nums[1], **attrs))


def sf_push(ctxt, nums, strs, attrs):
    if len(nums) >= sf.MIN_ARGS_PUSH:
        ctxt.point_buffer.append(sf.Coord(nums[0], nums[1]))


def sf_line(ctxt, nums, strs, attrs):
    if len(nums) >= sf.MIN_ARGS_LINE:
        ctxt.add_shape(sf.Line(
            id=ctxt.generate_id(sf.T_LINE),
            p1=sf.Coord(nums[0], nums[1]),
            p2=sf.Coord(nums[2], nums[3]),
            **attrs,
        ))


def sf_seg(ctxt, nums, strs, attrs):
    if len(nums) >= sf.MIN_ARGS_LINE:
        ctxt.add_shape(sf.Segment(
            id=ctxt.generate_id(sf.T_SEGMENT),
            p1=sf.Coord(nums[0], nums[1]),
            p2=sf.Coord(nums[2], nums[3]),
            **attrs,
        ))


def sf_circle(ctxt, nums, strs, attrs):
    if len(nums) >= sf.MIN_ARGS_CIRCLE:
        ctxt.add_shape(sf.Circle(
            id=ctxt.generate_id(sf.T_CIRCLE), x=nums[0], y=nums[1], r=nums[2], **attrs
        ))


def sf_poly(ctxt, nums, strs, attrs):
    """
    Poly with no numbers drains the point buffer into one polygon.
    Poly with an even count of at least six numbers builds the polygon
    from the argument pairs and leaves the buffer alone.
    """
    if not nums:
        if ctxt.point_buffer:
            points = tuple(ctxt.point_buffer)
            ctxt.point_buffer.clear()
            ctxt.add_shape(sf.Polygon(id=ctxt.generate_id(sf.T_POLYGON), points=points, **attrs))
    elif len(nums) >= sf.MIN_ARGS_POLY and len(nums) % 2 == 0:
        ctxt.add_shape(sf.Polygon(id=ctxt.generate_id(sf.T_POLYGON), points=_pairs(nums), **attrs))


def sf_text(ctxt, nums, strs, attrs):
    attrs.pop("label")
    content = strs[-1] if strs else None
    if len(nums) >= sf.MIN_ARGS_TEXT and content:
        font_size = nums[2] if len(nums) > 2 else 0.0
        if font_size == 0 or math.isnan(font_size):
            font_size = sf.DEFAULT_FONT_SIZE
        ctxt.add_shape(sf.Text(
            id=ctxt.generate_id(sf.T_TEXT), x=nums[0], y=nums[1],
            content=content, font_size=font_size, **attrs
        ))


shape_ops = {
    "point": sf_point,
    "push": sf_push,
    "line": sf_line,
    "seg": sf_seg,
    "circle": sf_circle,
    "poly": sf_poly,
    "text": sf_text,
}


def execute_command(ctxt: sf.Context, line: str) -> None:
    """
    Execute one command line (Read or a shape command).

    Raises:
        ScriptSyntaxError: for an unknown command keyword or a bad variable name.
    """
    parts = split_tokens(line)
    if not parts:
        return

    command = parts[0].lower()
    if command == "read":
        sf_read(ctxt, [unquote(p) for p in parts[1:]])
        return

    if command not in sf.SHAPE_COMMANDS:
        raise sf_error.ScriptSyntaxError(f"Unknown command '{unquote(parts[0])}'")

    nums, strs, color = classify_args(ctxt, parts[1:])
    attrs = {
        "color": color or ctxt.next_color(),
        "label": strs[0] if strs else None,
        "group_id": ctxt.current_group_id,
    }
    logger.debug("%s: %d numbers, %d strings", command, len(nums), len(strs))
    shape_ops[command](ctxt, nums, strs, attrs)
