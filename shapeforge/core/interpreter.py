# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ShapeForge statement interpreter.

Walks a format script line by line. Block statements (rep, group,
if/elif/else, break, continue) are dispatched to the control flow
handlers, which carve out their bodies and call back into
``process_block``; every other line is a command (Read or a shape).

Entry points:
    interpret(format_script, input_data, timeout_ms) -> ParseResult
        Never raises for script or input problems; the error message is
        returned in ``ParseResult.error``.
    run_script(ctxt, format_script) -> list[Shape]
        Raises ScriptError.
"""

from __future__ import annotations

import logging
import re

from . import error as sf_error
from . import types as sf
from .context_init import create_context
from .tokenizer import get_indent, logical_content
from ..operators.control_flow import control_ops
from ..operators.shape_ops import execute_command

logger = logging.getLogger(__name__)

KEYWORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _statement_keyword(text: str) -> str:
    m = KEYWORD_RE.match(text)
    return m.group(0).lower() if m else ""


def process_block(ctxt: sf.Context, lines: list[str], base_indent: int) -> sf.StatementOutcome:
    """
    Execute the statements of one block.

    Args:
        ctxt: Execution context.
        lines: Lines of the block (blank and comment-only lines allowed).
        base_indent: Indentation column every statement must sit at.

    Returns:
        NORMAL when the block ran to its end, BREAK or CONTINUE when a loop
        exit statement cut it short.
    """
    i = 0
    while i < len(lines):
        ctxt.guard.check()

        line = lines[i]
        text = logical_content(line)
        if not text:
            i += 1
            continue

        indent = get_indent(line)
        if indent < base_indent:
            break
        if indent > base_indent:
            raise sf_error.ScriptIndentationError(f'Line "{text}" is indented too much.')

        handler = control_ops.get(_statement_keyword(text))
        if handler is None:
            execute_command(ctxt, text)
            i += 1
            continue

        outcome, i = handler(ctxt, lines, i, indent, text, process_block)
        if outcome is not sf.NORMAL:
            return outcome

    return sf.NORMAL


def run_script(ctxt: sf.Context, format_script: str) -> list[sf.Shape]:
    """Run ``format_script`` in ``ctxt`` and return the emitted shapes."""
    process_block(ctxt, format_script.split("\n"), 0)
    return ctxt.shapes


def interpret(format_script: str, input_data: str,
              timeout_ms: float = sf.DEFAULT_EXECUTION_TIMEOUT) -> sf.ParseResult:
    """
    Interpret a format script against input data.

    Args:
        format_script: The format script source.
        input_data: Whitespace separated input tokens read by ``Read``.
        timeout_ms: Execution budget in milliseconds.

    Returns:
        ParseResult with the shapes in emission order, or with an empty
        shape list and the error message.

    Raises:
        ValueError: if ``timeout_ms`` is not a positive finite number.
    """
    ctxt = create_context(input_data, timeout_ms)
    try:
        run_script(ctxt, format_script)
    except sf_error.ScriptError as e:
        logger.debug("run failed with %s: %s", e.name, e)
        return sf.ParseResult([], str(e))

    logger.info("run completed: %d shapes, %d input tokens read, %.1f ms",
                len(ctxt.shapes), ctxt.input.consumed, ctxt.guard.elapsed_ms())
    return sf.ParseResult(ctxt.shapes, None)
