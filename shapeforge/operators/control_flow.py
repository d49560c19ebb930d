# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Block statements: rep, group, if/elif/else, break and continue.

Every handler has the signature::

    handler(ctxt, lines, index, indent, header, run_block) -> (outcome, next_index)

where ``lines`` is the enclosing block, ``index`` the position of the
header line, ``indent`` its indentation column, ``header`` its statement
text and ``run_block`` the block processor used for nested bodies.
"""

from __future__ import annotations

import itertools
import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Iterable

from ..core import error as sf_error
from ..core import expression
from ..core import types as sf
from ..core.block import extract_block
from ..core.tokenizer import get_indent, is_quoted, logical_content, unquote

logger = logging.getLogger(__name__)

RunBlock = Callable[[sf.Context, list[str], int], sf.StatementOutcome]
Handled = tuple[sf.StatementOutcome, int]

ELSE_IF_RE = re.compile(r"^else\s+if\b(.*)$", re.IGNORECASE | re.DOTALL)
IF_RE = re.compile(r"^if\b(.*)$", re.IGNORECASE | re.DOTALL)
ELIF_RE = re.compile(r"^elif\b(.*)$", re.IGNORECASE | re.DOTALL)
ELSE_RE = re.compile(r"^else\b(.*)$", re.IGNORECASE | re.DOTALL)


def _header_body(header: str, keyword: str) -> str:
    """Text between the keyword and the end of the header line."""
    return header[len(keyword):].strip()


# ----------------------------------------------------------------------
# rep
# ----------------------------------------------------------------------

def parse_rep_header(ctxt: sf.Context, body: str) -> tuple[str | None, float]:
    """
    Split a rep header body into (induction variable, count).

    ``n*2`` is a plain count. ``i n*2`` names an induction variable. The
    whole body is tried as an expression first so that a count such as
    ``a + b`` is not mistaken for a variable named ``a``.
    """
    try:
        return None, expression.evaluate(body, ctxt.resolve_value)
    except sf_error.ExpressionError:
        parts = body.split(None, 1)
        if len(parts) < 2:
            raise

    loop_var, count_expr = parts
    try:
        sf.validate_variable_name(loop_var)
        return loop_var, expression.evaluate(count_expr, ctxt.resolve_value)
    except sf_error.ScriptError as e:
        raise sf_error.ScriptSyntaxError(
            f'Invalid rep statement: "{body}". Expected "rep count:" or "rep var count:"'
        ) from e


def iteration_range(count: float) -> Iterable[int]:
    """Iteration indices for a loop count truncated toward zero."""
    if math.isnan(count) or count <= 0:
        return range(0)
    if math.isinf(count):
        return itertools.count()
    return range(int(count))


def sf_rep(ctxt: sf.Context, lines: list[str], index: int, indent: int,
           header: str, run_block: RunBlock) -> Handled:
    """
    rep [var] count:
        body

    The count is evaluated once. Each iteration runs in a fresh variable
    scope, so names first bound inside the body vanish when the iteration
    ends; names that already existed outside keep their new values.
    """
    body = _header_body(header, "rep")
    if not body.endswith(":"):
        raise sf_error.ScriptSyntaxError(
            "rep statement must end with ':' (e.g. \"rep i n:\")"
        )
    body = body[:-1].strip()
    if not body:
        raise sf_error.ScriptSyntaxError("rep statement requires a count.")

    loop_var, count = parse_rep_header(ctxt, body)
    block = extract_block(lines, index + 1, indent, header)
    logger.debug("rep %s: count %s", loop_var or "-", count)

    ctxt.loop_depth += 1
    try:
        for k in iteration_range(count):
            ctxt.guard.check()
            ctxt.push_scope()
            try:
                if loop_var is not None:
                    ctxt.bind(loop_var, float(k))
                outcome = run_block(ctxt, block.lines, block.indent)
            finally:
                ctxt.pop_scope()
            if outcome is sf.BREAK:
                break
    finally:
        ctxt.loop_depth -= 1

    return sf.NORMAL, block.next_index


# ----------------------------------------------------------------------
# group
# ----------------------------------------------------------------------

def sf_group(ctxt: sf.Context, lines: list[str], index: int, indent: int,
             header: str, run_block: RunBlock) -> Handled:
    """
    group id:
        body

    Shapes emitted in the body carry ``id`` as their group id. The id is a
    quoted string taken literally, or an expression whose value is used.
    """
    body = _header_body(header, "group")
    if not body.endswith(":"):
        raise sf_error.ScriptSyntaxError(
            "Group statement must end with ':' (e.g. \"Group i:\")"
        )
    body = body[:-1].strip()

    if is_quoted(body):
        group_id = unquote(body)
    else:
        try:
            group_id = expression.format_number(expression.evaluate(body, ctxt.resolve_value))
        except sf_error.ExpressionError as e:
            raise sf_error.ScriptSyntaxError(
                f'Invalid Group ID: "{body}". Expected a number, variable, or quoted string.'
            ) from e

    block = extract_block(lines, index + 1, indent, header)
    logger.debug("group %s", group_id)

    previous = ctxt.current_group_id
    ctxt.current_group_id = group_id
    try:
        outcome = run_block(ctxt, block.lines, block.indent)
    finally:
        ctxt.current_group_id = previous

    return outcome, block.next_index


# ----------------------------------------------------------------------
# if / elif / else
# ----------------------------------------------------------------------

@dataclass
class ConditionalHeader:
    kind: str                   # "if", "elif" or "else"
    condition: str | None = None


def _with_condition(rest: str, kind: str, label: str) -> ConditionalHeader:
    content = rest.strip()
    if not content.endswith(":"):
        raise sf_error.ScriptSyntaxError(
            f"{label} statement must end with ':' (e.g. \"{label} x > 0:\")"
        )
    content = content[:-1].strip()
    if not content:
        raise sf_error.ScriptSyntaxError(f"{label} statement requires a condition.")
    return ConditionalHeader(kind, content)


def parse_conditional_header(text: str) -> ConditionalHeader | None:
    """Parse an if/elif/else if/else header, or return None for any other statement."""
    m = ELSE_IF_RE.match(text)
    if m:
        return _with_condition(m.group(1), "elif", "else if")

    m = IF_RE.match(text)
    if m:
        return _with_condition(m.group(1), "if", "if")

    m = ELIF_RE.match(text)
    if m:
        return _with_condition(m.group(1), "elif", "elif")

    m = ELSE_RE.match(text)
    if m:
        rest = m.group(1).strip()
        if not rest.endswith(":"):
            raise sf_error.ScriptSyntaxError("else statement must end with ':' (e.g. \"else:\")")
        if rest != ":":
            raise sf_error.ScriptSyntaxError(
                "else statement cannot have a condition (use \"else if\" or \"elif\")."
            )
        return ConditionalHeader("else")

    return None


def sf_if(ctxt: sf.Context, lines: list[str], index: int, indent: int,
          header: str, run_block: RunBlock) -> Handled:
    """
    if cond:        elif cond:        else:
        body            body              body

    Runs the body of the first header whose condition is nonzero, or the
    else body. Headers after the taken branch are still parsed, which
    validates them and moves past their bodies.
    """
    j = index
    executed = False

    while j < len(lines):
        line = lines[j]
        text = logical_content(line)
        if not text:
            j += 1
            continue
        if get_indent(line) != indent:
            break

        cond = parse_conditional_header(text)
        if cond is None:
            break
        if j != index and cond.kind == "if":
            break

        block = extract_block(lines, j + 1, indent, text)
        j = block.next_index

        if not executed:
            if cond.kind == "else" or expression.truth(
                expression.evaluate(cond.condition, ctxt.resolve_value)
            ):
                executed = True
                outcome = run_block(ctxt, block.lines, block.indent)
                if outcome is not sf.NORMAL:
                    return outcome, j

        if cond.kind == "else":
            break

    return sf.NORMAL, j


def sf_orphan_branch(ctxt: sf.Context, lines: list[str], index: int, indent: int,
                     header: str, run_block: RunBlock) -> Handled:
    if ELSE_IF_RE.match(header):
        raise sf_error.ScriptSyntaxError("'else if' without matching 'if'.")
    keyword = "elif" if header.lower().startswith("elif") else "else"
    raise sf_error.ScriptSyntaxError(f"'{keyword}' without matching 'if'.")


# ----------------------------------------------------------------------
# break / continue
# ----------------------------------------------------------------------

def _loop_exit(ctxt: sf.Context, header: str, keyword: str) -> None:
    if _header_body(header, keyword):
        raise sf_error.ScriptSyntaxError(f"'{keyword}' does not take any arguments.")
    if ctxt.loop_depth <= 0:
        raise sf_error.ScriptSyntaxError(f"'{keyword}' used outside of a loop.")


def sf_break(ctxt: sf.Context, lines: list[str], index: int, indent: int,
             header: str, run_block: RunBlock) -> Handled:
    _loop_exit(ctxt, header, "break")
    return sf.BREAK, index + 1


def sf_continue(ctxt: sf.Context, lines: list[str], index: int, indent: int,
                header: str, run_block: RunBlock) -> Handled:
    _loop_exit(ctxt, header, "continue")
    return sf.CONTINUE, index + 1


control_ops = {
    "rep": sf_rep,
    "group": sf_group,
    "if": sf_if,
    "elif": sf_orphan_branch,
    "else": sf_orphan_branch,
    "break": sf_break,
    "continue": sf_continue,
}
