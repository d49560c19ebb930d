# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Indentation-based block extraction.

A block is the run of lines following a header (``rep``, ``group``, ``if``
...) that are indented deeper than the header. The first non-blank line
fixes the block's indentation column; the block continues while lines are
indented at least that far. Blank and comment-only lines are carried along
without affecting the bookkeeping.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import error as sf_error
from .tokenizer import get_indent, logical_content


@dataclass
class Block:
    lines: list[str]
    indent: int        # indentation column of the block's statements
    next_index: int    # index of the first line after the block


def extract_block(lines: list[str], start: int, parent_indent: int, header: str) -> Block:
    """
    Carve out the block that follows a header line.

    Args:
        lines: Lines of the enclosing block.
        start: Index of the first line after the header.
        parent_indent: Indentation column of the header.
        header: Header text, used in the error message.

    Returns:
        Block with the body lines, their indentation column and the index
        at which scanning of the enclosing block resumes.

    Raises:
        ScriptIndentationError: if no line is indented deeper than the header.
    """
    block_lines: list[str] = []
    block_indent = -1
    j = start

    while j < len(lines):
        line = lines[j]
        if not logical_content(line):
            block_lines.append(line)
            j += 1
            continue

        indent = get_indent(line)
        if block_indent == -1:
            if indent <= parent_indent:
                break
            block_indent = indent

        if indent < block_indent:
            break
        block_lines.append(line)
        j += 1

    if block_indent == -1:
        raise sf_error.ScriptIndentationError(f'Expected an indented block after "{header}"')

    return Block(block_lines, block_indent, j)
