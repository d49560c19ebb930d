# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import re

from . import error as sf_error
from .types.constants import INDENT_TAB_WIDTH

# a token is a run of non-whitespace, non-quote characters or a quoted string
TOKEN_RE = re.compile(r"""[^\s"']+|"([^"]*)"|'([^']*)'""")

# decimal floating point literal accepted by Read
NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

SPACE = " "
TAB = "\t"
QUOTES = frozenset({'"', "'"})


def _match_to_token(match: re.Match) -> str:
    # quoted content is re-wrapped in double quotes whatever the original quote
    if match.group(1) is not None:
        return f'"{match.group(1)}"'
    if match.group(2) is not None:
        return f'"{match.group(2)}"'
    return match.group(0)


def split_tokens(text: str) -> list[str]:
    """Split a line into tokens, keeping quoted strings as single tokens."""
    return [_match_to_token(m) for m in TOKEN_RE.finditer(text)]


def is_quoted(token: str) -> bool:
    return len(token) >= 2 and token[0] == token[-1] and token[0] in QUOTES


def unquote(token: str) -> str:
    return token[1:-1] if is_quoted(token) else token


def parse_number(token: str) -> float | None:
    """Return the value of a decimal literal, or None if ``token`` is not one."""
    if NUMBER_RE.fullmatch(token) is None:
        return None
    return float(token)


class InputStream:
    """
    Lazy tokenizer over the input data with a single token of lookahead.

    Tokens are produced on demand as the format script's ``Read`` commands
    ask for them. The cursor only moves forward.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._matches = TOKEN_RE.finditer(text)
        self._current: str | None = None
        self.consumed = 0

    def peek(self) -> str | None:
        """Return the next token without consuming it, or None at end of input."""
        if self._current is not None:
            return self._current
        match = next(self._matches, None)
        if match is None:
            return None
        self._current = _match_to_token(match)
        return self._current

    def consume(self) -> str:
        token = self.peek()
        if token is None:
            raise sf_error.UnexpectedEndOfInput()
        self._current = None
        self.consumed += 1
        return token

    def has_next(self) -> bool:
        return self.peek() is not None

    def consume_number(self) -> float:
        token = self.consume()
        val = parse_number(token)
        if val is None:
            raise sf_error.ExpectedNumber(token)
        return val


def get_indent(line: str) -> int:
    """Indentation width of ``line`` with tabs expanded to 4-column stops."""
    count = 0
    for ch in line:
        if ch == SPACE:
            count += 1
        elif ch == TAB:
            count += INDENT_TAB_WIDTH - (count % INDENT_TAB_WIDTH)
        else:
            break
    return count


def strip_comment(line: str) -> str:
    """Remove a ``//`` comment from ``line``, ignoring markers inside quotes."""
    quote_char = None
    for i, ch in enumerate(line):
        if quote_char is not None:
            if ch == quote_char:
                quote_char = None
        elif ch in QUOTES:
            quote_char = ch
        elif ch == "/" and line[i + 1:i + 2] == "/":
            return line[:i]
    return line


def logical_content(line: str) -> str:
    """The statement text of a line: comment removed, surrounding blanks trimmed."""
    return strip_comment(line).strip()
