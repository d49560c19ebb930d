# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ShapeForge Types Control Flow Module

Outcome of processing a statement or a block. ``break`` and ``continue``
are reported by return value and travel outwards through enclosing
``if`` and ``group`` blocks until the nearest ``rep`` consumes them.
Errors are not outcomes; they are raised as ScriptError.
"""

import enum


class StatementOutcome(enum.Enum):
    NORMAL = "normal"
    BREAK = "break"
    CONTINUE = "continue"

    def __str__(self) -> str:
        return self.value


NORMAL = StatementOutcome.NORMAL
BREAK = StatementOutcome.BREAK
CONTINUE = StatementOutcome.CONTINUE
