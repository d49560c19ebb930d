# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

# error types
SYNTAXERROR = 0
INDENTATIONERROR = 1
EXPRESSIONERROR = 2
UNDEFINED = 3
UNEXPECTEDEOF = 4
EXPECTEDNUMBER = 5
TIMEOUT = 6

error_names = (
    "syntaxerror",
    "indentationerror",
    "expressionerror",
    "undefined",
    "unexpectedeof",
    "expectednumber",
    "timeout",
)


class ScriptError(Exception):
    """
    Base class for every error raised while interpreting a format script.

    All script errors are terminal: the run stops and the message becomes
    the ``error`` string of the result.
    """
    CODE = SYNTAXERROR
    PREFIX = ""

    def __init__(self, message: str) -> None:
        super().__init__(self.PREFIX + message)
        self.code = self.CODE

    @property
    def message(self) -> str:
        return self.args[0]

    @property
    def name(self) -> str:
        return error_names[self.code]


class ScriptSyntaxError(ScriptError):
    CODE = SYNTAXERROR
    PREFIX = "Syntax Error: "


class ScriptIndentationError(ScriptError):
    CODE = INDENTATIONERROR
    PREFIX = "Indentation Error: "


class ExpressionError(ScriptError):
    CODE = EXPRESSIONERROR


class UndefinedVariableError(ExpressionError):
    CODE = UNDEFINED

    def __init__(self, token: str) -> None:
        super().__init__(f"Undefined variable or invalid number: '{token}'")
        self.token = token


class UnexpectedEndOfInput(ScriptError):
    CODE = UNEXPECTEDEOF

    def __init__(self) -> None:
        super().__init__("Unexpected end of input")


class ExpectedNumber(ScriptError):
    CODE = EXPECTEDNUMBER

    def __init__(self, token: str) -> None:
        super().__init__(f"Expected number, found '{token}'")
        self.token = token


class ExecutionTimedOut(ScriptError):
    CODE = TIMEOUT

    def __init__(self, timeout_ms: float) -> None:
        super().__init__(
            f"Execution timed out (> {timeout_ms:g}ms). Please optimize your script, "
            f"reduce input size, or increase the execution timeout."
        )
        self.timeout_ms = timeout_ms
