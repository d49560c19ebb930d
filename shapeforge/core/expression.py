# ShapeForge - A Format Script Interpreter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Expression evaluation for loop counts, conditions and command arguments.

Grammar, loosest binding first::

    or          := and ( "||" and )*
    and         := comparison ( "&&" comparison )*
    comparison  := additive [ ( "==" | "!=" | "<" | "<=" | ">" | ">=" ) additive ]
    additive    := term ( ( "+" | "-" ) term )*
    term        := unary ( ( "*" | "/" | "%" ) unary )*
    unary       := ( "-" | "+" | "!" ) unary | primary
    primary     := "(" or ")" | identifier | number

A comparison does not chain: ``1 < 2 < 3`` leaves ``< 3`` unconsumed and
fails with "Unexpected token". Comparisons and logical operators yield 1.0
or 0.0 so their results can be used in arithmetic. Arithmetic follows IEEE
754: division by zero gives an infinity or NaN instead of raising.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Callable

from . import error as sf_error

EXPR_TOKEN_RE = re.compile(
    r"[a-zA-Z_][a-zA-Z0-9_]*|\d+(?:\.\d+)?|==|!=|<=|>=|\|\||&&|[+\-*/()%<>!]"
)

COMPARISON_OPS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
}


def tokenize_expression(expr: str) -> list[str]:
    tokens = []
    last = 0
    for match in EXPR_TOKEN_RE.finditer(expr):
        skipped = expr[last:match.start()].strip()
        if skipped:
            raise sf_error.ExpressionError(f"Unexpected token '{skipped}' in expression \"{expr}\"")
        tokens.append(match.group(0))
        last = match.end()
    rest = expr[last:].strip()
    if rest:
        raise sf_error.ExpressionError(f"Unexpected token '{rest}' in expression \"{expr}\"")
    return tokens


def divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def modulo(a: float, b: float) -> float:
    # remainder takes the sign of the dividend
    if b == 0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    if math.isinf(b):
        return a
    return math.fmod(a, b)


def truth(val: float) -> bool:
    # NaN counts as true, like any other nonzero value
    return val != 0


def format_number(val: float) -> str:
    """
    Shortest text for a number: ``3``, ``2.5``, ``NaN``, ``Infinity``.

    Magnitudes of 1e21 and above, or below 1e-6, are written with an
    exponent (``1e+21``, ``1.5e-7``); everything else is written out in
    full (``100000000000000000000``, ``0.00001``).
    """
    if math.isnan(val):
        return "NaN"
    if math.isinf(val):
        return "Infinity" if val > 0 else "-Infinity"
    if val == 0:
        return "0"
    if abs(val) >= 1e21 or abs(val) < 1e-6:
        mantissa, _, exp = repr(val).partition("e")
        return f"{mantissa}e{int(exp):+d}"
    if val == int(val):
        return str(int(val))
    return format(Decimal(repr(val)), "f")


def _bool(flag: bool) -> float:
    return 1.0 if flag else 0.0


class ExpressionParser:
    """Recursive descent evaluator over one tokenized expression."""

    def __init__(self, expr: str, resolve: Callable[[str], float]) -> None:
        self.expr = expr
        self.resolve = resolve
        self.tokens = tokenize_expression(expr)
        self.pos = 0

    def peek(self) -> str | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def consume(self) -> str | None:
        token = self.peek()
        self.pos += 1
        return token

    def evaluate(self) -> float:
        if not self.tokens:
            raise sf_error.ExpressionError("Empty expression")
        result = self.parse_or()
        if self.pos < len(self.tokens):
            raise sf_error.ExpressionError(
                f"Unexpected token '{self.tokens[self.pos]}' in expression \"{self.expr}\""
            )
        return result

    def parse_or(self) -> float:
        left = self.parse_and()
        while self.peek() == "||":
            self.consume()
            right = self.parse_and()
            left = _bool(truth(left) or truth(right))
        return left

    def parse_and(self) -> float:
        left = self.parse_comparison()
        while self.peek() == "&&":
            self.consume()
            right = self.parse_comparison()
            left = _bool(truth(left) and truth(right))
        return left

    def parse_comparison(self) -> float:
        left = self.parse_additive()
        op = self.peek()
        if op in COMPARISON_OPS:
            self.consume()
            right = self.parse_additive()
            left = _bool(COMPARISON_OPS[op](left, right))
        return left

    def parse_additive(self) -> float:
        left = self.parse_term()
        while self.peek() in ("+", "-"):
            op = self.consume()
            right = self.parse_term()
            left = left + right if op == "+" else left - right
        return left

    def parse_term(self) -> float:
        left = self.parse_unary()
        while self.peek() in ("*", "/", "%"):
            op = self.consume()
            right = self.parse_unary()
            if op == "*":
                left = left * right
            elif op == "/":
                left = divide(left, right)
            else:
                left = modulo(left, right)
        return left

    def parse_unary(self) -> float:
        token = self.peek()
        if token in ("+", "-"):
            self.consume()
            val = self.parse_unary()
            return -val if token == "-" else val
        if token == "!":
            self.consume()
            return _bool(not truth(self.parse_unary()))
        return self.parse_primary()

    def parse_primary(self) -> float:
        token = self.consume()
        if token is None:
            raise sf_error.ExpressionError("Unexpected end of expression")
        if token == "(":
            val = self.parse_or()
            if self.consume() != ")":
                raise sf_error.ExpressionError("Expected ')'")
            return val
        return self.resolve(token)


def evaluate(expr: str, resolve: Callable[[str], float]) -> float:
    """
    Evaluate ``expr`` and return its value as a float.

    Args:
        expr: Expression source text.
        resolve: Maps an identifier or numeric literal token to its value.
            Raises UndefinedVariableError for unknown names.

    Raises:
        ExpressionError: on any lexical or syntactic problem.
    """
    return ExpressionParser(expr, resolve).evaluate()
