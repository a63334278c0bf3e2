#===============================================================================
#  Launchpad | calculator.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Decides whether search-box text is arithmetic and, if so, evaluates it.
#
#  Notes
#  -----
#  - Supports + - * / ^ %, parentheses, sqrt/sin/cos/tan/log/ln/abs.
#  - Trig functions take degrees.
#  - Natural language ("5 times 3", "square root of 16") is normalized first.
#  - evaluate() returns None for "not math" and "Error" for "math, but broken".
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

ERROR_RESULT = "Error"
INFINITY_RESULT = "∞"

# Order matters: longer phrases before the words they contain.
PHRASES = [
    ("square root of", "sqrt"),
    ("√", "sqrt"),
    ("percentage of", "%*"),
    ("percent of", "%*"),
    ("out of", "/"),
    ("divided by", "/"),
    ("multiplied by", "*"),
    ("times", "*"),
    ("into", "*"),
    ("plus", "+"),
    ("minus", "-"),
    ("percentage", "%"),
    ("percent", "%"),
    ("over", "/"),
]
BY_WORD_RE = re.compile(r"\bby\b")

SYMBOLS = [
    ("×", "*"),
    ("÷", "/"),
    ("x", "*"),
    ("X", "*"),
    ("π", repr(math.pi)),
    ("pi", repr(math.pi)),
]

FUNCTIONS = ("sqrt", "sin", "cos", "tan", "log", "ln", "abs")
OPERATOR_CHARS = set("+-*/×÷^%().")
ALLOWED_LETTERS = set("sqrtincoalgbep")


class ExpressionError(ValueError):
    pass


@dataclass(frozen=True)
class TextQuery:
    text: str


@dataclass(frozen=True)
class ArithmeticResult:
    value: str


def normalize(raw: str) -> str:
    processed = (raw or "").strip().lower()
    for phrase, symbol in PHRASES:
        processed = processed.replace(phrase, symbol)
    processed = BY_WORD_RE.sub("/", processed)
    processed = re.sub(r"\s+", "", processed)
    for symbol, replacement in SYMBOLS:
        processed = processed.replace(symbol, replacement)
    return processed


def is_math_expression(s: str) -> bool:
    has_operator = any(c in OPERATOR_CHARS for c in s) or any(f in s for f in FUNCTIONS)
    has_digit = any(c.isdigit() for c in s)
    has_invalid = any(c.isalpha() and c.lower() not in ALLOWED_LETTERS for c in s)
    return has_operator and has_digit and not has_invalid


def _tan_degrees(arg: float) -> float:
    degrees = math.fmod(arg, 180.0)
    if abs(degrees - 90) < 1e-9 or abs(degrees + 90) < 1e-9:
        return math.inf
    return math.tan(math.radians(arg))


def _guard(fn):
    def call(x: float) -> float:
        try:
            return fn(x)
        except (ValueError, OverflowError):
            return math.nan
    return call


FUNCTION_TABLE = {
    "sqrt": _guard(math.sqrt),
    "sin": _guard(lambda x: math.sin(math.radians(x))),
    "cos": _guard(lambda x: math.cos(math.radians(x))),
    "tan": _guard(_tan_degrees),
    "log": _guard(lambda x: -math.inf if x == 0 else math.log10(x)),
    "ln": _guard(lambda x: -math.inf if x == 0 else math.log(x)),
    "abs": abs,
}


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _power(a: float, b: float) -> float:
    if a == 0 and b < 0:
        return math.inf
    try:
        result = math.pow(a, b)
    except OverflowError:
        return math.inf
    except (ValueError, ZeroDivisionError):
        return math.nan
    return result


class ExpressionParser:
    """Recursive descent parser, lowest to highest precedence:

        expr    := term (('+'|'-') term)*
        term    := factor (('*'|'/') factor)*
        factor  := power ['%']
        power   := unary ('^' power)?
        unary   := ('+'|'-') unary | primary
        primary := '(' expr ')' | function ('(' expr ')' | power) | number
    """

    def __init__(self, expr: str):
        self.expr = expr
        self.pos = 0

    def _peek(self) -> str:
        return self.expr[self.pos] if self.pos < len(self.expr) else ""

    def parse(self) -> float:
        result = self.parse_expression()
        if self.pos != len(self.expr):
            raise ExpressionError(f"Unexpected {self._peek()!r} at {self.pos}")
        return result

    def parse_expression(self) -> float:
        result = self.parse_term()
        while self._peek() in ("+", "-"):
            op = self._peek()
            self.pos += 1
            rhs = self.parse_term()
            result = result + rhs if op == "+" else result - rhs
        return result

    def parse_term(self) -> float:
        result = self.parse_factor()
        while self._peek() in ("*", "/"):
            op = self._peek()
            self.pos += 1
            rhs = self.parse_factor()
            result = result * rhs if op == "*" else _divide(result, rhs)
        return result

    def parse_factor(self) -> float:
        result = self.parse_power()
        if self._peek() == "%":
            self.pos += 1
            result /= 100.0
        return result

    def parse_power(self) -> float:
        result = self.parse_unary()
        if self._peek() == "^":
            self.pos += 1
            result = _power(result, self.parse_power())
        return result

    def parse_unary(self) -> float:
        if self._peek() == "-":
            self.pos += 1
            return -self.parse_unary()
        if self._peek() == "+":
            self.pos += 1
            return self.parse_unary()
        return self.parse_primary()

    def parse_primary(self) -> float:
        if self._peek() == "(":
            self.pos += 1
            result = self.parse_expression()
            self._expect(")")
            return result
        if self._peek().isalpha():
            return self.parse_function()
        return self.parse_number()

    def parse_function(self) -> float:
        start = self.pos
        while self._peek().isalpha():
            self.pos += 1
        name = self.expr[start:self.pos]
        fn = FUNCTION_TABLE.get(name)
        if fn is None:
            raise ExpressionError(f"Unknown function: {name}")
        if self._peek() == "(":
            self.pos += 1
            arg = self.parse_expression()
            self._expect(")")
        else:
            # "sqrt16" from "square root of 16"
            arg = self.parse_power()
        return fn(arg)

    def parse_number(self) -> float:
        start = self.pos
        while self._peek().isdigit():
            self.pos += 1
        if self._peek() == ".":
            self.pos += 1
            while self._peek().isdigit():
                self.pos += 1
        if self._peek() in ("e", "E") and self.pos > start:
            self.pos += 1
            if self._peek() in ("+", "-"):
                self.pos += 1
            while self._peek().isdigit():
                self.pos += 1
        text = self.expr[start:self.pos]
        try:
            return float(text)
        except ValueError:
            raise ExpressionError(f"Invalid number: {text!r}") from None

    def _expect(self, ch: str) -> None:
        if self._peek() != ch:
            raise ExpressionError(f"Expected {ch!r} at {self.pos}")
        self.pos += 1


def format_result(value: float) -> str:
    if math.isnan(value):
        return ERROR_RESULT
    if math.isinf(value):
        return INFINITY_RESULT
    if value.is_integer():
        return str(int(value))
    rounded = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return format(rounded.normalize(), "f")


def evaluate(raw: str) -> Optional[str]:
    """Result string for arithmetic input, None when the input is not math."""
    if not raw or not raw.strip():
        return None
    cleaned = normalize(raw)
    if not is_math_expression(cleaned):
        return None
    try:
        return format_result(ExpressionParser(cleaned).parse())
    except (ExpressionError, ValueError, OverflowError):
        return ERROR_RESULT


def classify(raw: str) -> Union[TextQuery, ArithmeticResult, None]:
    if not raw or not raw.strip():
        return None
    result = evaluate(raw)
    if result is None:
        return TextQuery(raw)
    return ArithmeticResult(result)


def normalize_for_display(expression: str) -> str:
    return (
        expression.strip()
        .replace("*", "×")
        .replace("/", "÷")
        .replace("x", "×")
        .replace("X", "×")
    )
