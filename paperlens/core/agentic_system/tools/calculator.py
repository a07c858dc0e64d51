"""
Arithmetic expression evaluator.

Recursive-descent parser over numbers, unary +/-, binary + - * / and
parentheses. Input is checked against a character whitelist first; nothing
is ever executed as code.

Grammar:
    expr   := term (("+" | "-") term)*
    term   := factor (("*" | "/") factor)*
    factor := ("+" | "-") factor | NUMBER | "(" expr ")"

Dependencies: math, re
System role: Evaluation engine of the calculator tool
"""

import math
import re

ALLOWED_EXPRESSION = re.compile(r"[0-9+\-*/().\s]*")
NUMBER_PATTERN = re.compile(r"\d+\.?\d*|\.\d+")
TOKEN_PATTERN = re.compile(r"\s*(?:(\d+\.?\d*|\.\d+)|(.))")


class CalculationError(ValueError):
    """Raised for malformed expressions."""


def is_allowed_expression(expression: str) -> bool:
    """True when every character is a digit, operator, paren, dot or space."""
    return ALLOWED_EXPRESSION.fullmatch(expression) is not None


def tokenize(expression: str) -> list[str]:
    tokens = []
    for number, symbol in TOKEN_PATTERN.findall(expression):
        if number:
            tokens.append(number)
        elif symbol and not symbol.isspace():
            tokens.append(symbol)
    return tokens


class _Parser:
    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> str | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self) -> str:
        token = self.peek()
        if token is None:
            raise CalculationError("unexpected end of expression")
        self.pos += 1
        return token

    def parse(self) -> int | float:
        if not self.tokens:
            raise CalculationError("empty expression")
        value = self.expr()
        if self.peek() is not None:
            raise CalculationError(f"unexpected token '{self.peek()}'")
        return value

    def expr(self) -> int | float:
        value = self.term()
        while self.peek() in ("+", "-"):
            if self.take() == "+":
                value = value + self.term()
            else:
                value = value - self.term()
        return value

    def term(self) -> int | float:
        value = self.factor()
        while self.peek() in ("*", "/"):
            if self.take() == "*":
                value = value * self.factor()
            else:
                divisor = self.factor()
                if divisor == 0:
                    raise ZeroDivisionError("division by zero")
                value = value / divisor
        return value

    def factor(self) -> int | float:
        token = self.take()
        if token == "+":
            return self.factor()
        if token == "-":
            return -self.factor()
        if token == "(":
            value = self.expr()
            if self.take() != ")":
                raise CalculationError("missing closing parenthesis")
            return value
        if NUMBER_PATTERN.fullmatch(token):
            return float(token) if "." in token else int(token)
        raise CalculationError(f"unexpected token '{token}'")


def evaluate(expression: str) -> int | float:
    """
    Evaluate an arithmetic expression.

    Raises:
        CalculationError: When the expression is malformed or not whitelisted
        ZeroDivisionError: On division by zero
        OverflowError: When a value exceeds float range
    """
    if not is_allowed_expression(expression):
        raise CalculationError("only basic math is allowed")
    value = _Parser(tokenize(expression)).parse()
    if isinstance(value, float) and not math.isfinite(value):
        raise OverflowError("result exceeds float range")
    return value


def format_number(value: int | float) -> str:
    """Render integral results without a fractional part."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
