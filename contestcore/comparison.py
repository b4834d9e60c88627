"""Parsing and evaluation of comparison expressions such as ``>=80%``.

Supported operators are ``>``, ``>=``, ``<``, ``<=`` and ``=``. The right
hand side is either an absolute number or a percentage.
"""

from __future__ import annotations

import abc
import enum
import math
import re
from dataclasses import dataclass
from typing import ClassVar


class ComparisonType(enum.IntEnum):
    """Whether a comparison is absolute (``>50``) or relative (``>50%``)."""

    VALUE = 0
    PERCENTAGE = 1

    def __str__(self) -> str:
        if self is ComparisonType.PERCENTAGE:
            return "comparison_percentage"
        return "comparison_value"


class Operator(str, enum.Enum):
    """The supported comparison operators."""

    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    EQ = "="

    def __str__(self) -> str:
        return self.value


class Comparator(abc.ABC):
    """Base class of all comparators."""

    operator: ClassVar[Operator]

    @abc.abstractmethod
    def compare(self, lhs: float, rhs: float) -> bool:
        """Return whether ``lhs`` relates to ``rhs`` as the operator requires."""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Ge(Comparator):
    """Greater or equal."""

    operator = Operator.GE

    def compare(self, lhs: float, rhs: float) -> bool:
        return lhs >= rhs


class Gt(Comparator):
    """Greater than."""

    operator = Operator.GT

    def compare(self, lhs: float, rhs: float) -> bool:
        return lhs > rhs


class Lt(Comparator):
    """Less than."""

    operator = Operator.LT

    def compare(self, lhs: float, rhs: float) -> bool:
        return lhs < rhs


class Le(Comparator):
    """Less or equal."""

    operator = Operator.LE

    def compare(self, lhs: float, rhs: float) -> bool:
        return lhs <= rhs


class Eq(Comparator):
    """Equal."""

    operator = Operator.EQ

    def compare(self, lhs: float, rhs: float) -> bool:
        return lhs == rhs


@dataclass
class Result:
    """Outcome of a comparison, together with the evaluated expression."""

    passed: bool
    expr: str
    lhs: str
    rhs: str
    type: ComparisonType
    op: Operator


@dataclass
class Expression:
    """A parsed comparison expression."""

    type: ComparisonType
    cmp: Comparator
    rhs: float
    expr: str = ""

    def __str__(self) -> str:
        return self.expr

    def evaluate_success(self, success: int, total: int) -> Result:
        """Compare a success count (or rate, for percentages) with the right hand side."""
        if self.type is ComparisonType.PERCENTAGE:
            if total == 0:
                raise ValueError("cannot evaluate success rate if total is 0")
            lhs = float(success) / float(total) * 100
            suffix = "%"
        elif self.type is ComparisonType.VALUE:
            lhs = float(success)
            suffix = ""
        else:
            raise ValueError(f"unknown comparison type: {self.type}")

        passed = self.cmp.compare(lhs, self.rhs)
        op = self.cmp.operator
        lhs_text = f"{lhs:.2f}{suffix}"
        rhs_text = f"{self.rhs:.2f}{suffix}"
        if passed:
            expr = f"{lhs_text} {op.value} {rhs_text}"
        else:
            expr = f"{lhs_text} is not {op.value} {rhs_text}"
        return Result(
            passed=passed,
            expr=expr,
            lhs=lhs_text,
            rhs=rhs_text,
            type=self.type,
            op=op,
        )


_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _parse_float(text: str) -> float:
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(f"value out of range: {text!r}")
    return value


_COMPARATORS: tuple[Comparator, ...] = (Ge(), Le(), Lt(), Gt(), Eq())


def parse_expression(expression: str) -> Expression:
    """Parse a string such as ``">=50"`` or ``"<10%"`` into an Expression."""
    for cmp in _COMPARATORS:
        op = cmp.operator.value
        if not expression.startswith(op):
            continue
        trimmed = expression.strip(op)
        if trimmed.endswith("%"):
            try:
                rhs = _parse_float(trimmed.rstrip("%"))
            except ValueError as exc:
                raise ValueError(
                    f"could not extract percentage from expression: {exc}"
                ) from exc
            return Expression(ComparisonType.PERCENTAGE, cmp, rhs, expression)
        try:
            rhs = _parse_float(trimmed)
        except ValueError as exc:
            raise ValueError(
                f"could not extract right hand side of the expression: {exc}"
            ) from exc
        return Expression(ComparisonType.VALUE, cmp, rhs, expression)
    raise ValueError(f"expression {expression} not supported")