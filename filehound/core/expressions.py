# filehound/core/expressions.py
"""
Parses human-readable comparison expressions such as "<10kb" or "< 2 days"
into boundary predicates over a measured value.

Size expressions compare a byte count. Date expressions compare the age of a
timestamp in seconds, so "< 2 days" reads as "less than two days old".
"""
import operator
import re
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

import structlog

from filehound.exceptions import InvalidExpressionError

log = structlog.get_logger(__name__)

_EXPRESSION_RE = re.compile(r"^\s*(<=|>=|==|=|<|>)?\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")

_OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "=": operator.eq,
}

SIZE_UNITS: Dict[str, int] = {
    "": 1,
    "b": 1,
    "byte": 1,
    "bytes": 1,
    "kb": 1024,
    "k": 1024,
    "mb": 1024 ** 2,
    "m": 1024 ** 2,
    "gb": 1024 ** 3,
    "g": 1024 ** 3,
    "tb": 1024 ** 4,
    "t": 1024 ** 4,
}

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

DATE_UNITS: Dict[str, int] = {
    "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "min": _MINUTE, "mins": _MINUTE, "minute": _MINUTE, "minutes": _MINUTE,
    "h": _HOUR, "hr": _HOUR, "hrs": _HOUR, "hour": _HOUR, "hours": _HOUR,
    "d": _DAY, "day": _DAY, "days": _DAY,
    "w": 7 * _DAY, "week": 7 * _DAY, "weeks": 7 * _DAY,
    "month": 30 * _DAY, "months": 30 * _DAY,
    "y": 365 * _DAY, "year": 365 * _DAY, "years": 365 * _DAY,
}


@dataclass(frozen=True)
class Comparison:
    """A parsed boundary: `value <op> threshold`."""

    expression: str
    operator_symbol: str
    threshold: float

    def matches(self, value: float) -> bool:
        return _OPERATORS[self.operator_symbol](value, self.threshold)

    def __call__(self, value: float) -> bool:
        return self.matches(value)


def _parse(expression: str, units: Dict[str, int], kind: str, default_unit: Optional[str]) -> Comparison:
    match = _EXPRESSION_RE.match(expression)
    if not match:
        raise InvalidExpressionError(f"invalid {kind} expression: {expression!r}")

    op_symbol, number, unit = match.groups()
    unit = unit.lower()
    if not unit and default_unit is None:
        raise InvalidExpressionError(f"{kind} expression {expression!r} is missing a unit")
    multiplier = units.get(unit or default_unit or "")
    if multiplier is None:
        raise InvalidExpressionError(f"unknown {kind} unit {unit!r} in expression {expression!r}")

    comparison = Comparison(
        expression=expression,
        operator_symbol=op_symbol or "==",
        threshold=float(number) * multiplier,
    )
    log.debug("expression_parsed", kind=kind, expression=expression, threshold=comparison.threshold)
    return comparison


def parse_size_expression(expression: Union[str, int]) -> Comparison:
    # "<10kb", ">= 2 mb", "0" or a plain integer byte count.
    if isinstance(expression, bool) or not isinstance(expression, (str, int)):
        raise InvalidExpressionError(f"size expression must be a string or int, got {type(expression).__name__}")
    return _parse(str(expression), SIZE_UNITS, "size", default_unit="")


def parse_date_expression(expression: str) -> Comparison:
    # "< 2 days", "> 10 minutes"; compared against the age of a timestamp.
    if not isinstance(expression, str):
        raise InvalidExpressionError(f"date expression must be a string, got {type(expression).__name__}")
    return _parse(expression, DATE_UNITS, "date", default_unit=None)


def age_in_seconds(timestamp: float, now: Optional[float] = None) -> float:
    return (time.time() if now is None else now) - timestamp
