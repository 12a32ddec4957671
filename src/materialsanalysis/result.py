"""
Calculation Results
===================
Tagged result values returned by every calculator.

A calculation either succeeds with ``Ok(value)`` or fails with
``Err(kind, message)``. Numeric problems (division by zero, a logarithm of a
negative number, an invalid crack ratio, ...) never escape as exceptions or
as silent ``nan``/``inf`` values; callers check ``result.ok`` and render the
value or an error state.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(StrEnum):
    DOMAIN = "domain"
    INVALID_MEAN_STRESS_RATIO = "invalid mean stress ratio"
    INVALID_CRACK_RATIO = "invalid a/W"
    SINGULAR_SYSTEM = "singular system"
    INSUFFICIENT_DATA = "insufficient data"
    MISSING_INPUT = "missing input"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def display(self, fmt: str = "{:.2f}") -> str:
        return fmt.format(self.value)


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str = ""

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise ValueError(f"{self.kind}: {self.message}" if self.message else str(self.kind))

    def display(self, fmt: str = "{:.2f}") -> str:
        return "Error"


Result = Union[Ok[T], Err]


def checked(value: float, message: str = "Result is not a finite number") -> Result[float]:
    """Wrap a computed float, turning ``nan``/``inf`` into a domain error."""
    if not math.isfinite(value):
        return Err(ErrorKind.DOMAIN, message)
    return Ok(float(value))
