# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import math

import gmpy2
from sympy import factorint

from cuspgen.runtime import current as _rt_current


class UserInputError(Exception):
    pass


class ConfigurationError(UserInputError):
    """A component was set up with inputs that break its contract."""


class EngineFinishedError(RuntimeError):
    pass


# --- Float tolerance ---------------------------------------------------------


def zero_tolerance() -> float:
    return _rt_current().zero


def is_equal(lhs: float, rhs: float) -> bool:
    return abs(lhs - rhs) <= zero_tolerance()


def is_zero(value: float) -> bool:
    return abs(value) <= zero_tolerance()


def is_less(lhs: float, rhs: float) -> bool:
    return lhs < rhs and not is_equal(lhs, rhs)


def is_less_equal(lhs: float, rhs: float) -> bool:
    return lhs < rhs or is_equal(lhs, rhs)


def is_greater_equal(lhs: float, rhs: float) -> bool:
    return lhs > rhs or is_equal(lhs, rhs)


def ceil_tol(value: float) -> int:
    """Ceiling that treats values within tolerance of an integer as that integer."""
    return math.ceil(value - zero_tolerance())


def floor_tol(value: float) -> int:
    return math.floor(value + zero_tolerance())


# --- Integer helpers ---------------------------------------------------------


def gcdext(a: int, b: int) -> tuple[int, int, int]:
    """Return (g, s, t) with a*s + b*t == g >= 0."""
    g, s, t = gmpy2.gcdext(a, b)
    return int(g), int(s), int(t)


def is_square(n: int) -> bool:
    return n >= 0 and bool(gmpy2.is_square(n))


def isqrt(n: int) -> int:
    return int(gmpy2.isqrt(n))


def tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def is_squarefree(n: int) -> bool:
    if n == 0:
        return False
    return all(e == 1 for e in factorint(abs(n)).values())
