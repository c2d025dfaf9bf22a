# -----------------------------------------------------------------------------
#  congruence.py
#  Linear congruences c1*X = c0 (mod m) and systems of them
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from cuspgen.utility import ConfigurationError, gcdext


@dataclass(frozen=True)
class CongruenceEquation:
    c1: int
    c0: int
    m: int

    def __post_init__(self) -> None:
        if self.m <= 0:
            raise ConfigurationError(f"modulus must be positive, got {self.m}")

    def holds(self, x: int) -> bool:
        return (self.c1 * x - self.c0) % self.m == 0


@dataclass(frozen=True)
class CongruenceSolution:
    """All X = x0 + xN*n. xN == 0 means there is no solution."""
    x0: int = 0
    xN: int = 0

    def __bool__(self) -> bool:
        return self.xN != 0

    def values(self, start: int, count: int) -> range:
        """count members of the progression, beginning at x0 + start*xN."""
        first = self.x0 + start * self.xN
        return range(first, first + max(count, 0) * self.xN, self.xN)


NO_SOLUTION = CongruenceSolution()


def solve(c1: int, c0: int, m: int) -> CongruenceSolution:
    """Solve c1*X = c0 (mod m) for X."""
    if m <= 0:
        raise ConfigurationError(f"modulus must be positive, got {m}")
    g, s, _ = gcdext(c1, m)
    if c0 % g != 0:
        return NO_SOLUTION
    xN = m // g
    return CongruenceSolution((s * (c0 // g)) % xN, xN)


def solve_system(equations: Iterable[CongruenceEquation]) -> CongruenceSolution:
    """
    Simultaneous solution by successive substitution: with X = x0 + xN*n the
    next equation becomes (c1*xN)*n = c0 - c1*x0 (mod m).
    """
    it = iter(equations)
    first = next(it, None)
    if first is None:
        return NO_SOLUTION

    sol = solve(first.c1, first.c0, first.m)
    x0, xN = sol.x0, sol.xN
    for eq in it:
        if xN == 0:
            return NO_SOLUTION
        cur = solve(eq.c1 * xN, eq.c0 - eq.c1 * x0, eq.m)
        if not cur:
            return NO_SOLUTION
        x0 += xN * cur.x0
        xN *= cur.xN

    return CongruenceSolution(x0, xN)


class CongruenceSystem:
    def __init__(self, equations: Iterable[CongruenceEquation] = ()):
        self.equations: list[CongruenceEquation] = list(equations)

    def add_equation(self, c1: int, c0: int, m: int) -> None:
        self.equations.append(CongruenceEquation(c1, c0, m))

    def remove_equation(self) -> CongruenceEquation:
        return self.equations.pop()

    def clear(self) -> None:
        self.equations.clear()

    def empty(self) -> bool:
        return not self.equations

    def __len__(self) -> int:
        return len(self.equations)

    def __iter__(self) -> Iterator[CongruenceEquation]:
        return iter(self.equations)

    def solve(self) -> CongruenceSolution:
        return solve_system(self.equations)

    def validate(self, solution: CongruenceSolution) -> bool:
        """A non-empty solution must satisfy every equation at x0 and x0 + xN."""
        if not solution:
            return True
        return all(
            eq.holds(solution.x0) and eq.holds(solution.x0 + solution.xN)
            for eq in self.equations
        )
