# -----------------------------------------------------------------------------
#  space.py
#  Fundamental-domain containers in complex hyperbolic space
# -----------------------------------------------------------------------------
"""
A HyperbolicSpace describes a box in Heisenberg coordinates: one complex
region per zeta coordinate, an interval for the real coordinate r and an
interval for the height. The enumeration engine only reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from cuspgen.field import NumberField
from cuspgen.geometry import ComplexRegion, RealInterval
from cuspgen.utility import UserInputError

HEEGNER = (-1, -2, -3, -7, -11, -19, -43, -67, -163)
MIN_DIMENSION = 2
MAX_DIMENSION = 8


@dataclass(frozen=True)
class HyperbolicSpace:
    zeta: tuple[ComplexRegion, ...]
    r: RealInterval
    height: RealInterval

    @property
    def dimension(self) -> int:
        return len(self.zeta) + 1

    def with_height(self, lower: float, upper: float | None = None) -> HyperbolicSpace:
        hi = self.height.upper if upper is None else upper
        return replace(self, height=RealInterval(lower, hi))


def make_siegel(field: NumberField, dimension: int) -> HyperbolicSpace:
    """Siegel set for SU(dimension, 1; O) over the given field, height [0, 2]."""
    g = field.generator
    sq = field.sqrt_generator
    n = dimension - 1
    if n < 1:
        raise UserInputError(f"dimension must be at least {MIN_DIMENSION}, got {dimension}")

    r = RealInterval(-sq / 2, sq / 2)
    height = RealInterval(0.0, 2.0)
    box = ComplexRegion.from_bounds

    if g == -1:
        zeta = [box(-1.0, 1.0, 0.0, 0.5)]
        if n == 2:
            zeta.append(box(-0.5, 0.5, 0.0, 0.5))
        elif n > 2:
            zeta.append(box(-0.5, 0.5, -0.5, 0.5))
            zeta += [box(0.0, 0.5, 0.0, 0.5)] * (n - 2)
    elif field.is_congruent:
        if n == 1:
            zeta = [box(-0.5, 0.5, 0.0, sq / 4)]
        elif g == -3:
            zeta = [box(-0.5, 0.5, -sq / 4, sq / 4)]
            zeta += [box(0.0, 0.5, 0.0, sq / 4)] * (n - 1)
        else:
            zeta = [box(-0.5, 0.5, 0.0, sq / 4)] * n
    else:
        zeta = [box(-1.0, 1.0, 0.0, sq / 2)]
        if n == 2:
            zeta.append(box(-0.5, 0.5, -sq / 2, sq / 2))
        else:
            zeta += [box(-0.5, 0.5, 0.0, sq / 2)] * (n - 1)

    return HyperbolicSpace(tuple(zeta), r, height)


# --- Input validation --------------------------------------------------------


def validate_generator(generator: int) -> int:
    if generator not in HEEGNER:
        raise UserInputError(f"generator {generator} is not one of {HEEGNER}")
    return generator


def validate_dimension(dimension: int) -> int:
    if not MIN_DIMENSION <= dimension <= MAX_DIMENSION:
        raise UserInputError(f"dimension must lie in [{MIN_DIMENSION}, {MAX_DIMENSION}], got {dimension}")
    return dimension


def validate_height(height: float) -> float:
    if not 0.0 < height < 2.0:
        raise UserInputError(f"height must lie in (0, 2), got {height}")
    return float(height)
