# -----------------------------------------------------------------------------
#  geometry.py
#  Real intervals and axis-aligned complex regions
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass

from cuspgen.utility import is_less_equal


@dataclass(frozen=True)
class RealInterval:
    lower: float = 0.0
    upper: float = 0.0

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            lo, hi = self.upper, self.lower
            object.__setattr__(self, "lower", lo)
            object.__setattr__(self, "upper", hi)

    def closest(self, value: float) -> float:
        return min(max(value, self.lower), self.upper)

    def distance(self, value: float) -> float:
        return abs(value - self.closest(value))

    def extend(self, amount: float) -> RealInterval:
        return RealInterval(self.lower - amount, self.upper + amount)

    def __truediv__(self, scalar: float) -> RealInterval:
        return RealInterval(self.lower / scalar, self.upper / scalar)

    # --- containment, with tolerance ------------------------------------------

    def contains(self, value: float) -> bool:
        return is_less_equal(self.lower, value) and is_less_equal(value, self.upper)


@dataclass(frozen=True)
class ComplexRegion:
    real: RealInterval = RealInterval()
    imag: RealInterval = RealInterval()

    @classmethod
    def from_bounds(cls, re_lo: float, re_hi: float, im_lo: float, im_hi: float) -> ComplexRegion:
        return cls(RealInterval(re_lo, re_hi), RealInterval(im_lo, im_hi))

    @classmethod
    def bounding(cls, points) -> ComplexRegion:
        pts = list(points)
        return cls(
            RealInterval(min(p.real for p in pts), max(p.real for p in pts)),
            RealInterval(min(p.imag for p in pts), max(p.imag for p in pts)),
        )

    def corners(self) -> tuple[complex, complex, complex, complex]:
        """Bottom-left, bottom-right, top-left, top-right."""
        rl, ru = self.real.lower, self.real.upper
        il, iu = self.imag.lower, self.imag.upper
        return complex(rl, il), complex(ru, il), complex(rl, iu), complex(ru, iu)

    def closest(self, value: complex) -> complex:
        return complex(self.real.closest(value.real), self.imag.closest(value.imag))

    def distance(self, value: complex) -> float:
        return abs(value - self.closest(value))

    def contains(self, value: complex) -> bool:
        return self.real.contains(value.real) and self.imag.contains(value.imag)

    def extend(self, amount: float) -> ComplexRegion:
        return ComplexRegion(self.real.extend(amount), self.imag.extend(amount))

    def transform_contain(self, transform: complex) -> ComplexRegion:
        """Smallest region containing the image of this one under z -> z*transform."""
        return ComplexRegion.bounding(c * transform for c in self.corners())
