# -----------------------------------------------------------------------------
#  iqnumber.py
#  Elements of the ring of integers of an imaginary quadratic field
# -----------------------------------------------------------------------------
"""
An element is stored as two integers (re, im). Its value is re + im*sqrt(g),
or (re + im*sqrt(g))/2 when g = 1 mod 4; re and im then have equal parity.

The canonical form writes the same element as alpha + beta*omega with
omega = (D + sqrt(D))/2, which is what the ideal code works with.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cuspgen.field import NumberField
from cuspgen.utility import tdiv


@dataclass(frozen=True, order=True)
class IQNumber:
    re: int
    im: int
    field: NumberField = field(compare=False, repr=False)

    # --- construction ---------------------------------------------------------

    @classmethod
    def zero(cls, fld: NumberField) -> IQNumber:
        return cls(0, 0, fld)

    @classmethod
    def one(cls, fld: NumberField) -> IQNumber:
        return cls(*fld.one, fld)

    @classmethod
    def from_canonical(cls, fld: NumberField, alpha: int, beta: int) -> IQNumber:
        if fld.is_congruent:
            return cls(2 * alpha + fld.generator * beta, beta, fld)
        return cls(alpha + 2 * fld.generator * beta, beta, fld)

    def canonical(self) -> tuple[int, int]:
        g = self.field.generator
        if self.field.is_congruent:
            return (self.re - self.im * g) // 2, self.im
        return self.re - 2 * g * self.im, self.im

    # --- values ---------------------------------------------------------------

    def to_complex(self) -> complex:
        z = complex(self.re, self.im * self.field.sqrt_generator)
        return z / 2 if self.field.is_congruent else z

    def norm(self) -> int:
        n = self.re * self.re - self.field.generator * self.im * self.im
        return n // 4 if self.field.is_congruent else n

    def conj(self) -> IQNumber:
        return IQNumber(self.re, -self.im, self.field)

    def is_zero(self) -> bool:
        return self.re == 0 and self.im == 0

    # --- arithmetic -----------------------------------------------------------

    def __add__(self, other: IQNumber) -> IQNumber:
        return IQNumber(self.re + other.re, self.im + other.im, self.field)

    def __sub__(self, other: IQNumber) -> IQNumber:
        return IQNumber(self.re - other.re, self.im - other.im, self.field)

    def __neg__(self) -> IQNumber:
        return IQNumber(-self.re, -self.im, self.field)

    def __mul__(self, other: IQNumber) -> IQNumber:
        re = self.re * other.re + self.im * other.im * self.field.generator
        im = self.im * other.re + self.re * other.im
        if self.field.is_congruent:
            re, im = tdiv(re, 2), tdiv(im, 2)
        return IQNumber(re, im, self.field)

    def __str__(self) -> str:
        sign = "-" if self.im < 0 else "+"
        s = f"{self.re}{sign}{abs(self.im)}*sqrt({self.field.generator})"
        return f"({s})/2" if self.field.is_congruent else s
