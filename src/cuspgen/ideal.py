# -----------------------------------------------------------------------------
#  ideal.py
#  Ideals of the ring of integers and their class invariant
# -----------------------------------------------------------------------------
"""
An ideal is kept in Hermite normal form aZ + (b + c*omega)Z with 0 <= b < a,
omega = (D + sqrt(D))/2 and norm a*c. Its class is decided by comparing the
reduced binary quadratic forms attached to the ideals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from math import gcd, lcm

from cuspgen.field import NumberField
from cuspgen.iqnumber import IQNumber
from cuspgen.utility import gcdext, tdiv


@dataclass(frozen=True)
class QuadraticForm:
    cXX: int = 0
    cXY: int = 0
    cYY: int = 0

    @property
    def discriminant(self) -> int:
        return self.cXY * self.cXY - 4 * self.cXX * self.cYY

    def reduce(self) -> QuadraticForm:
        """Reduced positive definite form: |cXY| <= cXX <= cYY, cXY >= 0 on ties."""
        a, b, c = self.cXX, self.cXY, self.cYY
        if a == 0:
            return self

        def normalize() -> bool:
            nonlocal a, b, c
            if a > c:
                a, b, c = c, -b, a
                return True
            if a == c and b < 0:
                b = -b
            return False

        if -a < b <= a and not normalize():
            return QuadraticForm(a, b, c)

        while True:
            q = tdiv(b, 2 * a)
            r = b - q * 2 * a
            if r <= -a:
                r += 2 * a
                q -= 1
            elif r > a:
                r -= 2 * a
                q += 1
            c -= (b + r) * q // 2
            b = r
            if not normalize():
                break
        return QuadraticForm(a, b, c)

    def __str__(self) -> str:
        return f"[{self.cXX},{self.cXY},{self.cYY}]"


@dataclass(frozen=True)
class Ideal:
    a: int
    b: int
    c: int
    norm: int
    field: NumberField = field(compare=False, repr=False)

    # --- construction ---------------------------------------------------------

    @classmethod
    def zero(cls, fld: NumberField) -> Ideal:
        return cls(0, 0, 0, 0, fld)

    @classmethod
    def maximal_order(cls, fld: NumberField) -> Ideal:
        return cls(1, 0, 1, 1, fld)

    @classmethod
    def principal(cls, x: IQNumber) -> Ideal:
        fld = x.field
        if x.is_zero():
            return cls.zero(fld)

        norm = x.norm()
        alpha, beta = x.canonical()
        # a is the smallest positive integer in the ideal
        c = gcd(alpha, beta)
        a = norm // c
        _, s, t = gcdext(beta, alpha + fld.discriminant * beta)
        b = (alpha * s + fld.mfactor * beta * t) % a
        return cls(a, b, c, norm, fld)

    # --- predicates -----------------------------------------------------------

    def is_zero(self) -> bool:
        return self.a == 0 and self.c == 0

    def is_maximal_order(self) -> bool:
        return self.norm == 1

    def is_principal(self) -> bool:
        return self.same_class(Ideal.maximal_order(self.field))

    def same_class(self, other: Ideal) -> bool:
        return self.form == other.form

    # --- generators -----------------------------------------------------------

    def first_generator(self) -> IQNumber:
        return IQNumber.from_canonical(self.field, self.a, 0)

    def second_generator(self) -> IQNumber:
        n = IQNumber.from_canonical(self.field, self.b, self.c)
        return IQNumber(n.re % self.a, n.im, self.field) if self.a else n

    # --- arithmetic -----------------------------------------------------------

    def __add__(self, rhs: Ideal) -> Ideal:
        """The ideal generated by both summands."""
        if self.is_maximal_order() or rhs.is_zero():
            return self
        if self.is_zero() or rhs.is_maximal_order():
            return rhs

        m = lcm(self.c, rhs.c)
        a = gcd(self.a, rhs.a)
        a = gcd(a, self.b * (m // self.c) - rhs.b * (m // rhs.c))
        c, s, t = gcdext(self.c, rhs.c)
        b = s * self.b + t * rhs.b

        # smallest integer in the ideal generated by b + c*omega
        w = IQNumber.from_canonical(self.field, b, c)
        a = gcd(a, w.norm() // gcd(b, c))
        b %= a
        return Ideal(a, b, c, a * c, self.field)

    def __mul__(self, rhs: Ideal) -> Ideal:
        if self.is_zero() or rhs.is_maximal_order():
            return self
        if self.is_maximal_order() or rhs.is_zero():
            return rhs

        disc, mfactor = self.field.discriminant, self.field.mfactor
        gw1 = self.a * rhs.c
        gw2 = rhs.a * self.c
        gw3 = self.c * rhs.b + rhs.c * self.b + disc * rhs.c * self.c
        g, v1, v2 = gcdext(gw1, gw2)
        c, s, t = gcdext(g, gw3)
        v1, v2 = v1 * s, v2 * s

        gu1 = self.a * rhs.b
        gu2 = rhs.a * self.b
        gu3 = self.b * rhs.b + mfactor * rhs.c * self.c
        norm = self.norm * rhs.norm
        a = norm // c
        b = (v1 * gu1 + v2 * gu2 + t * gu3) % a
        return Ideal(a, b, c, norm, self.field)

    # --- class invariant ------------------------------------------------------

    @cached_property
    def form(self) -> QuadraticForm:
        if self.is_zero():
            return QuadraticForm()
        w1 = IQNumber.from_canonical(self.field, self.a, 0)
        w2 = IQNumber.from_canonical(self.field, self.b, self.c)
        cxy = -(w1 * w2.conj()).re
        if not self.field.is_congruent:
            cxy *= 2
        return QuadraticForm(
            w1.norm() // self.norm,
            cxy // self.norm,
            w2.norm() // self.norm,
        ).reduce()

    def __str__(self) -> str:
        return f"({self.a},{self.b},{self.c})"
