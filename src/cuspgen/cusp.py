# -----------------------------------------------------------------------------
#  cusp.py
#  Cusps of SU(n,1;O) and their projection to Heisenberg coordinates
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cuspgen.field import NumberField
from cuspgen.ideal import Ideal
from cuspgen.iqnumber import IQNumber
from cuspgen.utility import tdiv


@dataclass(frozen=True)
class HeisenbergPoint:
    zeta: tuple[complex, ...]
    r: float
    height: float = 0.0

    @property
    def dependent(self) -> complex:
        """-(|zeta|^2 + height)/2 + i*r."""
        qf = sum(z.real * z.real + z.imag * z.imag for z in self.zeta)
        return complex(-0.5 * (qf + self.height), self.r)


@dataclass(frozen=True)
class Cusp:
    dilation: int
    rotation: IQNumber
    zeta: tuple[IQNumber, ...]
    r: int
    final: IQNumber
    point: HeisenbergPoint
    threshold: float
    ideal: Ideal

    def inner_qf(self) -> int:
        return sum(z.norm() for z in self.zeta)

    def integral(self) -> tuple[IQNumber, ...]:
        """Integral coordinates (rotation, zeta..., final)."""
        return (self.rotation, *self.zeta, self.final)

    @property
    def key(self) -> tuple:
        return self.dilation, self.rotation, self.zeta, self.r

    @property
    def is_primitive(self) -> bool:
        return self.ideal.is_maximal_order()

    def __str__(self) -> str:
        zs = ", ".join(str(z) for z in self.zeta)
        return f"Δ={self.dilation} rot={self.rotation} ζ=[{zs}] r={self.r}"


def build_cusp(
    field: NumberField,
    dilation: int,
    rotation: IQNumber,
    zeta: Sequence[IQNumber],
    r: int,
) -> Cusp:
    zeta = tuple(zeta)
    qf = sum(z.norm() for z in zeta)

    final = IQNumber(-qf, r, field)
    if not field.is_congruent:
        final = IQNumber(tdiv(final.re, 2), final.im, field)
    final = final * rotation
    final = IQNumber(tdiv(final.re, dilation), tdiv(final.im, dilation), field)

    proj = 1 / rotation.to_complex()
    r_real = r * field.sqrt_generator / dilation
    if field.is_congruent:
        r_real *= 0.5
    point = HeisenbergPoint(tuple(z.to_complex() * proj for z in zeta), r_real)

    ideal = Ideal.principal(rotation)
    for z in zeta:
        ideal = ideal + Ideal.principal(z)
    ideal = ideal + Ideal.principal(final)

    return Cusp(
        dilation=dilation,
        rotation=rotation,
        zeta=zeta,
        r=r,
        final=final,
        point=point,
        threshold=1.0 / dilation,
        ideal=ideal,
    )
