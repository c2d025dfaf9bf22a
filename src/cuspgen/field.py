# -----------------------------------------------------------------------------
#  field.py
#  Imaginary quadratic number fields Q(sqrt(g))
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from math import sqrt

from cuspgen.utility import ConfigurationError, is_squarefree

SQRT3 = 1.732050807568877


def _class_number(discriminant: int) -> int:
    """Count reduced forms of the given discriminant (Cohen, Algorithm 5.3.5)."""
    h = 1
    b = 0 if discriminant % 2 == 0 else 1
    bound = sqrt(-discriminant) / SQRT3

    while b <= bound:
        q = (b * b - discriminant) // 4  # = a*c
        a = max(b, 1)
        while a * a <= q:
            # a == 1 is the principal form, already counted
            if a != 1 and q % a == 0:
                h += 1 if (a == b or a * a == q or b == 0) else 2
            a += 1
        b += 2
    return h


def _unit_group(generator: int, congruent: bool) -> tuple[tuple[int, int], ...]:
    # (re, im) pairs in the storage convention of IQNumber
    if generator == -1:
        return ((1, 0), (-1, 0), (0, 1), (0, -1))
    if generator == -3:
        return ((2, 0), (-2, 0), (1, 1), (-1, 1), (1, -1), (-1, -1))
    if congruent:
        return ((2, 0), (-2, 0))
    return ((1, 0), (-1, 0))


@dataclass(frozen=True)
class NumberField:
    generator: int
    discriminant: int
    is_congruent: bool
    class_number: int
    sqrt_generator: float
    mfactor: int
    units: tuple[tuple[int, int], ...]

    @classmethod
    def from_generator(cls, generator: int = -1) -> NumberField:
        """
        Build Q(sqrt(g)). The field is imaginary, so a positive generator is
        negated. The generator must be squarefree.
        """
        g = generator if generator < 0 else -generator
        if g == 0 or not is_squarefree(g):
            raise ConfigurationError(f"generator {generator} is not a non-zero squarefree integer")

        congruent = g % 4 == 1
        disc = g if congruent else 4 * g
        return cls(
            generator=g,
            discriminant=disc,
            is_congruent=congruent,
            class_number=_class_number(disc),
            sqrt_generator=sqrt(-g),
            mfactor=(disc - disc * disc) // 4,
            units=_unit_group(g, congruent),
        )

    @property
    def is_ufd(self) -> bool:
        return self.class_number == 1

    @property
    def one(self) -> tuple[int, int]:
        return (2, 0) if self.is_congruent else (1, 0)

    def __str__(self) -> str:
        return f"[{self.generator},{self.discriminant},{self.class_number}]"


# --- Slots -------------------------------------------------------------------
# Independent fields can be active at the same time under different slots.

_FIELDS: dict[int, NumberField] = {}


def initialize(generator: int = -1, slot: int = 0) -> NumberField:
    fld = NumberField.from_generator(generator)
    _FIELDS[slot] = fld
    return fld


def instance(slot: int = 0) -> NumberField:
    try:
        return _FIELDS[slot]
    except KeyError:
        raise ConfigurationError(f"no number field initialized in slot {slot}") from None
