# -----------------------------------------------------------------------------
#  engine.py
#  Cusp candidate enumeration
# -----------------------------------------------------------------------------
"""
Cusp candidates are produced by four nested loops, outermost first:

    DILATION   Δ = 1, 2, ... up to a ceiling set by the minimum height
    ROTATION   ring elements of norm Δ, one per unit class
    ZETA       zeta vectors accepted by the bounded lattice enumerator
    R          the integers r solving the congruence system of (rotation, zeta)

The loops are driven by one dispatcher: when a level runs dry control passes
to the level above it, and when a level produces a value the levels below it
are restarted. Each call to the engine advances to the next admissible cusp.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum, auto

from cuspgen.congruence import NO_SOLUTION, CongruenceSolution, CongruenceSystem
from cuspgen.cusp import Cusp, build_cusp
from cuspgen.field import NumberField
from cuspgen.iqnumber import IQNumber
from cuspgen.lattice import ZetaLattice
from cuspgen.space import HyperbolicSpace
from cuspgen.utility import (
    ConfigurationError,
    EngineFinishedError,
    ceil_tol,
    floor_tol,
    is_square,
    is_zero,
    isqrt,
)


class Level(Enum):
    R = auto()
    ZETA = auto()
    ROTATION = auto()
    DILATION = auto()


def dilation_ceiling(height: float) -> int:
    """Largest Δ whose cusps can reach down to the given height."""
    return floor_tol((2.0 / height) ** 2)


class CuspEngine:
    def __init__(self, field: NumberField, space: HyperbolicSpace | None = None):
        self.field = field
        self.space: HyperbolicSpace | None = None
        self.lattice: ZetaLattice | None = None

        self.dilation = 0
        self.max_dilation = 0
        self.rotations: list[IQNumber] = []
        self.rotation: IQNumber | None = None
        self.zeta: tuple[IQNumber, ...] = ()
        self.solution: CongruenceSolution = NO_SOLUTION
        self.bound_min = 0.0
        self.bound_max = 0.0

        # r coefficients of the current rotation
        self._c10 = 0
        self._c11 = 0
        self._zeta_mod = complex(1.0, 0.0)

        self._rotation_iter: Iterator[IQNumber] = iter(())
        self._r_values: Iterator[int] = iter(())
        self._level = Level.DILATION
        self._candidate: Cusp | None = None
        self._cusp: Cusp | None = None
        self._finished = True

        if space is not None:
            self.bind_space(space)

    # --- public API -----------------------------------------------------------

    def bind_space(self, space: HyperbolicSpace) -> None:
        self.space = space
        self.lattice = ZetaLattice(self.field, space.zeta)
        self._finished = True

    def initialize(self, start_dilation: int = 1) -> None:
        """Rewind to start_dilation. The next call yields the first admissible cusp."""
        if self.space is None or self.lattice is None:
            raise ConfigurationError("no space bound to the engine")
        if start_dilation < 1:
            raise ConfigurationError(f"start dilation must be at least 1, got {start_dilation}")
        height = self.space.height.lower
        if height < 0 or is_zero(height):
            raise ConfigurationError(
                f"height lower bound must be positive, got {height}; the search would not terminate"
            )

        self.max_dilation = dilation_ceiling(height)
        self.lattice.set_space(self.space.zeta)
        self.dilation = start_dilation - 1
        self.rotations = []
        self._rotation_iter = iter(())
        self._r_values = iter(())
        self._level = Level.DILATION
        self._candidate = None
        self._cusp = None
        self._finished = start_dilation > self.max_dilation

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def cusp(self) -> Cusp | None:
        """The most recently returned cusp."""
        return self._cusp

    def admissible(self, cusp: Cusp) -> bool:
        # the maximal order is principal, so this is the norm-1 test in any field
        ideal = cusp.ideal
        return (self.field.is_ufd or ideal.is_principal()) and ideal.is_maximal_order()

    def __call__(self) -> Cusp | None:
        """Next admissible cusp, or None if the enumeration ends during this call."""
        if self._finished:
            raise EngineFinishedError("the cusp engine has finished; call initialize() to restart")
        while self._advance():
            if self.admissible(self._candidate):
                self._cusp = self._candidate
                return self._cusp
        return None

    def __iter__(self) -> Iterator[Cusp]:
        while not self._finished:
            cusp = self()
            if cusp is not None:
                yield cusp

    # --- dispatcher -----------------------------------------------------------

    def _advance(self) -> bool:
        level = self._level
        self._level = Level.R
        while True:
            if level is Level.R:
                r = next(self._r_values, None)
                if r is not None:
                    self._candidate = build_cusp(self.field, self.dilation, self.rotation, self.zeta, r)
                    return True
                level = Level.ZETA

            elif level is Level.ZETA:
                if self.lattice.next_valid():
                    self._post_zeta()
                    level = Level.R
                else:
                    level = Level.ROTATION

            elif level is Level.ROTATION:
                rotation = next(self._rotation_iter, None)
                if rotation is not None:
                    self._post_rotation(rotation)
                    level = Level.ZETA
                else:
                    level = Level.DILATION

            else:
                self.dilation += 1
                if self.dilation > self.max_dilation:
                    self._finished = True
                    return False
                self._post_dilation()
                level = Level.ROTATION

    # --- level set-up ---------------------------------------------------------

    def _units(self) -> list[IQNumber]:
        return [IQNumber(re, im, self.field) for re, im in self.field.units]

    def rotations_for(self, dilation: int) -> list[IQNumber]:
        """Elements of norm dilation, one per class of associates, ascending."""
        g = self.field.generator
        square = 4 * dilation if self.field.is_congruent else dilation

        found: set[IQNumber] = set()
        b = 0
        # square runs through target - |g|*b^2
        while square >= 0:
            if is_square(square):
                a = isqrt(square)
                found.add(IQNumber(a, b, self.field))
                found.add(IQNumber(a, -b, self.field))
            square += g * (2 * b + 1)
            b += 1

        units = self._units()
        kept: set[IQNumber] = set()
        for rotation in sorted(found):
            if not any(u * rotation in kept for u in units):
                kept.add(rotation)

        return sorted(kept)

    def _post_dilation(self) -> None:
        self.rotations = self.rotations_for(self.dilation)
        self._rotation_iter = iter(self.rotations)
        self.lattice.bound.dilation = self.dilation
        self.lattice.bound.height = self.space.height.lower

    def _post_rotation(self, rotation: IQNumber) -> None:
        self.rotation = rotation
        self._c10 = self.field.generator * rotation.im
        self._c11 = rotation.re
        z = rotation.to_complex()
        self._zeta_mod = z.conjugate()

        self.lattice.set_transform(z)
        self.lattice.initialize()
        self.lattice.begin()
        self.lattice.first_time()

    def _post_zeta(self) -> None:
        self.zeta = tuple(self.lattice.point)
        self._r_values = iter(())
        congruent = self.field.is_congruent
        delta = self.dilation

        qf = sum(z.norm() for z in self.zeta)
        if not congruent:
            if qf % 2:
                self.solution = NO_SOLUTION
                return
            qf //= 2

        c00 = self.rotation.re * qf
        c01 = self.rotation.im * qf
        system = CongruenceSystem()
        if congruent:
            system.add_equation(self._c10, c00, 2 * delta)
            system.add_equation(self._c11, c01, 2 * delta)
            system.add_equation(self._c10 + self._c11, c00 + c01, 4 * delta)
        else:
            system.add_equation(self._c10, c00, delta)
            system.add_equation(self._c11, c01, delta)

        self.solution = system.solve()
        if not self.solution:
            return

        self._compute_r_bound()
        x0, xN = self.solution.x0, self.solution.xN
        r_min = floor_tol((self.bound_min - abs(x0)) / xN)
        r_max = ceil_tol((self.bound_max + abs(x0)) / xN)
        self._r_values = iter(self.solution.values(r_min, r_max - r_min + 1))

    def _compute_r_bound(self) -> None:
        radius = self.lattice.bound.r_bound()
        delta = float(self.dilation)
        bound_max = radius + delta * self.space.r.upper
        bound_min = -radius + delta * self.space.r.lower

        for z_int, region in zip(self.zeta, self.space.zeta):
            z = z_int.to_complex() * self._zeta_mod
            values = [z.real * c.imag - z.imag * c.real for c in region.corners()]
            bound_max += max(values)
            bound_min += min(values)

        scale = 1.0 / self.field.sqrt_generator
        if self.field.is_congruent:
            scale *= 2.0
        self.bound_min = bound_min * scale
        self.bound_max = bound_max * scale
