# -----------------------------------------------------------------------------
#  lattice.py
#  Bounded enumeration of ring points near the zeta regions
# -----------------------------------------------------------------------------
"""
Lattice enumeration for the zeta coordinates of a cusp.

Every zeta coordinate has a RegionLattice: the ring points lying in the
bounding box of its region, grown by a radius and mapped through the current
rotation. The ZetaLattice walks the product of these in mixed-radix order
(coordinate 0 fastest) and, after every settled coordinate, shrinks the
radius of all faster coordinates using the LatticeBound. The bound is what
keeps the walk finite and small.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from math import prod, sqrt

from cuspgen.field import NumberField
from cuspgen.geometry import ComplexRegion, RealInterval
from cuspgen.iqnumber import IQNumber
from cuspgen.utility import (
    ConfigurationError,
    ceil_tol,
    floor_tol,
    is_equal,
    is_greater_equal,
    is_less,
)

# --- One real axis -----------------------------------------------------------


class IntervalLattice:
    """Multiples of a stride lying inside a closed interval, indexed from start."""

    def __init__(self, interval: RealInterval = RealInterval(), stride: float = 1.0):
        self.interval = interval
        self.stride = stride
        self.start = 0
        self.stop = 0
        self.size = 0
        self.initialize()

    def set(self, interval: RealInterval, stride: float | None = None) -> None:
        self.interval = interval
        if stride is not None:
            self.stride = stride
        self.initialize()

    def initialize(self) -> None:
        if self.stride <= 0:
            raise ConfigurationError(f"stride must be positive, got {self.stride}")
        scaled = self.interval / self.stride
        self.start = ceil_tol(scaled.lower)
        self.stop = floor_tol(scaled.upper) + 1
        self.size = max(self.stop - self.start, 0)
        if self.size == 0:
            self.stop = self.start

    def empty(self) -> bool:
        return self.size == 0

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, loc: int) -> int:
        return self.start + loc

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.stop))

    def __reversed__(self) -> Iterator[int]:
        return reversed(range(self.start, self.stop))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalLattice):
            return NotImplemented
        return (
            is_equal(self.interval.lower, other.interval.lower)
            and is_equal(self.interval.upper, other.interval.upper)
            and is_equal(self.stride, other.stride)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"IntervalLattice(start={self.start}, stop={self.stop}, stride={self.stride})"


# --- One complex coordinate --------------------------------------------------


def _even(n: int) -> bool:
    return n % 2 == 0


class RegionLattice:
    """
    Ring points near one zeta region, in rotated coordinates.

    For a congruent field only points with re = im (mod 2) belong to the
    ring, so start, stop, size and the stepping rules skip the rest.
    """

    def __init__(self, field: NumberField, original: ComplexRegion | None = None):
        self.field = field
        self.original = original or ComplexRegion()
        self.bound = 0.0
        self.transform = complex(1.0, 0.0)
        half = 0.5 if field.is_congruent else 1.0
        self.real = IntervalLattice(RealInterval(), half)
        self.imag = IntervalLattice(RealInterval(), half * field.sqrt_generator)
        self.size = 0
        self.start = IQNumber.zero(field)
        self.stop = IQNumber.zero(field)

    @property
    def inv_transform(self) -> complex:
        return 1 / self.transform

    def initialize(self) -> None:
        region = self.original.extend(self.bound).transform_contain(self.transform)
        self.real.set(region.real)
        self.imag.set(region.imag)
        self._compute_size()
        self._compute_start()
        self._compute_stop()

    def _parity_matches(self, re: int, im: int) -> bool:
        return _even(re) == _even(im)

    def _compute_size(self) -> None:
        size = self.real.size * self.imag.size
        if self.field.is_congruent:
            both_odd = not _even(self.real.size) and not _even(self.imag.size)
            size //= 2
            if both_odd and self._parity_matches(self.real.start, self.imag.start):
                size += 1
        self.size = size

    def _compute_start(self) -> None:
        re, im = self.real.start, self.imag.start
        if self.field.is_congruent and not self._parity_matches(re, im):
            if self.real.size == 1:
                im += 1
            else:
                re += 1
        self.start = IQNumber(re, im, self.field)

    def _compute_stop(self) -> None:
        if self.size == 0:
            self.stop = self.start
            return
        re, im = self.real.start, self.imag[self.imag.size - 1] + 1
        if self.field.is_congruent and not self._parity_matches(re, im):
            if self.real.size == 1:
                im += 1
            else:
                re += 1
        self.stop = IQNumber(re, im, self.field)

    def empty(self) -> bool:
        return self.size == 0

    # --- stepping -------------------------------------------------------------

    def successor(self, p: IQNumber) -> IQNumber:
        re, im = p.re, p.im
        if self.field.is_congruent:
            re += 2
            if re >= self.real.stop:
                re = self.real.start
                im += 1
                if not self._parity_matches(re, im):
                    if self.real.size == 1:
                        im += 1
                    else:
                        re += 1
        else:
            re += 1
            if re == self.real.stop:
                re = self.real.start
                im += 1
        return IQNumber(re, im, self.field)

    def predecessor(self, p: IQNumber) -> IQNumber:
        re, im = p.re, p.im
        if self.field.is_congruent:
            re -= 2
            if re < self.real.start:
                re = self.real.stop - 1
                im -= 1
                if not self._parity_matches(re, im):
                    if self.real.size == 1:
                        im -= 1
                    else:
                        re -= 1
        else:
            re -= 1
            if re < self.real.start:
                re = self.real.stop - 1
                im -= 1
        return IQNumber(re, im, self.field)

    def __iter__(self) -> Iterator[IQNumber]:
        p = self.start
        for _ in range(self.size):
            yield p
            p = self.successor(p)

    def distance(self, value: IQNumber) -> float:
        return self.original.distance(value.to_complex() * self.inv_transform)

    def validate(self, value: IQNumber) -> bool:
        return is_less(self.distance(value), self.bound)


# --- Radius bookkeeping ------------------------------------------------------


@dataclass
class LatticeBound:
    """
    Radius bounds for a zeta vector at dilation Δ and height h.

    A cusp at dilation Δ can only matter below height 2/sqrt(Δ); what is left
    of that budget after the height and the squared distances of the slower
    coordinates bounds the distance of the next coordinate.
    """
    size: int
    dilation: int = 1
    height: float = 0.0
    distances: list[float] = field(default_factory=list)
    _sqrt_dilation_inv: float = field(default=2.0, init=False, repr=False)
    _cache: tuple[int, float] | None = field(default=None, init=False, repr=False)

    def initialize(self) -> None:
        if self.dilation < 1:
            raise ConfigurationError(f"dilation must be at least 1, got {self.dilation}")
        self._sqrt_dilation_inv = 2.0 / sqrt(self.dilation)
        self.distances = [0.0] * self.size
        self._cache = None

    def bound(self, loc: int) -> float:
        if self._cache is not None and self._cache[0] == loc:
            return self._cache[1]
        b = self._sqrt_dilation_inv - self.height
        if loc != self.size - 1:
            b -= self.distances[loc + 1]
        value = 0.0 if b < 0 else sqrt(b)
        self._cache = (loc, value)
        return value

    def set_distance(self, loc: int, distance: float) -> None:
        d2 = distance * distance
        if loc == self.size - 1:
            self.distances[loc] = d2
        else:
            self.distances[loc] = self.distances[loc + 1] + d2
        self._cache = None

    def total_bound(self) -> float:
        return self._sqrt_dilation_inv - self.height - self.distances[0]

    def validate(self) -> bool:
        return is_greater_equal(self.total_bound(), 0.0)

    def r_bound(self) -> float:
        delta = float(self.dilation)
        b = delta - (0.5 * delta * (self.distances[0] + self.height)) ** 2
        return 0.0 if b < 0 else sqrt(b)


# --- The enumerator ----------------------------------------------------------


class ZetaLattice:
    """
    Bounded enumerator over zeta vectors.

    Usage per rotation: set_transform(), initialize(), begin(), first_time(),
    then next_valid() until it returns False. Iterating the object does the
    last three steps and yields a tuple per admissible vector.
    """

    def __init__(self, field: NumberField, regions: Sequence[ComplexRegion] = ()):
        self.field = field
        self.regions: list[RegionLattice] = []
        self.bound = LatticeBound(0)
        self.untransform = complex(1.0, 0.0)
        self.start: list[IQNumber] = []
        self.stop: list[IQNumber] = []
        self.point: list[IQNumber] = []
        self._active = False
        if regions:
            self.set_space(regions)

    def set_space(self, regions: Sequence[ComplexRegion]) -> None:
        if not regions:
            raise ConfigurationError("the space needs at least one zeta coordinate")
        self.regions = [RegionLattice(self.field, r) for r in regions]
        self.bound = LatticeBound(len(regions), self.bound.dilation, self.bound.height)

    @property
    def last(self) -> int:
        return len(self.regions) - 1

    def set_transform(self, transform: complex) -> None:
        self.untransform = 1 / transform
        for region in self.regions:
            region.transform = transform

    def initialize(self) -> None:
        self.bound.initialize()
        radius = self.bound.bound(self.last)
        for region in self.regions:
            region.bound = radius
            region.initialize()
        self.start = [region.start for region in self.regions]
        self.stop = self.start[:-1] + [self.regions[-1].stop]

    def size(self) -> int:
        return prod(region.size for region in self.regions)

    def empty(self) -> bool:
        return self.size() == 0

    def validate(self) -> bool:
        return self.bound.validate()

    def __bool__(self) -> bool:
        return self._active

    # --- walking --------------------------------------------------------------

    def distance(self, loc: int) -> float:
        return self.regions[loc].original.distance(self.point[loc].to_complex() * self.untransform)

    def _settle(self, loc: int) -> None:
        self.bound.set_distance(loc, self.distance(loc))
        self.correct_bounds(loc)

    def begin(self) -> None:
        self.point = list(self.start)
        self._active = not self.empty()
        last = self.regions[self.last]
        last.bound = self.bound.bound(self.last)
        last.initialize()
        self._settle(self.last)

    def correct_bounds(self, loc: int) -> None:
        """Re-bound every coordinate faster than loc and reset it to its start."""
        for i in range(loc, 0, -1):
            inner = self.regions[i - 1]
            if self.regions[i].bound != 0.0:
                inner.bound = self.bound.bound(i - 1)
                inner.initialize()
            elif inner.bound != 0.0:
                inner.bound = 0.0
                inner.initialize()
            self.point[i - 1] = inner.start
            self.bound.set_distance(i - 1, self.distance(i - 1))

    def first_time(self) -> None:
        """Step back once so that the next advance() lands on the first point."""
        for i in range(self.last):
            region = self.regions[i]
            if region.size != 0:
                self.point[i] = region.predecessor(region.stop)
        last = self.regions[self.last]
        self.point[self.last] = last.predecessor(self.point[self.last])

    def advance(self) -> None:
        for i in range(self.last):
            region = self.regions[i]
            if region.size == 0:
                self.point[i] = region.start
                continue
            self.point[i] = region.successor(self.point[i])
            if self.point[i] == region.stop:
                self.point[i] = region.start
                continue
            self._settle(i)
            return

        last = self.regions[self.last]
        self.point[self.last] = last.successor(self.point[self.last])
        self._settle(self.last)
        if self.point[self.last] == last.stop:
            self._active = False

    def next_valid(self) -> bool:
        self.advance()
        while self._active and not self.validate():
            self.advance()
        return self._active

    def __iter__(self) -> Iterator[tuple[IQNumber, ...]]:
        self.begin()
        self.first_time()
        while self.next_valid():
            yield tuple(self.point)
