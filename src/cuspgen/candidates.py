# -----------------------------------------------------------------------------
#  candidates.py
#  Candidate list: run the engine over every dilation and tally the cusps
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys
import time
from collections import Counter
from collections.abc import Callable

from colorama import Fore, Style

from cuspgen.cusp import Cusp
from cuspgen.engine import CuspEngine
from cuspgen.field import NumberField
from cuspgen.progress import DilationProgress
from cuspgen.runtime import CFG
from cuspgen.runtime import current as _rt_current
from cuspgen.space import (
    HyperbolicSpace,
    make_siegel,
    validate_dimension,
    validate_generator,
    validate_height,
)
from cuspgen.utility import ConfigurationError, is_zero


def _fmt_ms(ms: float) -> str:
    return f"{ms:8.2f} ms"


def _print_debug_dilation(dilation: int, count: int, dt_ms: float) -> None:
    """One line per finished dilation, to STDERR."""
    tm = f"{Style.DIM}[{_fmt_ms(dt_ms)}]{Style.RESET_ALL}"
    if count:
        stat = f"{Fore.GREEN}{Style.BRIGHT}{count:>6}{Style.RESET_ALL}"
    else:
        stat = f"{Style.DIM}{count:>6}{Style.RESET_ALL}"
    sys.stderr.write(f"{tm} {stat}  Δ = {dilation}\n")


class CandidateList:
    """
    Enumerate every admissible cusp of a field over a space.

    accept is the external validator: cusps it rejects are neither counted
    nor stored. By default every admissible cusp is kept.
    """

    def __init__(
        self,
        field: NumberField,
        space: HyperbolicSpace,
        accept: Callable[[Cusp], bool] | None = None,
        *,
        store: bool = True,
    ):
        height = space.height.lower
        if height < 0 or is_zero(height):
            raise ConfigurationError(f"height lower bound must be positive, got {height}")
        self.field = field
        self.space = space
        self.accept = accept
        self.store = store
        self.counts: Counter[int] = Counter()
        self.cusps: list[Cusp] = []
        self.elapsed = 0.0
        self.engine = CuspEngine(field, space)

    def total(self) -> int:
        return sum(self.counts.values())

    def total_of(self, dilation: int) -> int:
        return self.counts.get(dilation, 0)

    def run(self, start_dilation: int = 1, *, progress: bool = False) -> CandidateList:
        debug = _rt_current().debug
        engine = self.engine
        self.counts.clear()
        self.cusps.clear()
        engine.initialize(start_dilation)
        bar = DilationProgress(engine.max_dilation, enabled=progress and not debug)
        bar.update(start_dilation, 0, force=True)

        t0 = time.perf_counter()
        t_dil = t0
        current = start_dilation

        for cusp in engine:
            if cusp.dilation != current:
                if debug:
                    _print_debug_dilation(current, self.counts[current], (time.perf_counter() - t_dil) * 1000)
                t_dil = time.perf_counter()
                current = cusp.dilation
                bar.update(current, self.total(), force=True)

            if self.accept is not None and not self.accept(cusp):
                continue
            self.counts[cusp.dilation] += 1
            if self.store:
                self.cusps.append(cusp)

        self.elapsed = time.perf_counter() - t0
        bar.done()
        if debug:
            _print_debug_dilation(current, self.counts[current], (time.perf_counter() - t_dil) * 1000)
            sys.stderr.write(
                f"{Fore.CYAN}{Style.BRIGHT}Total:{Style.RESET_ALL} {self.total()} cusps "
                f"up to Δ = {engine.max_dilation} in {self.elapsed:.3f} s\n"
            )
        return self


def run_profile(accept: Callable[[Cusp], bool] | None = None) -> CandidateList:
    """Build field and Siegel space from the active settings and run the list."""
    generator = validate_generator(int(CFG("FIELD.GENERATOR", -1)))
    dimension = validate_dimension(int(CFG("SPACE.DIMENSION", 2)))
    height = validate_height(float(CFG("SPACE.HEIGHT", 1.0)))

    field = NumberField.from_generator(generator)
    space = make_siegel(field, dimension).with_height(height)
    store = bool(CFG("ENGINE.STORE_CUSPS", True))
    start = int(CFG("ENGINE.START_DILATION", 1))
    return CandidateList(field, space, accept, store=store).run(start)
