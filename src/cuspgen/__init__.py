from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("cuspgen")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .candidates import CandidateList, run_profile
from .config import has_profile, load_settings
from .congruence import CongruenceEquation, CongruenceSolution, CongruenceSystem, solve, solve_system
from .cusp import Cusp
from .engine import CuspEngine
from .field import NumberField
from .iqnumber import IQNumber
from .lattice import IntervalLattice, LatticeBound, RegionLattice, ZetaLattice
from .runtime import APPLY, CFG
from .space import HyperbolicSpace, make_siegel
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "CandidateList",
    "CongruenceEquation",
    "CongruenceSolution",
    "CongruenceSystem",
    "Cusp",
    "CuspEngine",
    "HyperbolicSpace",
    "IQNumber",
    "IntervalLattice",
    "LatticeBound",
    "NumberField",
    "RegionLattice",
    "ZetaLattice",
    "__version__",
    "has_profile",
    "load_settings",
    "make_siegel",
    "run_profile",
    "solve",
    "solve_system",
    "workspace_dir",
]
