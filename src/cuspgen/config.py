from __future__ import annotations

import tomllib as toml
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cuspgen.utility import UserInputError
from cuspgen.workspace import ensure_workspace_seeded, workspace_dir


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (file stem if not given in [_PROFILE_])
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path:
    return _profiles_dir() / f"{name}.toml"


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}

    name = str(meta.get("name") or fallback_name)
    description = " ".join(str(meta.get("description") or "").split()) or "(no description)"
    return data, name, description


# --- Public API ------------------------------------------------------------


def list_all_profiles() -> list[str]:
    """Return the available profile names (filename stems)."""
    ensure_workspace_seeded()
    return sorted(p.stem for p in _profiles_dir().glob("*.toml"))


def has_profile(name: str) -> bool:
    return _profile_path(name).exists()


def load_settings(name: str | None = None) -> Settings:
    """
    Load a profile by name (default 'default') from the workspace, seeding
    the workspace with the packaged profiles first.
    """
    if not name:
        name = "default"

    ensure_workspace_seeded()
    path = _profile_path(name)
    if not path.exists():
        raise FileNotFoundError(f"Profile '{name}' not found at {path}")

    data, resolved_name, description = _split_profile_data(_load_toml(path), path.stem)

    zero = data.get("PRECISION", {}).get("ZERO", 1e-10)
    if isinstance(zero, bool) or not isinstance(zero, (int, float)) or zero < 0:
        raise UserInputError(f"{path.name}: PRECISION.ZERO must be a non-negative number.")

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
