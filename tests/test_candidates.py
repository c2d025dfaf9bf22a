# tests/test_candidates.py
"""
Profiles, runtime settings and the candidate list driver.

Run: pytest -v tests/test_candidates.py
"""

from __future__ import annotations

import pytest

from cuspgen.candidates import CandidateList, run_profile
from cuspgen.config import has_profile, list_all_profiles, load_settings
from cuspgen.field import NumberField
from cuspgen.runtime import APPLY, CFG, current, ensure_runtime_deps
from cuspgen.space import make_siegel, validate_dimension, validate_generator, validate_height
from cuspgen.utility import ConfigurationError, UserInputError, is_equal
from cuspgen.workspace import ensure_workspace_seeded, workspace_dir


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("CUSPGEN_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture(scope="module")
def gaussian_run():
    fld = NumberField.from_generator(-1)
    space = make_siegel(fld, 2).with_height(1.0)
    return CandidateList(fld, space).run()


# ---------- workspace & profiles ----------------------------------------------


def test_workspace_is_seeded(home):
    assert workspace_dir() == home.resolve()
    root, seeded = ensure_workspace_seeded()
    assert seeded
    assert (root / "profiles" / "default.toml").exists()
    # second call copies nothing new
    assert ensure_workspace_seeded()[1] is False
    assert "default" in list_all_profiles()
    assert has_profile("default")


def test_default_profile_applies(home):
    settings = load_settings()
    assert settings.name == "default"
    assert "_PROFILE_" not in settings.data
    APPLY(settings)
    assert CFG("FIELD.GENERATOR") == -1
    assert CFG("SPACE.DIMENSION") == 2
    assert CFG("MISSING.KEY", "fallback") == "fallback"
    assert current().zero == pytest.approx(1e-10)
    assert current().debug is False


def test_missing_profile(home):
    with pytest.raises(FileNotFoundError):
        load_settings("nope")


def test_broken_profile(home):
    ensure_workspace_seeded()
    (home / "profiles" / "broken.toml").write_text("[FIELD\nGENERATOR = ", encoding="utf-8")
    with pytest.raises(UserInputError, match="broken.toml"):
        load_settings("broken")


def test_bad_tolerance_in_profile(home):
    ensure_workspace_seeded()
    (home / "profiles" / "loose.toml").write_text("[PRECISION]\nZERO = -1.0\n", encoding="utf-8")
    with pytest.raises(UserInputError):
        load_settings("loose")


def test_tolerance_comes_from_settings():
    assert not is_equal(0.0, 1e-6)
    APPLY({"PRECISION": {"ZERO": 1e-3}})
    assert is_equal(0.0, 1e-6)


def test_runtime_deps_present():
    assert ensure_runtime_deps()


# ---------- validation --------------------------------------------------------


@pytest.mark.parametrize(
    "fn,value",
    [
        (validate_generator, -5),
        (validate_generator, 3),
        (validate_dimension, 1),
        (validate_dimension, 9),
        (validate_height, 0.0),
        (validate_height, 2.0),
    ],
)
def test_validators_reject(fn, value):
    with pytest.raises(UserInputError):
        fn(value)


def test_validators_accept():
    assert validate_generator(-163) == -163
    assert validate_dimension(8) == 8
    assert validate_height(1) == 1.0


# ---------- candidate list ----------------------------------------------------


def test_counts_and_store(gaussian_run):
    cl = gaussian_run
    assert cl.total() == len(cl.cusps) > 0
    assert set(cl.counts) <= set(range(1, 5))
    for delta, count in cl.counts.items():
        assert cl.total_of(delta) == count
        assert count == sum(1 for c in cl.cusps if c.dilation == delta)
    assert cl.total_of(99) == 0
    assert cl.elapsed >= 0.0


def test_without_store(gaussian_run):
    fld = NumberField.from_generator(-1)
    space = make_siegel(fld, 2).with_height(1.0)
    cl = CandidateList(fld, space, store=False).run()
    assert cl.cusps == []
    assert dict(cl.counts) == dict(gaussian_run.counts)


def test_validator_filters(gaussian_run):
    fld = NumberField.from_generator(-1)
    space = make_siegel(fld, 2).with_height(1.0)
    cl = CandidateList(fld, space, accept=lambda c: c.dilation != 1).run()
    assert cl.total_of(1) == 0
    assert cl.total() == gaussian_run.total() - gaussian_run.total_of(1)


def test_rerun_resets_counts(gaussian_run):
    fld = NumberField.from_generator(-1)
    space = make_siegel(fld, 2).with_height(1.0)
    cl = CandidateList(fld, space)
    cl.run()
    cl.run()
    assert cl.total() == gaussian_run.total()


def test_zero_height_is_rejected():
    fld = NumberField.from_generator(-1)
    with pytest.raises(ConfigurationError):
        CandidateList(fld, make_siegel(fld, 2))


def test_debug_lines_go_to_stderr(capsys):
    APPLY({"BEHAVIOUR": {"DEBUG": True}})
    fld = NumberField.from_generator(-1)
    CandidateList(fld, make_siegel(fld, 2).with_height(1.0)).run()
    captured = capsys.readouterr()
    assert "Total:" in captured.err
    assert "Δ = 1" in captured.err
    assert captured.out == ""


def test_run_profile(home, gaussian_run):
    APPLY(load_settings())
    cl = run_profile()
    assert dict(cl.counts) == dict(gaussian_run.counts)


def test_run_profile_rejects_bad_settings():
    APPLY({"FIELD": {"GENERATOR": -1}, "SPACE": {"DIMENSION": 2, "HEIGHT": 0.0}})
    with pytest.raises(UserInputError):
        run_profile()


def test_progress_bar_on_stderr(capsys):
    fld = NumberField.from_generator(-1)
    CandidateList(fld, make_siegel(fld, 2).with_height(1.0)).run(progress=True)
    captured = capsys.readouterr()
    assert "Δ 1/4" in captured.err
    assert captured.out == ""
