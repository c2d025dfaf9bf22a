# tests/conftest.py
from __future__ import annotations

import pytest

from cuspgen import runtime
from cuspgen.field import NumberField


@pytest.fixture(autouse=True)
def _fresh_runtime():
    runtime.reset()
    yield
    runtime.reset()


@pytest.fixture(scope="session")
def gaussian() -> NumberField:
    return NumberField.from_generator(-1)


@pytest.fixture(scope="session")
def eisenstein() -> NumberField:
    return NumberField.from_generator(-3)
