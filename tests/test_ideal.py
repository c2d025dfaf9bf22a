# tests/test_ideal.py
"""
Ideals in Hermite normal form and their reduced forms.

Run: pytest -v tests/test_ideal.py
"""

from __future__ import annotations

import pytest

from cuspgen.field import NumberField
from cuspgen.ideal import Ideal, QuadraticForm
from cuspgen.iqnumber import IQNumber


@pytest.fixture(scope="module")
def q5() -> NumberField:
    return NumberField.from_generator(-5)


def test_units_generate_the_maximal_order(gaussian, eisenstein):
    for fld in (gaussian, eisenstein):
        for re, im in fld.units:
            ideal = Ideal.principal(IQNumber(re, im, fld))
            assert ideal == Ideal.maximal_order(fld)
            assert ideal.is_maximal_order()
            assert ideal.is_principal()


def test_zero_ideal(gaussian):
    zero = Ideal.principal(IQNumber.zero(gaussian))
    assert zero.is_zero()
    assert not zero.is_maximal_order()
    x = Ideal.principal(IQNumber(1, 1, gaussian))
    assert zero + x == x
    assert x + zero == x
    assert zero.form == QuadraticForm()


def test_gaussian_prime_above_two(gaussian):
    p = Ideal.principal(IQNumber(1, 1, gaussian))
    assert (p.a, p.b, p.c, p.norm) == (2, 1, 1, 2)
    assert p.is_principal()
    assert not p.is_maximal_order()
    # 1 - i is an associate of 1 + i
    assert Ideal.principal(IQNumber(1, -1, gaussian)) == p
    assert p + p == p


def test_coprime_elements_sum_to_maximal_order(gaussian):
    a = Ideal.principal(IQNumber(1, 1, gaussian))
    b = Ideal.principal(IQNumber(3, 0, gaussian))
    assert (a + b).is_maximal_order()


def test_non_principal_ideal(q5):
    two = Ideal.principal(IQNumber(2, 0, q5))
    assert (two.a, two.b, two.c, two.norm) == (2, 0, 2, 4)
    gen = Ideal.principal(IQNumber(1, 1, q5))
    assert (gen.a, gen.b, gen.c, gen.norm) == (6, 5, 1, 6)

    p = two + gen
    assert (p.a, p.b, p.c, p.norm) == (2, 1, 1, 2)
    assert p.form == QuadraticForm(2, 2, 3)
    assert not p.is_principal()
    assert not p.is_maximal_order()
    assert p.same_class(p)


def test_product_of_ideals(q5):
    p = Ideal.principal(IQNumber(2, 0, q5)) + Ideal.principal(IQNumber(1, 1, q5))
    sq = p * p
    assert sq == Ideal.principal(IQNumber(2, 0, q5))
    assert sq.is_principal()
    assert p * Ideal.maximal_order(q5) == p
    assert (p * Ideal.zero(q5)).is_zero()


@pytest.mark.parametrize("g", [-1, -2, -3, -5, -7, -15, -23])
def test_forms_are_reduced_with_field_discriminant(g):
    fld = NumberField.from_generator(g)
    for re in range(-3, 4):
        for im in range(-3, 4):
            if (re, im) == (0, 0) or (fld.is_congruent and (re - im) % 2):
                continue
            ideal = Ideal.principal(IQNumber(re, im, fld))
            f = ideal.form
            assert f.discriminant == fld.discriminant
            assert abs(f.cXY) <= f.cXX <= f.cYY
            # principal ideals share the class of the maximal order
            assert ideal.is_principal()
            assert ideal.norm == IQNumber(re, im, fld).norm()


def test_generators(gaussian):
    p = Ideal.principal(IQNumber(1, 1, gaussian))
    assert p.first_generator() == IQNumber(2, 0, gaussian)
    second = p.second_generator()
    assert 0 <= second.re < p.a
    assert second.norm() % p.norm == 0
