import math

import numpy as np
import pytest

from uncertain import UncertainValue
from uncertain.propagation import (
    central_difference,
    five_point_stencil,
    linear_sum,
    quadrature,
)


class _CountingFunc:
    def __init__(self, f):
        self.f = f
        self.calls = 0

    def __call__(self, x):
        self.calls += 1
        return self.f(x)


def test_central_difference_derivative():
    assert math.isclose(central_difference(np.exp, 0.0), 1.0, abs_tol=1e-6)


def test_five_point_stencil_derivative():
    assert math.isclose(five_point_stencil(lambda x: x**3, 2.0), 12.0, abs_tol=1e-6)


def test_derivative_evaluation_counts():
    f = _CountingFunc(math.sin)
    central_difference(f, 0.3)
    assert f.calls == 2

    g = _CountingFunc(math.sin)
    five_point_stencil(g, 0.3)
    assert g.calls == 4


def test_combination_rules():
    assert math.isclose(quadrature(3.0, 4.0), 5.0)
    assert math.isclose(linear_sum(-1.0, 2.0), 3.0)


def test_apply_defaults_to_fourth_order():
    x = UncertainValue(0.7, 0.02)
    assert x.apply(math.sin) == x.apply_fourth_order(math.sin)


@pytest.mark.parametrize("estimate", [0.5, 3.14])
def test_stencils_agree_with_closed_form_sin(estimate):
    x = UncertainValue(estimate, 0.01)
    exact = x.sin()
    first = x.apply_first_order(math.sin)
    fourth = x.apply_fourth_order(math.sin)

    assert math.isclose(first.estimate, exact.estimate, rel_tol=1e-12)
    assert math.isclose(fourth.estimate, exact.estimate, rel_tol=1e-12)
    assert math.isclose(first.uncertainty, exact.uncertainty, abs_tol=1e-7)
    assert math.isclose(fourth.uncertainty, exact.uncertainty, abs_tol=1e-10)


def test_ln_exp_round_trip():
    x = UncertainValue(1.001, 0.00001)
    back = x.apply(math.log).apply(math.exp)
    assert math.isclose(back.estimate, x.estimate, abs_tol=1e-4)
    assert math.isclose(back.uncertainty, x.uncertainty, abs_tol=1e-4)


def test_apply_with_custom_step():
    x = UncertainValue(2.0, 0.1)
    result = x.apply_fourth_order(lambda v: v**2, step=1e-4)
    assert math.isclose(result.uncertainty, 0.4, rel_tol=1e-8)


def test_apply_exact_value_stays_exact():
    x = UncertainValue(0.0, 0.0)
    assert x.apply(np.sqrt).uncertainty == 0.0


def test_apply_propagates_nan_outside_domain():
    result = UncertainValue(-1.0, 0.1).apply(np.log)
    assert math.isnan(result.estimate)
    assert math.isnan(result.uncertainty)
