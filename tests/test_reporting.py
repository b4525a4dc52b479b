"""Tests for formatting, coverage intervals and summary tables."""

import math

import numpy as np
import pytest

from uncertain import UncertainValue, coverage_interval, from_arrays, to_frame
from uncertain.formatting import (
    format_value_with_uncertainty,
    round_uncertainty,
    round_value_to_uncertainty,
)
from uncertain.reporting import coverage_factor, uncertainty_forms


def test_round_uncertainty_significant_figures():
    assert round_uncertainty(0.0234) == (0.02, 2)
    assert round_uncertainty(0.0156) == (0.016, 3)
    assert round_uncertainty(340.0) == (300.0, -2)


def test_round_value_to_uncertainty():
    assert round_value_to_uncertainty(4.5678, 0.02) == (4.57, 0.02)
    assert round_value_to_uncertainty(4.5678, 0.0) == (4.5678, 0.0)


def test_format_value_with_uncertainty():
    assert format_value_with_uncertainty(4.5678, 0.02) == "4.57 ± 0.02"
    assert format_value_with_uncertainty(1234.0, 56.0) == "1230 ± 60"
    assert format_value_with_uncertainty(2.0, 0.0) == "2 ± 0"


def test_str_uses_matched_precision():
    assert str(UncertainValue(4.5678, 0.02)) == "4.57 ± 0.02"
    assert str(UncertainValue.nan()) == "nan ± nan"


def test_subnormal_uncertainty_formats_in_general_notation():
    assert round_uncertainty(5e-324)[1] == 324
    assert str(UncertainValue(1.0, 5e-324)) == "1 ± 4.94066e-324"
    df = to_frame(from_arrays([1.0], [5e-324]))
    assert df["Reported"].iloc[0] == "1 ± 4.94066e-324"


def test_negative_uncertainty_keeps_its_sign():
    product = UncertainValue(-3.0, 0.1) * 2
    assert product.uncertainty < 0
    assert str(product) == "-6.0 ± -0.2"
    assert round_value_to_uncertainty(-6.0, -0.2) == (-6.0, -0.2)


def test_coverage_factor():
    assert math.isclose(coverage_factor(0.95), 1.959963984540054, rel_tol=1e-9)
    with pytest.raises(ValueError):
        coverage_factor(1.5)


def test_coverage_interval():
    low, high, k = coverage_interval(UncertainValue(10.0, 0.5))
    assert math.isclose(low, 10.0 - k * 0.5)
    assert math.isclose(high, 10.0 + k * 0.5)


def test_uncertainty_forms():
    assert uncertainty_forms(5.0, 0.2) == (0.04, 4.0)
    frac, pct = uncertainty_forms(0.0, 0.2)
    assert np.isnan(frac) and np.isnan(pct)


def test_to_frame_columns_and_values():
    values = from_arrays([4.5678, 5.0], [0.02, 0.2])
    df = to_frame(values, labels=["a", "b"])
    assert list(df.columns) == [
        "Estimate",
        "Uncertainty",
        "Relative uncertainty",
        "Reported",
    ]
    assert df.loc["a", "Reported"] == "4.57 ± 0.02"
    assert math.isclose(df.loc["b", "Relative uncertainty"], 0.04)


def test_to_frame_rejects_wrong_label_count():
    with pytest.raises(ValueError):
        to_frame(from_arrays([1.0, 2.0], 0.1), labels=["only one"])
