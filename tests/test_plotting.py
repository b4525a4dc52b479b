import matplotlib.pyplot as plt
import pytest

from uncertain import from_arrays
from uncertain.plotting import plot_values


def test_plot_values_draws_errorbars(tmp_path):
    values = from_arrays([1.0, 2.0, 3.0], [0.1, 0.2, 0.3])
    ax = plot_values([0.0, 1.0, 2.0], values, label="measured")
    assert len(ax.containers) == 1
    out = tmp_path / "values.png"
    ax.figure.savefig(out)
    assert out.exists()
    plt.close(ax.figure)


def test_plot_values_length_mismatch():
    values = from_arrays([1.0, 2.0], 0.1)
    with pytest.raises(ValueError):
        plot_values([0.0, 1.0, 2.0], values)
