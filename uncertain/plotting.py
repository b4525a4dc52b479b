"""
Error-bar plots for arrays of uncertain values.

Error bars are drawn at 50% opacity; markers stay opaque so overlapping
intervals remain readable in black-and-white figures.
"""

from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from .arrays import estimates, uncertainties


def setup_plot_style():
    """High-legibility style for black-and-white figures."""
    if "seaborn-v0_8-whitegrid" in plt.style.available:
        plt.style.use("seaborn-v0_8-whitegrid")
    else:
        plt.style.use("default")

    plt.rcParams.update(
        {
            "font.family": "serif",
            "mathtext.fontset": "stix",
            "font.size": 14,
            "axes.labelsize": 16,
            "legend.fontsize": 12,
            "savefig.dpi": 300,
            "savefig.bbox": "tight",
            "axes.spines.top": False,
            "axes.spines.right": False,
            "grid.alpha": 0.25,
            "grid.linestyle": "--",
            "legend.frameon": False,
        }
    )


def plot_values(x, values, ax: Optional[plt.Axes] = None, label: Optional[str] = None):
    """Plot estimates against ``x`` with one-sigma error bars.

    Args:
        x (array_like): Abscissa, one entry per value.
        values (array_like): 1-D array or sequence of ``UncertainValue``.
        ax (matplotlib.axes.Axes, optional): Target axes; a new figure is
            created when omitted.
        label (str, optional): Legend label.

    Returns:
        matplotlib.axes.Axes: The axes drawn on.

    Raises:
        ValueError: If ``x`` and ``values`` differ in length.
    """
    x_arr = np.asarray(x, dtype=float).reshape(-1)
    vals = np.asarray(values, dtype=object).reshape(-1)
    if len(x_arr) != len(vals):
        raise ValueError(
            f"x and values must have the same length, got {len(x_arr)} and {len(vals)}."
        )

    if ax is None:
        setup_plot_style()
        _, ax = plt.subplots(figsize=(8.0, 5.0))

    bar_alpha = 0.50
    ax.errorbar(
        x_arr,
        estimates(vals),
        yerr=np.abs(uncertainties(vals)),
        fmt="o",
        markersize=6,
        markerfacecolor="white",
        markeredgecolor="black",
        ecolor=(0, 0, 0, bar_alpha),
        elinewidth=1.2,
        capsize=3,
        label=label,
    )
    if label:
        ax.legend()
    return ax
