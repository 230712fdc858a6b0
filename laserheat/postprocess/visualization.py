# laserheat/postprocess/visualization.py
"""
Lightweight plotting helpers for depth profiles and time traces.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt

__all__ = ["plot_depth_profile", "plot_time_trace"]


def _c64(x):
    return np.ascontiguousarray(np.asarray(x, dtype=np.float64))


def plot_depth_profile(
    z_cm: Iterable[float],
    rise_K: Iterable[float],
    *,
    layer_edges_cm: Sequence[float] = (),
    ax: plt.Axes | None = None,
    title: str | None = "Temperature rise vs depth",
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Rise against depth. Alternate layers are shaded between consecutive
    ``layer_edges_cm`` and every edge gets a dashed line.
    """
    z = _c64(z_cm)
    dT = _c64(rise_K)
    if z.shape != dT.shape:
        raise ValueError("z_cm and rise_K must have the same shape")

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 4))
    else:
        fig = ax.figure

    edges = [float(e) for e in layer_edges_cm]
    for i, (top, bottom) in enumerate(zip(edges[:-1], edges[1:])):
        if i % 2 == 0:
            ax.axvspan(top, bottom, color="tab:orange", alpha=0.08, linewidth=0)
    for e in edges:
        ax.axvline(e, color="0.5", linestyle="--", linewidth=0.8)

    ax.plot(z, dT, color="tab:red", linewidth=1.8)
    ax.set_xlabel("z (cm)")
    ax.set_ylabel("ΔT (K)")
    ax.grid(True, alpha=0.3)
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax


def plot_time_trace(
    t_s: Iterable[float],
    rise_K: Iterable[float],
    *,
    ax: plt.Axes | None = None,
    title: str | None = "Temperature rise vs time",
) -> Tuple[plt.Figure, plt.Axes]:
    t = _c64(t_s)
    dT = _c64(rise_K)
    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 4))
    else:
        fig = ax.figure
    ax.plot(t, dT, color="tab:blue", linewidth=1.8)
    ax.set_xlabel("t (s)")
    ax.set_ylabel("ΔT (K)")
    ax.grid(True, alpha=0.3)
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax
