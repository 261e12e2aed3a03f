"""Matplotlib timeline of signal receptions and combined interference."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from ..core.signal import Signal
from ..propagation.interference import mw_to_dbm
from ..toolbox.signal_utils import interference_trace


def plot_interference_timeline(
    signals: Sequence[Signal],
    start: float,
    end: float,
    freq_index: Optional[int] = None,
    exclude: Optional[Signal] = None,
    save_path: Optional[str | Path] = None,
    figsize: Tuple[float, float] = (9, 5),
) -> plt.Figure:  # type: ignore[name-defined]
    """Receptions as horizontal bars (top) and the combined level in dBm (bottom).

    The level is the spectrum-wide maximum, or bin *freq_index* when given.
    """
    fig, (ax_rx, ax_lvl) = plt.subplots(
        2, 1, figsize=figsize, sharex=True, gridspec_kw={"height_ratios": [1, 2]}
    )

    for row, sig in enumerate(signals):
        colour = "grey" if sig is exclude else f"C{row % 10}"
        ax_rx.barh(row, sig.duration, left=sig.reception_start, color=colour, alpha=0.7)
    labels = [
        str(sig.group_id) if isinstance(sig.group_id, (int, str)) else f"#{row}"
        for row, sig in enumerate(signals)
    ]
    ax_rx.set_yticks(range(len(signals)))
    ax_rx.set_yticklabels(labels, fontsize=7)
    ax_rx.set_ylabel("Signal")

    times, levels = interference_trace(start, end, signals, freq_index=freq_index, exclude=exclude)
    # extend the last level to the window edge
    times = np.append(times, max(end, times[-1]))
    levels_dbm = mw_to_dbm(np.append(levels, levels[-1]))
    # silent stretches have no dBm value
    levels_dbm = np.where(np.isfinite(levels_dbm), levels_dbm, np.nan)
    ax_lvl.step(times, levels_dbm, where="post", color="black")
    ax_lvl.set_xlim(start, end if end > start else start + 1.0)
    ax_lvl.set_xlabel("Time (s)")
    ax_lvl.set_ylabel("Interference (dBm)")
    label = "max over spectrum" if freq_index is None else f"bin {freq_index}"
    ax_lvl.set_title(f"Combined interference ({label})")
    ax_lvl.grid(True, alpha=0.3, linestyle="--")

    fig.tight_layout()
    if save_path:
        fig.savefig(str(save_path), dpi=150)
    return fig
