"""Frequency grid shared by every signal compared in one query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np


@dataclass(frozen=True)
class Spectrum:
    """Ordered set of centre frequencies (Hz), one per bin.

    Parameters
    ----------
    frequencies : Tuple[float, ...]
        Strictly increasing bin centre frequencies in Hz.

    Raises
    ------
    ValueError
        If the grid is empty or not strictly increasing.
    """

    frequencies: Tuple[float, ...]

    def __post_init__(self) -> None:
        freqs = tuple(float(f) for f in self.frequencies)
        if not freqs:
            raise ValueError("Spectrum needs at least one frequency bin")
        for lo, hi in zip(freqs, freqs[1:]):
            if hi <= lo:
                raise ValueError(
                    f"Spectrum frequencies must be strictly increasing ({lo} Hz before {hi} Hz)"
                )
        object.__setattr__(self, "frequencies", freqs)

    @classmethod
    def from_channel(cls, centre_hz: float, bandwidth_hz: float, num_bins: int) -> "Spectrum":
        """Evenly spaced bins covering one channel of *bandwidth_hz* around *centre_hz*."""
        if num_bins < 1:
            raise ValueError(f"num_bins must be positive, got {num_bins}")
        step = bandwidth_hz / num_bins
        first = centre_hz - bandwidth_hz / 2.0 + step / 2.0
        return cls(tuple(first + i * step for i in range(num_bins)))

    def __len__(self) -> int:
        return len(self.frequencies)

    def __getitem__(self, index: int) -> float:
        return self.frequencies[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self.frequencies)

    def index_of(self, frequency_hz: float) -> int:
        """Bin index of *frequency_hz* (exact match)."""
        try:
            return self.frequencies.index(float(frequency_hz))
        except ValueError:
            raise ValueError(f"Frequency {frequency_hz} Hz is not part of the spectrum") from None

    @property
    def frequencies_mhz(self) -> np.ndarray:
        return np.asarray(self.frequencies, dtype=np.float64) / 1e6
