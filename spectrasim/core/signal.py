"""Spectral signal: per-bin received power of one transmission over time."""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, List, Optional, Sequence

import numpy as np

from .spectrum import Spectrum

if TYPE_CHECKING:
    from spectrasim.propagation.analogue import AnalogueModel

# Subtracting a signal snaps results within this fraction of the removed
# power to zero, so a running total returns to exactly 0 once every
# contribution has left.
CANCEL_RTOL = 1e-9


class Signal:
    """Received power levels (mW) of one transmission across a :class:`Spectrum`.

    Only the half-open bin range ``[data_start, data_end)`` carries data;
    every other bin reads as zero.  Attenuation (analogue) models are kept
    in order and applied lazily, each at most once, mutating the power
    values in place.

    Parameters
    ----------
    spectrum : Spectrum
        Frequency grid the values are indexed over.
    values : Sequence[float], optional
        Power levels placed at ``data_start``.  Omit for an all-zero signal
        with an empty data range (used as an accumulator).
    data_start : int
        First bin holding data.
    reception_start, reception_end : float
        Simulation time at which reception begins / ends.
    group_id : Hashable, optional
        Transmission-group identifier.  Replicas of the same logical
        transmission share it and never interfere with each other.
        Defaults to a fresh identifier unique to this signal.
    analogue_models : Sequence[AnalogueModel], optional
        Attenuation layers still to be applied, in order.
    """

    def __init__(
        self,
        spectrum: Spectrum,
        values: Optional[Sequence[float]] = None,
        data_start: int = 0,
        reception_start: float = 0.0,
        reception_end: float = 0.0,
        group_id: Hashable = None,
        analogue_models: Optional[Sequence[AnalogueModel]] = None,
    ) -> None:
        if reception_end < reception_start:
            raise ValueError(
                f"Reception ends ({reception_end}) before it starts ({reception_start})"
            )
        self.spectrum = spectrum
        self.values: np.ndarray = np.zeros(len(spectrum), dtype=np.float64)
        self.reception_start = reception_start
        self.reception_end = reception_end
        # without an explicit group every signal is its own transmission
        self.group_id = group_id if group_id is not None else object()
        self.analogue_models: List[AnalogueModel] = list(analogue_models or [])
        self.num_analogue_models_applied = 0

        if values is None:
            self.data_start = 0
            self.data_end = 0
        else:
            data = np.asarray(values, dtype=np.float64)
            data_end = data_start + data.size
            if data_start < 0 or data_end > len(spectrum):
                raise ValueError(
                    f"Data range [{data_start}, {data_end}) does not fit a spectrum "
                    f"of {len(spectrum)} bins"
                )
            self.values[data_start:data_end] = data
            self.data_start = data_start
            self.data_end = data_end

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def duration(self) -> float:
        return self.reception_end - self.reception_start

    @property
    def data_slice(self) -> slice:
        return slice(self.data_start, self.data_end)

    @property
    def data(self) -> np.ndarray:
        """View of the valid bins only."""
        return self.values[self.data_slice]

    def at(self, index: int) -> float:
        return float(self.values[index])

    def __getitem__(self, index: int) -> float:
        return self.at(index)

    def __len__(self) -> int:
        return len(self.values)

    def get_max(self) -> float:
        """Highest power level inside the data range (0 when empty)."""
        if self.data_end <= self.data_start:
            return 0.0
        return float(np.max(self.data))

    def get_min(self) -> float:
        """Lowest power level inside the data range (0 when empty)."""
        if self.data_end <= self.data_start:
            return 0.0
        return float(np.min(self.data))

    get_data_min = get_min

    # ------------------------------------------------------------------
    # Elementwise arithmetic
    # ------------------------------------------------------------------

    def _check_spectrum(self, other: "Signal") -> None:
        if other.spectrum != self.spectrum:
            raise ValueError("Cannot combine signals defined over different spectra")

    def _widen(self, start: int, end: int) -> None:
        if end <= start:
            return
        if self.data_end <= self.data_start:
            self.data_start, self.data_end = start, end
        else:
            self.data_start = min(self.data_start, start)
            self.data_end = max(self.data_end, end)

    def __iadd__(self, other: "Signal") -> "Signal":
        self._check_spectrum(other)
        self.values[other.data_slice] += other.data
        self._widen(other.data_start, other.data_end)
        return self

    def __isub__(self, other: "Signal") -> "Signal":
        self._check_spectrum(other)
        bins = self.values[other.data_slice]
        bins -= other.data
        bins[np.abs(bins) <= CANCEL_RTOL * np.abs(other.data)] = 0.0
        self._widen(other.data_start, other.data_end)
        return self

    def maximum(self, other: "Signal", bins: Optional[slice] = None) -> "Signal":
        """In-place elementwise maximum with *other*.

        Only *bins* are compared; by default *other*'s data range.
        """
        self._check_spectrum(other)
        if bins is None:
            bins = other.data_slice
        np.maximum(self.values[bins], other.values[bins], out=self.values[bins])
        self._widen(bins.start, bins.stop)
        return self

    # ------------------------------------------------------------------
    # Attenuation
    # ------------------------------------------------------------------

    def apply_analogue_model(self, index: int) -> None:
        """Apply every pending attenuation layer up to and including *index*.

        Layers already applied are skipped; an index past the end of the
        list is a no-op.
        """
        if index >= len(self.analogue_models):
            return
        while self.num_analogue_models_applied <= index:
            self.analogue_models[self.num_analogue_models_applied].filter_signal(self)
            self.num_analogue_models_applied += 1

    def apply_all_analogue_models(self) -> None:
        self.apply_analogue_model(len(self.analogue_models) - 1)

    def __repr__(self) -> str:
        return (
            f"Signal(group_id={self.group_id!r}, reception=[{self.reception_start}, "
            f"{self.reception_end}), bins=[{self.data_start}, {self.data_end}), "
            f"layers={self.num_analogue_models_applied}/{len(self.analogue_models)})"
        )
