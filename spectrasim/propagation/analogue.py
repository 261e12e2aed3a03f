"""Analogue (attenuation) models applied layer by layer to a :class:`Signal`.

Every model scales the signal's valid bins in place by a per-bin linear
factor.  Path-loss models evaluate their loss at each bin's own centre
frequency, so wide spectra see a frequency-dependent tilt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

import numpy as np

if TYPE_CHECKING:
    from spectrasim.core.signal import Signal


# ---------------------------------------------------------------------------
# Material presets: material name → attenuation in dB
# ---------------------------------------------------------------------------
MATERIAL_ATTENUATION: Dict[str, float] = {
    "drywall": 3.0,
    "wood": 4.0,
    "glass": 2.0,
    "concrete": 12.0,
    "brick": 10.0,
    "metal": 20.0,
}


def free_space_loss_db(distance_m: float, freq_mhz: np.ndarray | float) -> np.ndarray:
    """Friis free-space loss, FSPL(dB) = 20·log10(d_km) + 20·log10(f_MHz) + 32.44."""
    d_km = max(float(distance_m) / 1000.0, 1e-6)
    return 20.0 * np.log10(d_km) + 20.0 * np.log10(np.asarray(freq_mhz, dtype=np.float64)) + 32.44


def log_distance_loss_db(
    distance_m: float, freq_mhz: np.ndarray | float, exponent: float = 2.7, d0: float = 1.0
) -> np.ndarray:
    """PL(d) = FSPL(d0) + 10·n·log10(d/d0), with *d* clipped to at least *d0*."""
    d = max(float(distance_m), d0)
    return free_space_loss_db(d0, freq_mhz) + 10.0 * exponent * np.log10(d / d0)


class AnalogueModel:
    """One attenuation layer.

    Subclasses implement :meth:`loss_db`; :meth:`filter_signal` turns the
    loss into a linear factor and scales the signal's data range.
    """

    def loss_db(self, freq_mhz: np.ndarray) -> np.ndarray | float:
        raise NotImplementedError

    def filter_signal(self, signal: Signal) -> None:
        if signal.data_end <= signal.data_start:
            return
        freq_mhz = signal.spectrum.frequencies_mhz[signal.data_slice]
        factor = 10.0 ** (-np.asarray(self.loss_db(freq_mhz), dtype=np.float64) / 10.0)
        signal.values[signal.data_slice] *= factor


class FreeSpacePathLoss(AnalogueModel):
    """Free-space path loss over a fixed sender-receiver distance (m)."""

    def __init__(self, distance_m: float) -> None:
        self.distance_m = distance_m

    def loss_db(self, freq_mhz: np.ndarray) -> np.ndarray:
        return free_space_loss_db(self.distance_m, freq_mhz)


class LogDistancePathLoss(AnalogueModel):
    """Log-distance path loss.

    Parameters
    ----------
    distance_m : float
        Sender-receiver distance in metres.
    exponent : float
        Path-loss exponent (default 2.7, urban).
    d0 : float
        Reference distance in metres.
    """

    def __init__(self, distance_m: float, exponent: float = 2.7, d0: float = 1.0) -> None:
        self.distance_m = distance_m
        self.exponent = exponent
        self.d0 = d0

    def loss_db(self, freq_mhz: np.ndarray) -> np.ndarray:
        return log_distance_loss_db(self.distance_m, freq_mhz, self.exponent, self.d0)


class ObstacleShadowing(AnalogueModel):
    """Flat attenuation from obstacles crossed by the line of sight."""

    def __init__(self, attenuation_db: float, material: str = "custom") -> None:
        self.attenuation_db = attenuation_db
        self.material = material

    @classmethod
    def from_material(cls, material: str) -> "ObstacleShadowing":
        """Create a layer using a preset material attenuation.

        Raises
        ------
        ValueError
            If *material* is not a key of :data:`MATERIAL_ATTENUATION`.
        """
        att = MATERIAL_ATTENUATION.get(material.lower())
        if att is None:
            raise ValueError(
                f"Unknown material '{material}'. Choose from: "
                + ", ".join(sorted(MATERIAL_ATTENUATION))
            )
        return cls(attenuation_db=att, material=material.lower())

    def loss_db(self, freq_mhz: np.ndarray) -> float:
        return self.attenuation_db


class ConstantGain(AnalogueModel):
    """Frequency-flat gain (positive) or loss (negative) in dB, e.g. antenna gain."""

    def __init__(self, gain_db: float) -> None:
        self.gain_db = gain_db

    def loss_db(self, freq_mhz: np.ndarray) -> float:
        return -self.gain_db
