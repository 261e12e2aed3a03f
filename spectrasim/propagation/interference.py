"""Noise-floor and power-unit helpers."""

from __future__ import annotations

import numpy as np

BOLTZMANN = 1.380649e-23  # J/K


def noise_power_dbm(bandwidth_hz: float, temperature_k: float = 290.0) -> float:
    """Thermal noise power in dBm.

    N = k·T·B  →  N(dBm) = 10·log10(k·T·B) + 30
    """
    n_watts = BOLTZMANN * temperature_k * bandwidth_hz
    return float(10.0 * np.log10(n_watts) + 30.0)


def dbm_to_mw(power_dbm: np.ndarray | float) -> np.ndarray | float:
    """dBm → linear milliwatts."""
    return 10.0 ** (np.asarray(power_dbm, dtype=np.float64) / 10.0)


def mw_to_dbm(power_mw: np.ndarray | float) -> np.ndarray | float:
    """Linear milliwatts → dBm (zero power maps to ``-inf``)."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return 10.0 * np.log10(np.asarray(power_mw, dtype=np.float64))


def linear_to_db(ratio: np.ndarray | float) -> np.ndarray | float:
    """Dimensionless power ratio (e.g. SINR) → dB."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return 10.0 * np.log10(np.asarray(ratio, dtype=np.float64))


def thermal_noise_mw(
    bandwidth_hz: float, noise_figure_db: float = 0.0, temperature_k: float = 290.0
) -> float:
    """Receiver noise floor in mW, ready to pass to :func:`~spectrasim.toolbox.min_sinr`."""
    return float(dbm_to_mw(noise_power_dbm(bandwidth_hz, temperature_k) + noise_figure_db))
