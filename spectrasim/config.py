"""Scenario description: spectrum, receiver noise and in-flight signals."""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, model_validator

from .core import Signal, Spectrum
from .propagation import (
    AnalogueModel,
    ConstantGain,
    FreeSpacePathLoss,
    LogDistancePathLoss,
    ObstacleShadowing,
    dbm_to_mw,
    thermal_noise_mw,
)


class AttenuationConfig(BaseModel):
    kind: Literal["free-space", "log-distance", "obstacle", "gain"]
    distance_m: float = 1.0
    exponent: float = 2.7
    d0: float = 1.0
    attenuation_db: float = 0.0
    material: Optional[str] = None
    gain_db: float = 0.0

    def build(self) -> AnalogueModel:
        if self.kind == "free-space":
            return FreeSpacePathLoss(self.distance_m)
        if self.kind == "log-distance":
            return LogDistancePathLoss(self.distance_m, exponent=self.exponent, d0=self.d0)
        if self.kind == "obstacle":
            if self.material:
                return ObstacleShadowing.from_material(self.material)
            return ObstacleShadowing(self.attenuation_db)
        return ConstantGain(self.gain_db)


class SignalConfig(BaseModel):
    """One reception; power is given either in dBm or in mW per bin."""

    group_id: Optional[Union[int, str]] = None
    reception_start: float
    reception_end: float
    data_start: int = 0
    power_dbm: Optional[List[float]] = None
    power_mw: Optional[List[float]] = None
    attenuation: List[AttenuationConfig] = []

    @model_validator(mode="after")
    def _check(self) -> "SignalConfig":
        if self.reception_end < self.reception_start:
            raise ValueError("reception_end must not precede reception_start")
        if (self.power_dbm is None) == (self.power_mw is None):
            raise ValueError("give exactly one of power_dbm / power_mw")
        return self

    def build(self, spectrum: Spectrum) -> Signal:
        values = self.power_mw if self.power_mw is not None else dbm_to_mw(self.power_dbm)
        return Signal(
            spectrum,
            values,
            data_start=self.data_start,
            reception_start=self.reception_start,
            reception_end=self.reception_end,
            group_id=self.group_id,
            analogue_models=[a.build() for a in self.attenuation],
        )


class ScenarioConfig(BaseModel):
    """Receiver spectrum and noise figure plus the signals on air.

    The spectrum is either an explicit ``frequencies_hz`` list or
    ``num_bins`` even bins across ``bandwidth_hz`` around
    ``centre_frequency_hz``.
    """

    centre_frequency_hz: float = 868.0e6
    bandwidth_hz: float = 125.0e3
    num_bins: int = 1
    frequencies_hz: Optional[List[float]] = None
    noise_figure_db: float = 6.0
    temperature_k: float = 290.0
    signals: List[SignalConfig] = []

    def build_spectrum(self) -> Spectrum:
        if self.frequencies_hz is not None:
            return Spectrum(tuple(self.frequencies_hz))
        return Spectrum.from_channel(self.centre_frequency_hz, self.bandwidth_hz, self.num_bins)

    def build_signals(self, spectrum: Optional[Spectrum] = None) -> List[Signal]:
        """Signals sorted by reception start."""
        spectrum = spectrum or self.build_spectrum()
        signals = [s.build(spectrum) for s in self.signals]
        signals.sort(key=lambda s: s.reception_start)
        return signals

    def noise_floor_mw(self) -> float:
        return thermal_noise_mw(
            self.bandwidth_hz, noise_figure_db=self.noise_figure_db, temperature_k=self.temperature_k
        )


def load_scenario(path: str | Path) -> ScenarioConfig:
    """Read a :class:`ScenarioConfig` from a JSON file."""
    return ScenarioConfig.model_validate_json(Path(path).read_text(encoding="utf-8"))
