"""Interference and SINR statistics over overlapping, time-bounded signals.

All queries sweep the instants at which the set of active signals changes.
A signal is active at time *t* iff ``reception_start <= t < reception_end``
and windows are half-open ``[start, end)``.  Changes sharing a timestamp
are always applied together before the running total is sampled.

Nothing here keeps state between calls; the only side effect is the
attenuation applied to signals by :func:`is_channel_power_below_threshold`
and :func:`min_sinr`.  Callers must hold exclusive access to the signals
passed to those two functions for the duration of the call.
"""

from __future__ import annotations

import enum
import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..core.signal import CANCEL_RTOL, Signal

logger = logging.getLogger(__name__)


class ChangeType(enum.Enum):
    STARTING = "starting"
    ENDING = "ending"


@dataclass
class SignalChange:
    """A signal entering or leaving the active set at ``time``."""

    signal: Signal
    kind: ChangeType
    time: float


# ------------------------------------------------------------------
# Change extraction
# ------------------------------------------------------------------

def calculate_changes(
    start: float,
    end: float,
    signals: Sequence[Signal],
    exclude: Optional[Signal] = None,
) -> List[SignalChange]:
    """Unsorted change events of every signal overlapping ``[start, end)``.

    A point query (``start == end``) also picks up signals beginning
    exactly at that instant.  Ending events are only materialised when they
    fall strictly inside the window.
    """
    changes: List[SignalChange] = []
    for signal in signals:
        if signal is exclude:
            continue

        if start == end and signal.reception_start == start:
            changes.append(SignalChange(signal, ChangeType.STARTING, signal.reception_start))
            continue

        if signal.reception_start < end and signal.reception_end > start:
            changes.append(SignalChange(signal, ChangeType.STARTING, signal.reception_start))
            if signal.reception_end < end:
                changes.append(SignalChange(signal, ChangeType.ENDING, signal.reception_end))

    return changes


def _check_spectra(signals: Sequence[Signal]) -> None:
    spectrum = signals[0].spectrum
    for signal in signals:
        if signal.spectrum != spectrum:
            raise ValueError(f"{signal!r} is defined over a different spectrum than {signals[0]!r}")


# ------------------------------------------------------------------
# Sweep
# ------------------------------------------------------------------

def _sweep(
    start: float,
    changes: List[SignalChange],
    accumulator: Union[Signal, float],
    apply: Callable,
) -> Iterator[Tuple[float, Union[Signal, float]]]:
    """Apply *changes* to *accumulator* and yield it once per distinct timestamp.

    The first yield is the state at *start*: every change at or before
    *start* has been applied (signals already on air when the window opens).
    """
    changes = sorted(changes, key=lambda c: c.time)
    groups = itertools.groupby(changes, key=lambda c: c.time)

    pending = None
    for time, group in groups:
        if time > start:
            pending = (time, list(group))
            break
        for change in group:
            accumulator = apply(accumulator, change)
    yield start, accumulator

    if pending is None:
        return
    for time, group in itertools.chain([pending], groups):
        for change in group:
            accumulator = apply(accumulator, change)
        yield time, accumulator


def _apply_signal(accumulator: Signal, change: SignalChange) -> Signal:
    if change.kind is ChangeType.ENDING:
        accumulator -= change.signal
    else:
        accumulator += change.signal
    return accumulator


def _scalar_applier(freq_index: int) -> Callable[[float, SignalChange], float]:
    def apply(level: float, change: SignalChange) -> float:
        power = change.signal.at(freq_index)
        if change.kind is ChangeType.ENDING:
            level -= power
            return 0.0 if abs(level) <= CANCEL_RTOL * abs(power) else level
        return level + power

    return apply


def _spectrum_levels(
    start: float,
    end: float,
    signals: Sequence[Signal],
    measure: Callable[[Signal], float],
) -> Iterator[float]:
    changes = calculate_changes(start, end, signals)
    logger.debug("Spectrum sweep over [%s, %s): %d changes", start, end, len(changes))
    if not changes:
        return
    _check_spectra([c.signal for c in changes])
    accumulator = Signal(changes[0].signal.spectrum)
    for _, interference in _sweep(start, changes, accumulator, _apply_signal):
        yield measure(interference)


def _bin_levels(
    start: float,
    end: float,
    signals: Sequence[Signal],
    freq_index: int,
    exclude: Optional[Signal] = None,
) -> Iterator[float]:
    changes = calculate_changes(start, end, signals, exclude)
    logger.debug(
        "Bin %d sweep over [%s, %s): %d changes", freq_index, start, end, len(changes)
    )
    if not changes:
        return
    _check_spectra([c.signal for c in changes])
    for _, level in _sweep(start, changes, 0.0, _scalar_applier(freq_index)):
        yield level


def global_max(start: float, end: float, signals: Sequence[Signal]) -> float:
    """Highest combined power level of any bin at any instant of ``[start, end)``.

    Returns 0 when *signals* is empty or nothing is on air in the window.
    """
    return max(_spectrum_levels(start, end, signals, Signal.get_max), default=0.0)


def global_min(start: float, end: float, signals: Sequence[Signal]) -> float:
    """Lowest combined power level, over the bins carrying data, in ``[start, end)``."""
    return min(_spectrum_levels(start, end, signals, Signal.get_data_min), default=0.0)


def min_at_freq_index(
    start: float,
    end: float,
    signals: Sequence[Signal],
    freq_index: int,
    exclude: Optional[Signal] = None,
) -> float:
    """Lowest combined power at bin *freq_index* during ``[start, end)``.

    *exclude* (typically the frame being received) does not contribute.
    """
    return min(_bin_levels(start, end, signals, freq_index, exclude), default=0.0)


def interference_trace(
    start: float,
    end: float,
    signals: Sequence[Signal],
    freq_index: Optional[int] = None,
    exclude: Optional[Signal] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Combined interference as a step function over ``[start, end)``.

    Returns ``(times, levels)`` where ``levels[i]`` holds from ``times[i]``
    until the next entry.  Without *freq_index* the level is the maximum
    across the spectrum.
    """
    changes = calculate_changes(start, end, signals, exclude)
    if not changes:
        return np.array([start], dtype=np.float64), np.zeros(1)
    _check_spectra([c.signal for c in changes])

    if freq_index is None:
        samples = [
            (t, acc.get_max())
            for t, acc in _sweep(start, changes, Signal(changes[0].signal.spectrum), _apply_signal)
        ]
    else:
        samples = list(_sweep(start, changes, 0.0, _scalar_applier(freq_index)))
    times, levels = zip(*samples)
    return np.asarray(times, dtype=np.float64), np.asarray(levels, dtype=np.float64)


# ------------------------------------------------------------------
# Max-interference envelope
# ------------------------------------------------------------------

def max_interference(
    start: float,
    end: float,
    reference: Signal,
    interferers: Sequence[Signal],
) -> Signal:
    """Per-bin worst-case interference seen by *reference* during ``[start, end]``.

    *interferers* must be sorted by reception start.  Members of the
    reference's transmission group are ignored.  Active interferers are
    kept in a heap ordered by reception end, so each start event costs
    O(log n) instead of a rescan.

    Raises
    ------
    ValueError
        If *interferers* are not sorted by reception start or use another
        spectrum than *reference*.
    """
    spectrum = reference.spectrum
    envelope = Signal(spectrum)
    current = Signal(spectrum)
    endings: List[Tuple[float, int, Signal]] = []
    current_time = -np.inf

    for seq, signal in enumerate(interferers):
        if signal.group_id == reference.group_id:
            continue
        if signal.reception_end <= start or signal.reception_start > end:
            continue
        if signal.reception_start < current_time:
            raise ValueError(
                f"Interferers must be sorted by reception start: {signal!r} "
                f"starts before {current_time}"
            )
        if signal.spectrum != spectrum:
            raise ValueError(f"{signal!r} is defined over a different spectrum than the reference")

        current_time = signal.reception_start
        if current_time >= end:
            break

        while endings and endings[0][0] <= current_time:
            _, _, ended = heapq.heappop(endings)
            current -= ended
            logger.debug("Interferer %r left at %s", ended, current_time)

        heapq.heappush(endings, (signal.reception_end, seq, signal))
        current += signal

        # only bins covered by the new interferer can have grown
        envelope.maximum(current, bins=signal.data_slice)

    return envelope


# ------------------------------------------------------------------
# Clearance check
# ------------------------------------------------------------------

def _power_sum(signals: Sequence[Signal], freq_index: int) -> float:
    return float(sum(s.at(freq_index) for s in signals))


def is_channel_power_below_threshold(
    now: float,
    signals: Sequence[Signal],
    freq_index: int,
    threshold: float,
    exclude: Optional[Signal] = None,
) -> bool:
    """Whether total power at bin *freq_index* and instant *now* is below *threshold*.

    Attenuation layers are applied one index at a time across all active
    interferers, and the check returns as soon as the sum falls below the
    threshold.  Layers that were not needed stay unapplied.

    Raises
    ------
    ValueError
        If the active interferers use different spectra, or do not all
        carry as many attenuation layers as the first signal of *signals*.
    """
    if not signals:
        return True

    active = [
        s for s in signals
        if s.reception_start <= now < s.reception_end and s is not exclude
    ]
    if active:
        _check_spectra(active)

    if _power_sum(active, freq_index) < threshold:
        return True

    layer_count = len(signals[0].analogue_models)
    for signal in active:
        if len(signal.analogue_models) != layer_count:
            raise ValueError(
                f"{signal!r} carries {len(signal.analogue_models)} attenuation layers, "
                f"expected {layer_count}"
            )

    for layer in range(layer_count):
        for signal in active:
            signal.apply_analogue_model(layer)
        if _power_sum(active, freq_index) < threshold:
            logger.debug("Channel clear at %s after attenuation layer %d", now, layer)
            return True

    return False


# ------------------------------------------------------------------
# SINR
# ------------------------------------------------------------------

def min_sinr(
    start: float,
    end: float,
    reference: Signal,
    interferers: Sequence[Signal],
    noise: float,
) -> float:
    """Minimum per-bin SINR of *reference* during ``[start, end]``.

    All attenuation layers of the reference and the interferers are applied
    first.  Interference per bin is the worst case from
    :func:`max_interference`.

    Raises
    ------
    ValueError
        If the window is not contained in the reference's reception.
    """
    if start < reference.reception_start or end > reference.reception_end:
        raise ValueError(
            f"Window [{start}, {end}] exceeds reception of {reference!r}"
        )

    reference.apply_all_analogue_models()
    for signal in interferers:
        signal.apply_all_analogue_models()

    interference = max_interference(start, end, reference, interferers)
    power = reference.data
    with np.errstate(divide="ignore", invalid="ignore"):
        sinr = power / (interference.values[reference.data_slice] + noise)
    # 0/0 bins come out as NaN and are skipped by fmin
    return float(np.fmin.reduce(sinr, initial=np.inf))


min_at_frequency = min_at_freq_index
is_below_threshold = is_channel_power_below_threshold
