from .signal_utils import (
    ChangeType,
    SignalChange,
    calculate_changes,
    global_max,
    global_min,
    interference_trace,
    is_below_threshold,
    is_channel_power_below_threshold,
    max_interference,
    min_at_freq_index,
    min_at_frequency,
    min_sinr,
)

__all__ = [
    "ChangeType", "SignalChange", "calculate_changes",
    "global_max", "global_min", "min_at_freq_index", "min_at_frequency",
    "interference_trace", "max_interference",
    "is_channel_power_below_threshold", "is_below_threshold", "min_sinr",
]
