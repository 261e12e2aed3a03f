#!/usr/bin/env python3
"""SINR and channel-clearance report for a small LoRa gateway scenario.

Three end devices transmit at 14 dBm over 8 bins of a 125 kHz channel.
Path loss and wall shadowing are attached as attenuation layers and only
applied when a query needs them.
"""

from spectrasim.config import ScenarioConfig
from spectrasim.propagation import linear_to_db
from spectrasim.toolbox import is_channel_power_below_threshold, min_sinr

TX_DBM = [14.0] * 8

SCENARIO = {
    "centre_frequency_hz": 868.1e6,
    "bandwidth_hz": 125e3,
    "num_bins": 8,
    "noise_figure_db": 6.0,
    "signals": [
        {
            "group_id": "Sensor-A", "reception_start": 0.000, "reception_end": 0.370,
            "power_dbm": TX_DBM,
            "attenuation": [
                {"kind": "log-distance", "distance_m": 300.0},
                {"kind": "obstacle", "material": "brick"},
            ],
        },
        {
            "group_id": "Sensor-B", "reception_start": 0.120, "reception_end": 0.490,
            "power_dbm": TX_DBM,
            "attenuation": [
                {"kind": "log-distance", "distance_m": 900.0},
                {"kind": "obstacle", "material": "concrete"},
            ],
        },
        {
            "group_id": "Sensor-C", "reception_start": 0.300, "reception_end": 0.670,
            "power_dbm": TX_DBM,
            "attenuation": [
                {"kind": "log-distance", "distance_m": 1500.0},
                {"kind": "obstacle", "material": "glass"},
            ],
        },
    ],
}


def main() -> None:
    cfg = ScenarioConfig(**SCENARIO)
    frames = cfg.build_signals()
    noise = cfg.noise_floor_mw()
    centre_bin = cfg.num_bins // 2

    # --- Carrier sense at the moment Sensor-C starts ---
    sensing = frames[2]
    clear = is_channel_power_below_threshold(
        sensing.reception_start, frames, centre_bin, threshold=noise * 10.0, exclude=sensing
    )
    print(f"Channel clear for {sensing.group_id}: {clear}")

    # --- Worst-case SINR per reception ---
    print("=" * 50)
    for frame in frames:
        sinr = min_sinr(frame.reception_start, frame.reception_end, frame, frames, noise)
        print(f"  {frame.group_id:>10s}: min SINR {float(linear_to_db(sinr)):6.1f} dB")
    print("=" * 50)


if __name__ == "__main__":
    main()
