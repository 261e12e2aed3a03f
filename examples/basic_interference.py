#!/usr/bin/env python3
"""Basic interference example.

Two overlapping receptions on a single-bin channel: A at 5 mW on [0, 10) s
and B at 3 mW on [5, 15) s.  Prints the interference extrema and plots the
combined level over time.
"""

from spectrasim.core import Signal, Spectrum
from spectrasim.toolbox import global_max, global_min, min_at_freq_index
from spectrasim.visualization import plot_interference_timeline


def main() -> None:
    # --- Spectrum: one 125 kHz LoRa channel ---
    spectrum = Spectrum.from_channel(868.1e6, 125e3, num_bins=1)

    # --- Receptions ---
    a = Signal(spectrum, [5.0], reception_start=0.0, reception_end=10.0, group_id="A")
    b = Signal(spectrum, [3.0], reception_start=5.0, reception_end=15.0, group_id="B")
    frames = [a, b]

    # --- Queries ---
    print("=" * 50)
    print("Interference Report")
    print("=" * 50)
    print(f"  {'max [0, 15)':>20s}: {global_max(0.0, 15.0, frames):.2f} mW")
    print(f"  {'min [0, 15)':>20s}: {global_min(0.0, 15.0, frames):.2f} mW")
    print(f"  {'min [0, 16)':>20s}: {global_min(0.0, 16.0, frames):.2f} mW")
    print(f"  {'bin 0 min [0, 4)':>20s}: {min_at_freq_index(0.0, 4.0, frames, 0):.2f} mW")
    print("=" * 50)

    plot_interference_timeline(frames, 0.0, 16.0, save_path="interference_timeline.png")
    print("Timeline saved: interference_timeline.png")


if __name__ == "__main__":
    main()
