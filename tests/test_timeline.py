"""Tests for the interference timeline plot."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from spectrasim.core import Signal, Spectrum  # noqa: E402
from spectrasim.visualization import plot_interference_timeline  # noqa: E402


@pytest.fixture
def signals():
    spec = Spectrum((868.0e6,))
    return [
        Signal(spec, [5.0], reception_start=0.0, reception_end=10.0, group_id="A"),
        Signal(spec, [3.0], reception_start=5.0, reception_end=15.0, group_id="B"),
    ]


class TestTimeline:
    def test_returns_two_panel_figure(self, signals):
        fig = plot_interference_timeline(signals, 0.0, 15.0)
        assert len(fig.axes) == 2
        assert "max over spectrum" in fig.axes[1].get_title()
        plt.close(fig)

    def test_bin_and_exclude(self, signals):
        fig = plot_interference_timeline(signals, 0.0, 15.0, freq_index=0, exclude=signals[0])
        assert "bin 0" in fig.axes[1].get_title()
        plt.close(fig)

    def test_save(self, signals, tmp_path):
        out = tmp_path / "timeline.png"
        fig = plot_interference_timeline(signals, 0.0, 15.0, save_path=out)
        assert out.exists()
        plt.close(fig)
