from .spectrum import Spectrum
from .signal import Signal

__all__ = ["Spectrum", "Signal"]
