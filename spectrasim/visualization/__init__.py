from .timeline import plot_interference_timeline

__all__ = ["plot_interference_timeline"]
