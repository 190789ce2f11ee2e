"""Find peaks and volcanoes near a point of interest."""

__version__ = "0.1.0"
