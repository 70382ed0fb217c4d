"""Image region-of-interest picker with exact pixel and normalised coordinates."""

__version__ = "0.1.0"
