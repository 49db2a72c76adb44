"""Client for the Gemina invoice recognition API."""

__version__ = "0.1.0"
