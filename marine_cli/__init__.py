"""Stormglass marine forecast fetcher and dashboard."""

__version__ = "0.1.0"
