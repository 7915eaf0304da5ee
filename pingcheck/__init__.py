"""Multi-target ping check for monitoring systems."""

__version__ = "0.4.0"
