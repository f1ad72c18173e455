"""Source tree line counting and diff classification."""

__version__ = "0.1.0"
