"""Silent cinematic story frame engine."""

__version__ = "1.0.0"
