"""Shafi'i faraid inheritance calculator."""

__version__ = "1.0.0"
