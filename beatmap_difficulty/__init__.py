"""Aim and speed strain calculation for rhythm game beatmaps."""

__version__ = "0.1.0"
