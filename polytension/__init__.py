"""Seed-reproducible animated triangle tessellations."""

__version__ = "0.1.0"
