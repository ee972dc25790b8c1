"""Timed knockout race tournaments stored in a JSON file."""

__version__ = "1.0.0"

__all__ = ["groups", "phases", "players", "records", "session", "store", "timing"]