"""Carpool Tracker: a command-line manager for passengers, drivers and pools."""

__version__ = "1.0.0"
