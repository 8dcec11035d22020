"""Naming conventions and remote-state bootstrap for a landing zone."""

__version__ = "0.1.0"
