"""EverNest bedtime story service."""

__version__ = "0.1.0"
