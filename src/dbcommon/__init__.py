"""Common database client utilities."""

__version__ = "0.1.0"
